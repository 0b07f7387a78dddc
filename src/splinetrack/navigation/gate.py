"""One-shot completion gate for scene transitions after a finished run."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class CompletionSource(Protocol):
    """Anything that reports run completion."""

    def is_complete(self) -> bool:
        """Whether the run has finished.

        Returns:
            Completion flag.
        """
        ...


class CompletionGate:
    """Invoke a callback once, the first time a source reports completion.

    A looping navigator reports completion after its first wrap, so a gate on
    such a navigator opens after one lap.

    Args:
        source: Completion source, usually a waypoint navigator.
        on_complete: Callback run when the gate opens.
    """

    def __init__(self, source: CompletionSource, on_complete: Callable[[], None]) -> None:
        """Create a closed gate.

        Args:
            source: Completion source.
            on_complete: Callback run when the gate opens.
        """
        self.source = source
        self.on_complete = on_complete
        self.opened = False

    def poll(self) -> bool:
        """Check the source once per tick.

        Returns:
            ``True`` on the tick the gate opens.
        """
        if self.opened or not self.source.is_complete():
            return False
        self.opened = True
        logger.info("Run complete, triggering transition")
        self.on_complete()
        return True

    def rearm(self) -> None:
        """Close the gate so it can fire again."""
        self.opened = False
