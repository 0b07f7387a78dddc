"""Export helpers for placement batches and navigation runs."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from splinetrack.analysis.summary import RunSummary, summarize_placements
from splinetrack.placement.engine import PlacementReport


def export_run_summary_json(summary: RunSummary, path: str | Path) -> None:
    """Persist a run summary as JSON.

    Args:
        summary: Summary returned by :func:`splinetrack.analysis.compute_run_summary`.
        path: Output file path for the JSON document.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(asdict(summary), indent=2), encoding="utf-8")


def export_placements_json(report: PlacementReport, path: str | Path) -> None:
    """Persist a placement batch with per-barrier poses as JSON.

    Args:
        report: Report returned by ``generate_barriers``.
        path: Output file path for the JSON document.
    """
    barriers = [
        {
            "name": placement.entity.name,
            "side": placement.side.value,
            "index": placement.sequence_index,
            "t": placement.t,
            "position": [float(value) for value in placement.position],
            "rotation": [float(value) for value in placement.rotation],
        }
        for placement in report.placements
    ]
    document = {"summary": asdict(summarize_placements(report)), "barriers": barriers}
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(document, indent=2), encoding="utf-8")
