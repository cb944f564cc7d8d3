from __future__ import annotations

import csv
import json
from pathlib import Path

from bigidle.formatting import format_number
from bigidle.persistence import encode_state
from bigidle.simulation import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export the snapshot series as CSV.

    Columns: time, counter, production, counter_display, production_display.
    Big numbers are written as exact decimal strings.
    """
    with open(str(path), "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["time", "counter", "production", "counter_display", "production_display"]
        )
        for s in report.snapshots:
            writer.writerow([
                s.time,
                s.counter.to_decimal_string(),
                s.production.to_decimal_string(),
                format_number(s.counter),
                format_number(s.production),
            ])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export the full simulation report as JSON."""
    data = {
        "total_time": report.total_time,
        "ticks": report.ticks,
        "upgrades": report.upgrades,
        "saves": report.saves,
        "final_state": (
            json.loads(encode_state(report.final_state))
            if report.final_state is not None
            else None
        ),
        "snapshots": [
            {
                "time": s.time,
                "counter": s.counter.to_decimal_string(),
                "production": s.production.to_decimal_string(),
            }
            for s in report.snapshots
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
