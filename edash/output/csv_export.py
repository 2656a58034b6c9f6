"""
CSV and JSON export for EDASH.

Handles the --export and --json flags.
"""

import csv
import json
from pathlib import Path
from typing import List

from edash.heatmap.engine import HeatmapEngine

CSV_HEADERS = ['day', 'hour', 'value', 'intensity']


def export_grid(engine: HeatmapEngine, output_path: Path) -> int:
    """Export the normalized grid to CSV, one row per cell in grid order."""
    rows = [
        {
            'day': cell.day.value,
            'hour': cell.hour,
            'value': round(cell.value, 4),
            'intensity': round(cell.intensity, 4) if cell.intensity is not None else None,
        }
        for cell in engine.cells
    ]
    return _write_csv(output_path, rows, CSV_HEADERS)


def _write_csv(output_path: Path, rows: List[dict], headers: List[str]) -> int:
    """Write rows to CSV file."""
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(headers)

        for row in rows:
            writer.writerow([row[h] if row[h] is not None else '' for h in headers])

    return len(rows)


def export_report(engine: HeatmapEngine, output_path: str) -> str:
    """
    Export the heatmap grid to CSV.

    Returns:
        Status message
    """
    path = Path(output_path)
    count = export_grid(engine, path)
    return f"Exported {count} rows to {path}"


def to_json(engine: HeatmapEngine, indent: int = 2) -> str:
    """Serialize the full heatmap payload as JSON."""
    return json.dumps(engine.to_dict(), indent=indent, ensure_ascii=False)
