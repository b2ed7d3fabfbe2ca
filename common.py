"""
Output layout shared by every report step: where tables, figures and the
assembled report are written, plus the helpers that write them.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import matplotlib.pyplot as plt
import pandas as pd


@dataclass
class ReportArtifacts:
    output_dir: Path
    reports_dir: Path
    figures_dir: Path
    interactive_dir: Path
    report_path: Path


def ensure_output_dirs(output_dir: Path | str) -> ReportArtifacts:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    reports_dir = output_dir / "reports"
    figures_dir = output_dir / "figures"
    interactive_dir = output_dir / "interactive"
    reports_dir.mkdir(exist_ok=True)
    figures_dir.mkdir(exist_ok=True)
    interactive_dir.mkdir(exist_ok=True)
    return ReportArtifacts(
        output_dir=output_dir,
        reports_dir=reports_dir,
        figures_dir=figures_dir,
        interactive_dir=interactive_dir,
        report_path=output_dir / "report.html",
    )


def save_json(obj: Dict[str, Any], path: Path) -> None:
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False, default=str), encoding="utf-8")


def save_table(
    df: pd.DataFrame,
    art: ReportArtifacts,
    name: str,
    caption: str,
    digits: Optional[int] = None,
    max_rows: int = 15,
) -> Path:
    """
    Save a result table as CSV (all rows) and as a PNG table image
    (first ``max_rows`` rows, ``caption`` as title; no image for a table
    without columns).

    Returns the CSV path.
    """
    table = df.round(digits) if digits is not None else df
    csv_path = art.reports_dir / f"{name}.csv"
    table.to_csv(csv_path, index=False)

    if table.columns.empty:
        return csv_path

    shown = table.head(max_rows)
    fig_h = 2 + 0.3 * max(3, len(shown))
    fig, ax = plt.subplots(figsize=(8, fig_h))
    ax.axis("off")
    ax.set_title(caption, fontweight="bold", pad=10)
    cells = shown.astype(str).values.tolist() or [[""] * len(shown.columns)]
    tbl = ax.table(cellText=cells, colLabels=list(shown.columns), loc="center")
    tbl.auto_set_font_size(False)
    tbl.set_fontsize(9)
    tbl.scale(1, 1.2)
    fig.tight_layout()
    fig.savefig(art.figures_dir / f"{name}_table.png", dpi=150)
    plt.close(fig)
    return csv_path
