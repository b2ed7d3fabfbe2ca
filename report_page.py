"""
Assemble the report as one HTML page: prose, tables, inlined PNG figures and
the interactive plotly chart.
"""
from __future__ import annotations

import base64
import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go

from common import ReportArtifacts

logger = logging.getLogger(__name__)

PAGE_STYLE = """
body { font-family: Montserrat, Helvetica, Arial, sans-serif; color: #333; max-width: 960px;
       margin: 0 auto; padding: 0 1.5em 3em; line-height: 1.5; }
header { background: #2c3e50; color: #fff; padding: 2em 1.5em; margin: 0 -1.5em 2em; }
header p { margin: 0.3em 0 0; opacity: 0.85; }
table.dataframe { border-collapse: collapse; font-size: 0.85em; margin: 0.5em 0 1.5em; }
table.dataframe th, table.dataframe td { border-bottom: 1px solid #ddd; padding: 0.3em 0.8em; }
.caption { font-weight: bold; margin-top: 1.2em; }
img { max-width: 100%; }
"""


@dataclass
class ReportSection:
    title: str
    body: str = ""
    tables: List[Tuple[str, pd.DataFrame]] = field(default_factory=list)
    figures: List[Path] = field(default_factory=list)
    interactive: Optional[go.Figure] = None


def _table_html(caption: str, df: pd.DataFrame, max_rows: int) -> str:
    shown = df.head(max_rows)
    note = ""
    if len(df) > max_rows:
        note = f"<p><em>Showing {max_rows} of {len(df)} rows.</em></p>"
    return (
        f'<p class="caption">{html.escape(caption)}</p>'
        + shown.to_html(index=False, float_format=lambda v: f"{v:,.2f}", border=0)
        + note
    )


def _figure_html(path: Path) -> str:
    encoded = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f'<img src="data:image/png;base64,{encoded}" alt="{html.escape(Path(path).stem)}">'


def render_section(section: ReportSection, max_rows: int = 15) -> str:
    parts = [f"<section><h2>{html.escape(section.title)}</h2>"]
    if section.body:
        parts.extend(f"<p>{html.escape(p.strip())}</p>" for p in section.body.split("\n\n") if p.strip())
    parts.extend(_table_html(caption, df, max_rows) for caption, df in section.tables)
    parts.extend(_figure_html(p) for p in section.figures)
    if section.interactive is not None:
        parts.append(section.interactive.to_html(full_html=False, include_plotlyjs="cdn", auto_play=False))
    parts.append("</section>")
    return "\n".join(parts)


def render_report(sections: List[ReportSection], art: ReportArtifacts, meta: Dict[str, Any]) -> Path:
    title = html.escape(str(meta.get("title", "Report")))
    description = html.escape(str(meta.get("description", "")))
    date = html.escape(str(meta.get("date", "")))
    categories = ", ".join(html.escape(str(c)) for c in meta.get("categories", []))

    page = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        f"<title>{title}</title>",
        f"<style>{PAGE_STYLE}</style></head><body>",
        f"<header><h1>{title}</h1>",
    ]
    if description:
        page.append(f"<p>{description}</p>")
    if date or categories:
        page.append(f"<p>{date}{' | ' if date and categories else ''}{categories}</p>")
    page.append("</header>")
    page.extend(render_section(s) for s in sections)
    page.append("</body></html>")

    art.report_path.write_text("\n".join(page), encoding="utf-8")
    logger.info("Report written to %s (%d sections)", art.report_path, len(sections))
    return art.report_path
