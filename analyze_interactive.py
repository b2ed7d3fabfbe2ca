"""
Interactive, animated bubble chart (plotly): life expectancy against
log10 GDP per capita, one frame per year, bubble size by population.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from common import ReportArtifacts
from explore_data import CONTINENT_COLORS

logger = logging.getLogger(__name__)

BUBBLE_HTML_NAME = "gapminder_bubbles.html"
SIZE_MAX = 60

MARKER_STYLE = dict(
    symbol="circle",
    sizemode="diameter",
    line=dict(width=2, color="#FFFFFF"),
)


def _hover_text(df: pd.DataFrame) -> pd.Series:
    return (
        "Country: " + df["country"].astype(str)
        + "<br>Life Expectancy: " + df["lifeExp"].round(2).astype(str)
        + "<br>GDP per capita: " + df["gdpPercap"].round(2).astype(str)
        + "<br>Pop.: " + df["pop"].map(lambda p: f"{int(p):,}")
    )


def _padded_range(s: pd.Series, pad: float) -> list:
    return [float(s.min()) - pad, float(s.max()) + pad]


def build_bubble_chart(df: pd.DataFrame) -> go.Figure:
    required = ["country", "continent", "year", "lifeExp", "pop", "gdpPercap", "lgdppc"]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    data = df.assign(
        continent=df["continent"].astype(str),
        hover=_hover_text(df),
    ).sort_values(["year", "continent", "country"])

    fig = px.scatter(
        data,
        x="lgdppc",
        y="lifeExp",
        color="continent",
        color_discrete_map=CONTINENT_COLORS,
        category_orders={"continent": list(CONTINENT_COLORS)},
        size="pop",
        size_max=SIZE_MAX,
        animation_frame="year",
        animation_group="country",
        custom_data=["hover"],
        range_x=_padded_range(data["lgdppc"], 0.1),
        range_y=_padded_range(data["lifeExp"], 5),
    )
    hovertemplate = "%{customdata[0]}<extra></extra>"
    # diameter mode: the largest population maps to SIZE_MAX pixels
    marker = dict(MARKER_STYLE, sizeref=float(data["pop"].max()) / SIZE_MAX)
    fig.update_traces(marker=marker, hovertemplate=hovertemplate)
    # px only styles the first frame; frames carry their own trace copies
    for frame in fig.frames:
        for trace in frame.data:
            trace.marker.update(marker)
            trace.hovertemplate = hovertemplate

    fig.update_layout(
        title="Life Expectation X GDP Per Capita",
        xaxis=dict(title="GDP per capita (US$, log)"),
        yaxis=dict(title="Life Expectancy (years)"),
        legend_title_text="continent",
    )
    return fig


def write_bubble_chart(df: pd.DataFrame, art: ReportArtifacts) -> Tuple[Path, go.Figure]:
    fig = build_bubble_chart(df)
    path = art.interactive_dir / BUBBLE_HTML_NAME
    fig.write_html(path, include_plotlyjs="cdn", auto_play=False)
    logger.info("Interactive chart written to %s (%d frames)", path, len(fig.frames))
    return path, fig
