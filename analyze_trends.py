"""
Static charts of the report (matplotlib + seaborn), saved as PNG under
``figures_dir``:

- gdp_life_scatter_<year>.png: log10(GDP per capita) vs life expectancy
  for one year, with a least-squares trend line
- world_life_average.png: world average life expectancy per year
- continent_life_average.png: average life expectancy per continent
- continent_gdp_average.png: average GDP per capita per continent (log axis)
- selected_countries.png: life expectancy vs GDP per capita paths, a few
  countries highlighted over all others
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd
import seaborn as sns
from scipy.stats import linregress, pearsonr, spearmanr

from common import ReportArtifacts, save_json, save_table
from explore_data import CONTINENT_COLORS

logger = logging.getLogger(__name__)

SOURCE_CAPTION = "Source: Gapminder and World Bank Open Data"
GDP_LOG_LABEL = "GDP Per Capita (Log, US$2010)"
LIFE_LABEL = "Life expectancy at birth"
TEXT_COLOR = "#333333"


def apply_theme(font_family: str = "sans-serif") -> None:
    """Minimal theme: light grid, gray text, legend under the plot."""
    sns.set_theme(
        style="whitegrid",
        rc={
            "font.family": font_family,
            "font.size": 14,
            "text.color": TEXT_COLOR,
            "axes.labelcolor": TEXT_COLOR,
            "axes.labelsize": 14,
            "axes.titlesize": 16,
            "axes.edgecolor": "white",
            "xtick.color": TEXT_COLOR,
            "ytick.color": TEXT_COLOR,
            "legend.fontsize": 12,
            "legend.frameon": False,
        },
    )


def _legend_bottom(ax, ncol: int = 5) -> None:
    handles, labels = ax.get_legend_handles_labels()
    if not handles:
        return
    ax.legend(handles, labels, loc="upper center", bbox_to_anchor=(0.5, -0.15),
              ncol=min(ncol, len(labels)), frameon=False)


def _finish(fig, path: Path) -> Path:
    fig.text(0.99, 0.01, SOURCE_CAPTION, ha="right", va="bottom", fontsize=10, color="gray")
    fig.tight_layout(rect=(0, 0.03, 1, 1))
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def plot_gdp_life_scatter(df: pd.DataFrame, art: ReportArtifacts, year: int = 2007) -> Dict[str, Any]:
    """Scatter + OLS line for one year; returns the fit and the figure path."""
    if "lgdppc" not in df.columns:
        raise ValueError("Column 'lgdppc' not found; derive it with add_log_gdp first")
    subset = df[df["year"] == year]
    if subset.empty:
        raise ValueError(f"No rows for year={year}")

    fit = linregress(subset["lgdppc"], subset["lifeExp"])
    result = {
        "year": int(year),
        "n": int(len(subset)),
        "slope": float(fit.slope),
        "intercept": float(fit.intercept),
        "r": float(fit.rvalue),
        "r2": float(fit.rvalue ** 2),
        "p_value": float(fit.pvalue),
        "stderr": float(fit.stderr),
    }
    save_json(result, art.reports_dir / f"gdp_life_fit_{year}.json")

    fig, ax = plt.subplots(figsize=(9, 6))
    sns.regplot(
        data=subset, x="lgdppc", y="lifeExp", ci=None, ax=ax,
        scatter_kws={"s": 25, "color": "black"},
        line_kws={"color": "#3366FF", "lw": 1.5},
    )
    ax.set_title(
        f"Life Expectancy X GDP Per Capita, {year}\n"
        "Relationship between life expectancy and GDP per capita",
        loc="left",
    )
    ax.set_xlabel(GDP_LOG_LABEL)
    ax.set_ylabel(LIFE_LABEL)
    result["path"] = str(_finish(fig, art.figures_dir / f"gdp_life_scatter_{year}.png"))
    return result


def world_life_average(df: pd.DataFrame) -> pd.DataFrame:
    return df.groupby("year", as_index=False).agg(mean=("lifeExp", "mean"))


def plot_world_life_average(df: pd.DataFrame, art: ReportArtifacts) -> Path:
    gap_life = world_life_average(df)
    fig, ax = plt.subplots(figsize=(9, 5))
    sns.lineplot(data=gap_life, x="year", y="mean", color="black", ax=ax)
    sns.scatterplot(data=gap_life, x="year", y="mean", color="black", ax=ax)
    ax.set_title("Average life expectancy, world (1952-2007)", loc="left")
    ax.set_xlabel("")
    ax.set_ylabel(LIFE_LABEL)
    return _finish(fig, art.figures_dir / "world_life_average.png")


def continent_life_average(df: pd.DataFrame) -> pd.DataFrame:
    return (df.groupby(["year", "continent"], as_index=False, observed=True)
              .agg(mean=("lifeExp", "mean")))


def continent_gdp_average(df: pd.DataFrame) -> pd.DataFrame:
    return (df.groupby(["year", "continent"], as_index=False, observed=True)
              .agg(avg_gdp=("gdpPercap", "mean")))


def _continent_lines(data: pd.DataFrame, y: str, ax) -> None:
    data = data.assign(continent=data["continent"].astype(str))
    order = [c for c in CONTINENT_COLORS if c in set(data["continent"])]
    sns.lineplot(data=data, x="year", y=y, hue="continent", hue_order=order,
                 palette=CONTINENT_COLORS, ax=ax, legend=False)
    sns.scatterplot(data=data, x="year", y=y, hue="continent", hue_order=order,
                    palette=CONTINENT_COLORS, ax=ax)


def plot_continent_life_average(df: pd.DataFrame, art: ReportArtifacts) -> Path:
    fig, ax = plt.subplots(figsize=(9, 6))
    _continent_lines(continent_life_average(df), "mean", ax)
    ax.set_title("Average life expectancy (1952-2007)", loc="left")
    ax.set_xlabel("")
    ax.set_ylabel(LIFE_LABEL)
    _legend_bottom(ax)
    return _finish(fig, art.figures_dir / "continent_life_average.png")


def plot_continent_gdp_average(df: pd.DataFrame, art: ReportArtifacts) -> Path:
    fig, ax = plt.subplots(figsize=(9, 6))
    _continent_lines(continent_gdp_average(df), "avg_gdp", ax)
    ax.set_yscale("log")
    ax.set_title("Average GDP per capita (1952-2007)", loc="left")
    ax.set_xlabel("")
    ax.set_ylabel(GDP_LOG_LABEL)
    _legend_bottom(ax)
    return _finish(fig, art.figures_dir / "continent_gdp_average.png")


def plot_selected_countries(df: pd.DataFrame, art: ReportArtifacts, countries: Iterable[str]) -> Path:
    """
    Every country's (life expectancy, GDP per capita) path in gray with the
    given countries drawn on top in color.
    """
    requested = list(countries)
    known = set(df["country"])
    selected: List[str] = [c for c in requested if c in known]
    unknown = [c for c in requested if c not in known]
    if unknown:
        logger.warning("Skipping unknown countries: %s", ", ".join(unknown))
    if not selected:
        raise ValueError(f"None of the selected countries are in the data: {requested}")

    highlight = df[df["country"].isin(selected)]

    fig, ax = plt.subplots(figsize=(10, 7))
    sns.lineplot(data=df, x="lifeExp", y="gdpPercap", units="country", estimator=None,
                 color="gray", alpha=0.5, lw=0.8, ax=ax)
    sns.scatterplot(data=highlight, x="lifeExp", y="gdpPercap", hue="country",
                    hue_order=selected, ax=ax)
    sns.lineplot(data=highlight, x="lifeExp", y="gdpPercap", hue="country",
                 hue_order=selected, estimator=None, lw=2, ax=ax, legend=False)
    ax.set_yscale("log")
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda v, _: f"{v:,.0f}"))
    ax.set_title("Life Expectancy X GDP Per Capita (Selected Countries)", loc="left")
    ax.set_xlabel("Life Expectancy")
    ax.set_ylabel(GDP_LOG_LABEL)
    _legend_bottom(ax)
    return _finish(fig, art.figures_dir / "selected_countries.png")


def correlation_by_year(df: pd.DataFrame, art: ReportArtifacts) -> pd.DataFrame:
    """Pearson (log10 GDP vs life) and Spearman (GDP vs life) for each year."""
    results = []
    for year, g in df.groupby("year"):
        g = g.dropna(subset=["lgdppc", "lifeExp"])
        if len(g) < 3:
            continue
        r_p, p_p = pearsonr(g["lgdppc"], g["lifeExp"])
        r_s, p_s = spearmanr(g["gdpPercap"], g["lifeExp"])
        results.append({
            "year": int(year),
            "n": int(len(g)),
            "pearson_r_log10gdp_life": float(r_p),
            "pearson_pvalue": float(p_p),
            "spearman_r_gdp_life": float(r_s),
            "spearman_pvalue": float(p_s),
        })
    corr_df = pd.DataFrame(results)
    save_table(corr_df, art, "correlation_by_year",
               "GDP per capita vs life expectancy correlation by year", digits=3)
    return corr_df


def run_static_charts(df: pd.DataFrame, art: ReportArtifacts, year: int,
                      countries: Iterable[str]) -> Dict[str, Any]:
    charts: Dict[str, Any] = {}

    logger.info("Relationship between GDP per capita and life expectancy (%d)", year)
    charts["gdp_life_fit"] = plot_gdp_life_scatter(df, art, year=year)

    logger.info("Life expectancy averages")
    charts["world_life_average"] = plot_world_life_average(df, art)
    charts["continent_life_average"] = plot_continent_life_average(df, art)

    logger.info("GDP per capita continent averages")
    charts["continent_gdp_average"] = plot_continent_gdp_average(df, art)

    logger.info("Selected countries")
    charts["selected_countries"] = plot_selected_countries(df, art, countries)

    charts["correlation_by_year"] = correlation_by_year(df, art)
    return charts
