"""
Growth tables: GDP per capita and life expectancy growth between the first
and last observed year, by continent and by country, plus the largest
year-over-year life expectancy swings.
"""
from __future__ import annotations

import logging
from typing import Dict, List

import pandas as pd

from common import ReportArtifacts, save_table

logger = logging.getLogger(__name__)

GROWTH_KINDS = ("absolute", "relative")
PERIOD_LABEL = "1952-2007"


def _growth_column(metric: str) -> str:
    return "life_growth" if metric == "lifeExp" else "growth"


def growth_by(df: pd.DataFrame, by: str, metric: str, kind: str = "absolute") -> pd.DataFrame:
    """
    Growth of ``metric`` per ``by`` group between the group's first and last
    observed rows, with rows ordered by (country, year).

    For a country that is its first and last year. For a continent it is the
    first year of its first country and the last year of its last country.
    absolute: last - first; relative: (last / first - 1) * 100.
    Sorted by growth, largest first.
    """
    if kind not in GROWTH_KINDS:
        raise ValueError(f"Unknown growth kind {kind!r}; expected one of {GROWTH_KINDS}")
    missing = [c for c in dict.fromkeys((by, "country", "year", metric)) if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")

    ordered = df.sort_values(["country", "year"], kind="mergesort")
    ends = ordered.groupby(by, observed=True)[metric].agg(["first", "last"])
    if kind == "absolute":
        growth = ends["last"] - ends["first"]
    else:
        growth = (ends["last"] / ends["first"] - 1) * 100

    col = _growth_column(metric)
    out = growth.rename(col).reset_index()
    out[by] = out[by].astype(str)
    return out.sort_values(col, ascending=False, ignore_index=True)


def top_countries(table: pd.DataFrame, n: int = 5, by: str = "country") -> List[str]:
    return table[by].head(n).tolist()


def _growth_pair(df: pd.DataFrame, art: ReportArtifacts, by: str, metric: str,
                 label: str, digits: int | None = None) -> Dict[str, pd.DataFrame]:
    tables = {}
    for kind in GROWTH_KINDS:
        table = growth_by(df, by=by, metric=metric, kind=kind)
        if digits is not None:
            table[_growth_column(metric)] = table[_growth_column(metric)].round(digits)
        caption = f"{kind.capitalize()} {label} Growth by {by.capitalize()} ({PERIOD_LABEL})"
        name = f"{kind}_{'life' if metric == 'lifeExp' else 'gdp'}_growth_by_{by}"
        save_table(table, art, name, caption)
        tables[name] = table
    return tables


def continent_gdp_growth(df: pd.DataFrame, art: ReportArtifacts) -> Dict[str, pd.DataFrame]:
    return _growth_pair(df, art, by="continent", metric="gdpPercap", label="GDP")


def country_gdp_growth(df: pd.DataFrame, art: ReportArtifacts) -> Dict[str, pd.DataFrame]:
    return _growth_pair(df, art, by="country", metric="gdpPercap", label="GDP")


def country_life_growth(df: pd.DataFrame, art: ReportArtifacts) -> Dict[str, pd.DataFrame]:
    return _growth_pair(df, art, by="country", metric="lifeExp", label="Life Expectancy", digits=2)


def countries_in_continent(df: pd.DataFrame, continent: str) -> pd.DataFrame:
    """Rows per country for one continent (empty for an unknown continent)."""
    subset = df[df["continent"].astype(str) == continent]
    counts = subset["country"].value_counts().sort_index()
    return counts.rename_axis("country").reset_index(name="n")


def largest_life_changes(df: pd.DataFrame, top_n: int = 10) -> pd.DataFrame:
    """
    Largest changes in life expectancy between consecutive observations of
    the same country, ranked by absolute size.
    """
    ordered = df.sort_values(["country", "year"])
    diffs = ordered.assign(life_diff=ordered.groupby("country")["lifeExp"].diff())
    diffs = diffs.dropna(subset=["life_diff"])
    diffs = diffs.assign(life_abs=diffs["life_diff"].abs())
    top = diffs.sort_values("life_abs", ascending=False, kind="mergesort").head(top_n)
    return top[["country", "year", "life_diff"]].reset_index(drop=True)


def run_growth_tables(df: pd.DataFrame, art: ReportArtifacts, top_n: int = 10) -> Dict[str, pd.DataFrame]:
    tables: Dict[str, pd.DataFrame] = {}

    logger.info("GDP growth by continent")
    tables.update(continent_gdp_growth(df, art))

    oceania = countries_in_continent(df, "Oceania")
    save_table(oceania, art, "oceania_countries", "Countries in Oceania")
    tables["oceania_countries"] = oceania
    logger.info("Oceania is covered by %d countries: %s", len(oceania), ", ".join(oceania["country"]))

    logger.info("GDP growth by country")
    tables.update(country_gdp_growth(df, art))

    logger.info("Life expectancy growth by country")
    tables.update(country_life_growth(df, art))

    changes = largest_life_changes(df, top_n=top_n)
    save_table(changes, art, "largest_life_changes",
               f"Top {top_n} Life Expectancy Changes Between Observations", digits=2)
    tables["largest_life_changes"] = changes
    return tables
