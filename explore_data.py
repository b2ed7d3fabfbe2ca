"""
Load and explore the gapminder extract (1952-2007, 5-year steps).

The dataset is the copy bundled with plotly, so loading never touches
the network. Everything here is read-only except ``add_log_gdp`` which
returns a copy with the single derived column.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import plotly.express as px

logger = logging.getLogger(__name__)

GAPMINDER_COLUMNS = ["country", "continent", "year", "lifeExp", "pop", "gdpPercap"]
FIRST_YEAR = 1952
LAST_YEAR = 2007

# Same palette as the R gapminder package (continent_colors)
CONTINENT_COLORS = {
    "Africa": "#7F3B08",
    "Americas": "#A50026",
    "Asia": "#40004B",
    "Europe": "#276419",
    "Oceania": "#313695",
}

DETAIL_PERCENTILES = [0.05, 0.10, 0.25, 0.50, 0.75, 0.90, 0.95]


def _require_columns(df: pd.DataFrame, columns) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")


def load_gapminder() -> pd.DataFrame:
    """Bundled gapminder table, one row per country-year, sorted by (country, year)."""
    raw = px.data.gapminder()
    df = raw[GAPMINDER_COLUMNS].copy()
    df["country"] = df["country"].astype(str)
    df["continent"] = df["continent"].astype("category")
    df["year"] = df["year"].astype(int)
    df["pop"] = df["pop"].astype("int64")
    df = df.sort_values(["country", "year"]).reset_index(drop=True)
    logger.info("Loaded gapminder: %d rows, %d countries", len(df), df["country"].nunique())
    return df


def add_log_gdp(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with ``lgdppc = log10(gdpPercap)``."""
    _require_columns(df, ["gdpPercap"])
    if "lgdppc" in df.columns:
        raise ValueError("Column 'lgdppc' already exists; the log column is derived only once")
    out = df.copy()
    out["lgdppc"] = np.log10(out["gdpPercap"])
    return out


def count_missing(df: pd.DataFrame) -> pd.Series:
    return df.isna().sum()


def describe_structure(df: pd.DataFrame, n_values: int = 5) -> pd.DataFrame:
    rows = []
    for col in df.columns:
        s = df[col]
        head = ", ".join(str(v) for v in s.head(n_values).tolist())
        rows.append({
            "column": col,
            "dtype": str(s.dtype),
            "non_null": int(s.notna().sum()),
            "n_unique": int(s.nunique(dropna=True)),
            "first_values": head,
        })
    return pd.DataFrame(rows)


def _gini_mean_difference(values: np.ndarray) -> float:
    # mean |xi - xj| over all pairs i != j
    n = len(values)
    if n < 2:
        return float("nan")
    x = np.sort(values.astype(float))
    weights = 2 * np.arange(1, n + 1) - n - 1
    return float(2.0 * np.sum(weights * x) / (n * (n - 1)))


def describe_detailed(df: pd.DataFrame, n_extremes: int = 5, n_top: int = 10) -> Dict[str, Any]:
    """
    Detailed per-column summary.

    Numeric columns get n / missing / distinct, mean, Gini mean difference,
    the 5%..95% quantiles and the lowest / highest values. Other columns
    get n / missing / distinct and their most frequent values.
    """
    summary: Dict[str, Any] = {}
    for col in df.columns:
        s = df[col]
        info: Dict[str, Any] = {
            "n": int(s.notna().sum()),
            "missing": int(s.isna().sum()),
            "distinct": int(s.nunique(dropna=True)),
        }
        if pd.api.types.is_numeric_dtype(s):
            values = s.dropna()
            info["mean"] = float(values.mean()) if not values.empty else None
            info["gmd"] = _gini_mean_difference(values.to_numpy())
            q = values.quantile(DETAIL_PERCENTILES)
            info["quantiles"] = {f"{p:.2f}": float(v) for p, v in q.items()}
            uniq = np.sort(values.unique())
            info["lowest"] = [float(v) for v in uniq[:n_extremes]]
            info["highest"] = [float(v) for v in uniq[-n_extremes:]]
        else:
            counts = s.value_counts(dropna=True).head(n_top)
            info["top_values"] = {str(k): int(v) for k, v in counts.items()}
        summary[col] = info
    return summary


def check_integrity(df: pd.DataFrame) -> Dict[str, Any]:
    _require_columns(df, ["country", "year", "lifeExp"])
    years = sorted(int(y) for y in df["year"].unique())
    return {
        "rows": int(len(df)),
        "countries": int(df["country"].nunique()),
        "years": years,
        "positive_life_expectancy": bool((df["lifeExp"] > 0).all()),
        "unique_country_year": not bool(df.duplicated(["country", "year"]).any()),
        "year_range": bool(years) and years[0] == FIRST_YEAR and years[-1] == LAST_YEAR,
    }


def validate(df: pd.DataFrame) -> Dict[str, Any]:
    """Run ``check_integrity`` and raise ValueError naming every failed check."""
    report = check_integrity(df)
    failed: List[str] = [
        name for name in ("positive_life_expectancy", "unique_country_year", "year_range")
        if not report[name]
    ]
    if failed:
        raise ValueError(f"Dataset integrity check failed: {', '.join(failed)}")
    return report
