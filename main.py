"""
Life expectancy vs. economic growth: exploratory analysis of the gapminder data
Source: gapminder extract bundled with plotly (142 countries, 1952-2007)

Steps, in order:
1. Load the data, check its integrity and explore it (missing values,
   structure, log10 GDP per capita column, detailed summary)
2. Growth tables: GDP per capita growth by continent and by country, life
   expectancy growth by country, largest life expectancy changes
3. Static charts: GDP vs life expectancy (one year), world and continent
   averages, selected countries
4. Interactive bubble chart over all years
5. HTML report assembling everything above

Outputs (saved under ./output): reports (CSV/JSON), figures (PNG),
interactive/gapminder_bubbles.html and report.html.

Usage:
    python main.py [--output-dir output] [--year 2007] [--countries "Oman,Vietnam"]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

from analyze_growth import run_growth_tables, top_countries  # noqa: E402
from analyze_interactive import write_bubble_chart  # noqa: E402
from analyze_trends import apply_theme, run_static_charts  # noqa: E402
from common import ensure_output_dirs, save_json, save_table  # noqa: E402
from explore_data import (  # noqa: E402
    add_log_gdp,
    count_missing,
    describe_detailed,
    describe_structure,
    load_gapminder,
    validate,
)
from report_page import ReportSection, render_report  # noqa: E402

logger = logging.getLogger(__name__)

# -------------------- Configuration --------------------
OUTPUT_DIR = Path("output")
SCATTER_YEAR = 2007
SELECTED_COUNTRIES = ["Oman", "Vietnam", "Indonesia", "Saudi Arabia", "Libya"]
TOP_N = 10
FONT_FAMILY = "sans-serif"

REPORT_META = {
    "title": "Exploring the correlation between life expectation and economic growth",
    "description": (
        "Visualizing Hans Rosling's TED talk on the relationship between life "
        "expectation and economic growth with the gapminder data"
    ),
    "categories": ["EDA", "visualization", "pandas", "seaborn", "plotly"],
    "date": "2025-03-11",
}


def _split_countries(value: str) -> List[str]:
    return [c.strip() for c in value.split(",") if c.strip()]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exploratory analysis of life expectancy and GDP per capita (gapminder).",
    )
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR,
                        help="Directory where reports, figures and the HTML report are saved.")
    parser.add_argument("--year", type=int, default=SCATTER_YEAR,
                        help="Year used for the GDP vs life expectancy scatter plot.")
    parser.add_argument("--countries", type=_split_countries, default=list(SELECTED_COUNTRIES),
                        help="Comma separated countries highlighted in the selected-countries chart.")
    parser.add_argument("--top-n", type=int, default=TOP_N,
                        help="Number of rows kept for the largest life expectancy changes.")
    parser.add_argument("--font-family", default=FONT_FAMILY, help="Font family of the static charts.")
    parser.add_argument("--skip-interactive", action="store_true", help="Skip the interactive bubble chart.")
    parser.add_argument("--skip-report", action="store_true", help="Skip the HTML report page.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> Dict[str, Any]:
    art = ensure_output_dirs(args.output_dir)
    outputs: Dict[str, Any] = {"artifacts": art}

    logger.info("Loading data...")
    df = load_gapminder()
    integrity = validate(df)
    save_json(integrity, art.reports_dir / "integrity_checks.json")

    logger.info("Exploring data")
    missing = count_missing(df)
    logger.info("Missing values per column: %s", missing.to_dict())
    structure = describe_structure(df)
    save_table(structure, art, "structure", "Internal structure")

    df = add_log_gdp(df)
    summary = describe_detailed(df)
    save_json(summary, art.reports_dir / "detailed_summary.json")
    outputs.update(data=df, integrity=integrity, missing=missing, structure=structure, summary=summary)

    logger.info("Analysing growth")
    tables = run_growth_tables(df, art, top_n=args.top_n)
    outputs["tables"] = tables
    leaders = top_countries(tables["absolute_gdp_growth_by_country"], n=len(args.countries))
    outputs["top_gdp_growth_countries"] = leaders
    logger.info("Largest absolute GDP per capita growth: %s (highlighted: %s)",
                ", ".join(leaders), ", ".join(args.countries))

    logger.info("Rendering static charts")
    apply_theme(args.font_family)
    charts = run_static_charts(df, art, year=args.year, countries=args.countries)
    outputs["charts"] = charts

    if not args.skip_interactive:
        logger.info("Rendering interactive chart")
        outputs["interactive"], outputs["bubble_figure"] = write_bubble_chart(df, art)

    if not args.skip_report:
        sections = _report_sections(outputs, args)
        outputs["report"] = render_report(sections, art, REPORT_META)

    logger.info("All done. Outputs saved to %s", art.output_dir)
    return outputs


def _report_sections(outputs: Dict[str, Any], args: argparse.Namespace) -> List[ReportSection]:
    integrity = outputs["integrity"]
    tables = outputs["tables"]
    charts = outputs["charts"]
    missing = outputs["missing"]
    leaders = outputs["top_gdp_growth_countries"]
    sections = [
        ReportSection(
            "Setting Up",
            f"The data covers {integrity['countries']} countries observed every five years "
            f"from {integrity['years'][0]} to {integrity['years'][-1]} ({integrity['rows']} rows). "
            "A log10 column of GDP per capita (lgdppc) is added for the charts.",
            tables=[
                ("Missing values per column", missing.rename_axis("column").reset_index(name="missing")),
                ("Internal structure", outputs["structure"]),
            ],
        ),
        ReportSection(
            "GDP growth by continent",
            "Absolute and relative growth of GDP per capita between the first and last observation "
            "of each continent, rows ordered by country and year.\n\n"
            "Oceania is represented by only two countries in the data.",
            tables=[
                ("Absolute GDP Growth by Continent (1952-2007)", tables["absolute_gdp_growth_by_continent"]),
                ("Relative GDP Growth by Continent (1952-2007)", tables["relative_gdp_growth_by_continent"]),
                ("Countries in Oceania", tables["oceania_countries"]),
            ],
        ),
        ReportSection(
            "GDP and life expectancy growth by country",
            f"Largest absolute GDP per capita growth: {', '.join(leaders)}.",
            tables=[
                ("Absolute GDP Growth by Country (1952-2007)", tables["absolute_gdp_growth_by_country"]),
                ("Relative GDP Growth by Country (1952-2007)", tables["relative_gdp_growth_by_country"]),
                ("Absolute Life Expectancy Growth by Country (1952-2007)",
                 tables["absolute_life_growth_by_country"]),
                ("Relative Life Expectancy Growth by Country (1952-2007)",
                 tables["relative_life_growth_by_country"]),
                ("Largest life expectancy changes", tables["largest_life_changes"].round(2)),
            ],
        ),
        ReportSection(
            "Visualization",
            f"Life expectancy against GDP per capita in {args.year}, followed by world and "
            "continent averages and a few highlighted countries.",
            tables=[("GDP per capita vs life expectancy correlation by year", charts["correlation_by_year"])],
            figures=[
                Path(charts["gdp_life_fit"]["path"]),
                charts["world_life_average"],
                charts["continent_life_average"],
                charts["continent_gdp_average"],
                charts["selected_countries"],
            ],
        ),
    ]
    if "bubble_figure" in outputs:
        sections.append(ReportSection("Interactive plot", interactive=outputs["bubble_figure"]))
    return sections


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    run(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
