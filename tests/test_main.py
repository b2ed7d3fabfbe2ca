import pytest

from main import SELECTED_COUNTRIES, main, parse_args, run


def test_parse_args_defaults():
    args = parse_args([])
    assert args.year == 2007
    assert args.countries == SELECTED_COUNTRIES
    assert not args.skip_interactive


def test_parse_args_countries():
    args = parse_args(["--countries", "Japan, Chile ,", "--year", "1952"])
    assert args.countries == ["Japan", "Chile"]
    assert args.year == 1952


def test_run_full_report(tmp_path):
    outputs = run(parse_args(["--output-dir", str(tmp_path / "out")]))
    art = outputs["artifacts"]

    assert "lgdppc" in outputs["data"].columns
    assert outputs["integrity"]["unique_country_year"]
    assert (art.reports_dir / "integrity_checks.json").exists()
    assert (art.reports_dir / "detailed_summary.json").exists()
    assert (art.reports_dir / "absolute_gdp_growth_by_continent.csv").exists()
    assert (art.figures_dir / "selected_countries.png").exists()
    assert outputs["interactive"].exists()
    page = outputs["report"].read_text(encoding="utf-8")
    assert "Absolute GDP Growth by Continent (1952-2007)" in page
    assert "Interactive plot" in page


def test_main_without_interactive_or_report(tmp_path):
    out = tmp_path / "out"
    assert main(["--output-dir", str(out), "--skip-interactive", "--skip-report", "--log-level", "WARNING"]) == 0
    assert not (out / "report.html").exists()
    assert not any((out / "interactive").iterdir())


def test_unknown_year_fails(tmp_path):
    with pytest.raises(ValueError, match="year=1900"):
        run(parse_args(["--output-dir", str(tmp_path / "out"), "--year", "1900"]))


def test_run_reports_top_gdp_growth_countries(tmp_path):
    outputs = run(parse_args(["--output-dir", str(tmp_path / "out"), "--skip-interactive",
                              "--countries", "Japan,Chile,Oman"]))
    leaders = outputs["top_gdp_growth_countries"]
    table = outputs["tables"]["absolute_gdp_growth_by_country"]
    assert leaders == table["country"].head(3).tolist()

    page = outputs["report"].read_text(encoding="utf-8")
    assert f"Largest absolute GDP per capita growth: {', '.join(leaders)}." in page
    assert "Interactive plot" not in page
