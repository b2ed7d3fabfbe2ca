import numpy as np
import pandas as pd
import pytest

from explore_data import (
    CONTINENT_COLORS,
    GAPMINDER_COLUMNS,
    add_log_gdp,
    check_integrity,
    count_missing,
    describe_detailed,
    describe_structure,
    validate,
)


def test_load_gapminder_shape(gapminder):
    assert list(gapminder.columns) == GAPMINDER_COLUMNS
    assert len(gapminder) == 1704
    assert gapminder["country"].nunique() == 142
    assert isinstance(gapminder["continent"].dtype, pd.CategoricalDtype)
    assert set(gapminder["continent"].astype(str)) == set(CONTINENT_COLORS)


def test_load_gapminder_sorted_by_country_year(gapminder):
    ordered = gapminder.sort_values(["country", "year"]).reset_index(drop=True)
    pd.testing.assert_frame_equal(gapminder, ordered)


def test_gapminder_passes_integrity_checks(gapminder):
    report = validate(gapminder)
    assert report["positive_life_expectancy"]
    assert report["unique_country_year"]
    assert report["years"][0] == 1952 and report["years"][-1] == 2007
    assert len(report["years"]) == 12


def test_gapminder_has_no_missing_values(gapminder):
    assert count_missing(gapminder).sum() == 0


def test_validate_reports_duplicate_and_negative_rows(toy_df):
    bad = pd.concat([toy_df, toy_df.head(1)], ignore_index=True)
    bad.loc[1, "lifeExp"] = -1.0
    report = check_integrity(bad)
    assert not report["unique_country_year"]
    assert not report["positive_life_expectancy"]
    with pytest.raises(ValueError, match="positive_life_expectancy, unique_country_year"):
        validate(bad)


def test_validate_rejects_wrong_year_range(toy_df):
    with pytest.raises(ValueError, match="year_range"):
        validate(toy_df[toy_df["year"] < 2007])


def test_check_integrity_requires_columns(toy_df):
    with pytest.raises(ValueError, match="lifeExp"):
        check_integrity(toy_df.drop(columns=["lifeExp"]))


def test_add_log_gdp_returns_copy(toy_df):
    out = add_log_gdp(toy_df)
    assert "lgdppc" not in toy_df.columns
    assert out.loc[0, "lgdppc"] == pytest.approx(2.0)
    assert out.loc[8, "lgdppc"] == pytest.approx(np.log10(1500.0))


def test_add_log_gdp_only_once(toy_df):
    with pytest.raises(ValueError, match="already exists"):
        add_log_gdp(add_log_gdp(toy_df))


def test_add_log_gdp_requires_gdp(toy_df):
    with pytest.raises(ValueError, match="gdpPercap"):
        add_log_gdp(toy_df.drop(columns=["gdpPercap"]))


def test_describe_structure_lists_every_column(toy_df):
    structure = describe_structure(toy_df)
    assert structure["column"].tolist() == list(toy_df.columns)
    row = structure.set_index("column").loc["country"]
    assert row["n_unique"] == 3
    assert row["first_values"].startswith("A, A, A")


def test_describe_detailed_numeric_and_categorical(toy_df):
    summary = describe_detailed(toy_df)

    gdp = summary["gdpPercap"]
    assert gdp["n"] == 9 and gdp["missing"] == 0
    assert gdp["lowest"][:2] == [100.0, 150.0]
    assert gdp["highest"][-1] == 1500.0
    assert set(gdp["quantiles"]) == {"0.05", "0.10", "0.25", "0.50", "0.75", "0.90", "0.95"}
    assert gdp["quantiles"]["0.50"] == pytest.approx(300.0)

    continent = summary["continent"]
    assert continent["distinct"] == 2
    assert continent["top_values"] == {"Asia": 6, "Europe": 3}


def test_gini_mean_difference():
    summary = describe_detailed(pd.DataFrame({"x": [1.0, 2.0, 3.0]}))
    # pairs: |1-2|, |1-3|, |2-3|
    assert summary["x"]["gmd"] == pytest.approx(4 / 3)
