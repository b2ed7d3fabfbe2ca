import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from common import ensure_output_dirs  # noqa: E402
from explore_data import add_log_gdp, load_gapminder  # noqa: E402


@pytest.fixture
def toy_df() -> pd.DataFrame:
    """Three countries, three observations each."""
    df = pd.DataFrame({
        "country": ["A"] * 3 + ["B"] * 3 + ["C"] * 3,
        "continent": ["Asia"] * 6 + ["Europe"] * 3,
        "year": [1952, 1957, 2007] * 3,
        "lifeExp": [40.0, 30.0, 60.0, 50.0, 52.0, 55.0, 65.0, 70.0, 75.0],
        "pop": [1_000_000, 1_100_000, 2_000_000, 500_000, 550_000, 900_000, 3_000_000, 3_100_000, 3_500_000],
        "gdpPercap": [100.0, 150.0, 300.0, 200.0, 250.0, 500.0, 1000.0, 1200.0, 1500.0],
    })
    df["continent"] = df["continent"].astype("category")
    return df


@pytest.fixture
def toy_log_df(toy_df) -> pd.DataFrame:
    return add_log_gdp(toy_df)


@pytest.fixture(scope="session")
def gapminder() -> pd.DataFrame:
    return load_gapminder()


@pytest.fixture
def art(tmp_path):
    return ensure_output_dirs(tmp_path / "output")
