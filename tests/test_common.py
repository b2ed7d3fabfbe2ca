import pandas as pd

from common import save_table


def test_save_table_writes_csv_and_image(art):
    table = pd.DataFrame({"country": ["A", "B"], "growth": [1.234, 5.678]})
    path = save_table(table, art, "growth", "Growth", digits=1)
    assert path == art.reports_dir / "growth.csv"
    assert pd.read_csv(path)["growth"].tolist() == [1.2, 5.7]
    assert (art.figures_dir / "growth_table.png").exists()


def test_save_table_empty_rows(art):
    save_table(pd.DataFrame(columns=["country", "n"]), art, "empty_rows", "Nothing")
    assert (art.figures_dir / "empty_rows_table.png").exists()


def test_save_table_without_columns(art):
    path = save_table(pd.DataFrame(), art, "no_columns", "Nothing")
    assert path.exists()
    assert not (art.figures_dir / "no_columns_table.png").exists()
