import pytest

from analyze_interactive import BUBBLE_HTML_NAME, build_bubble_chart, write_bubble_chart
from explore_data import CONTINENT_COLORS, add_log_gdp


@pytest.fixture(scope="module")
def bubble_fig(gapminder):
    return build_bubble_chart(add_log_gdp(gapminder))


def test_one_frame_per_year(bubble_fig, gapminder):
    assert [int(f.name) for f in bubble_fig.frames] == sorted(gapminder["year"].unique())


def test_one_trace_per_continent(bubble_fig):
    names = [trace.name for trace in bubble_fig.data]
    assert names == list(CONTINENT_COLORS)
    colors = {trace.name: trace.marker.color for trace in bubble_fig.data}
    assert colors == CONTINENT_COLORS


def test_markers_styled_in_every_frame(bubble_fig):
    for frame in bubble_fig.frames:
        for trace in frame.data:
            assert trace.marker.sizemode == "diameter"
            assert trace.marker.line.width == 2
            assert trace.hovertemplate == "%{customdata[0]}<extra></extra>"


def test_hover_text(bubble_fig):
    first = bubble_fig.data[0].customdata[0][0]
    assert first.startswith("Country: ")
    assert "<br>Life Expectancy: " in first
    assert "<br>Pop.: " in first


def test_layout_titles(bubble_fig):
    assert bubble_fig.layout.title.text == "Life Expectation X GDP Per Capita"
    assert bubble_fig.layout.xaxis.title.text == "GDP per capita (US$, log)"
    assert bubble_fig.layout.yaxis.title.text == "Life Expectancy (years)"


def test_requires_log_column(toy_df):
    with pytest.raises(ValueError, match="lgdppc"):
        build_bubble_chart(toy_df)


def test_write_bubble_chart(toy_log_df, art):
    path, fig = write_bubble_chart(toy_log_df, art)
    assert path == art.interactive_dir / BUBBLE_HTML_NAME
    assert "plotly" in path.read_text(encoding="utf-8").lower()
    assert len(fig.frames) == 3
