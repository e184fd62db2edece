import json
import re

import numpy as np
import plotly.graph_objects as go
import pytest

from heatlibs import fn__libs_charts as charts
from heatlibs.fn__libs_models import Dataset, HeatMapCell, HeatMapOptions, records_from_tuples
from heatlibs.fn__libs_scales import f310__build_heatmap_layout


@pytest.fixture
def layout():
    rows = [(year, month, (year - 1850) * 0.1 + month * 0.05) for year in range(1850, 1862) for month in range(1, 13)]
    return f310__build_heatmap_layout(Dataset(8.66, records_from_tuples(rows)))


def test_tooltip_lines():
    cell = HeatMapCell(
        year=1753, month=1, month_index=0, variance=-6.1, temperature=2.56,
        x=0, y=0, width=1, height=1, bucket=0, color="#313695",
    )
    assert charts.f200__tooltip_lines(cell) == ["1753 - January", "2.6℃", "-6.1℃"]


def test_tooltip_positive_variance_has_sign():
    cell = HeatMapCell(
        year=2015, month=9, month_index=8, variance=1.2, temperature=9.86,
        x=0, y=0, width=1, height=1, bucket=11, color="#a50026",
    )
    assert charts.f200__tooltip_lines(cell)[0] == "2015 - September"
    assert charts.f200__tooltip_lines(cell)[2] == "+1.2℃"


def test_plotly_heatmap_default(layout):
    fig = charts.f201__plotly_heatmap(layout)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    trace = fig.data[0]
    z = np.asarray(trace.z, dtype=float)
    assert z.shape == (12, len(layout.years))
    first = layout.cells[0]
    assert z[first.month_index][0] == first.bucket + 0.5
    assert trace.showscale is True
    assert list(trace.colorbar.ticktext) == [f"{v:.1f}" for v in (layout.temp_min, *layout.color_domain)]
    assert trace.hovertemplate == "%{text}<extra></extra>"
    assert fig.layout.xaxis.title.text == "Years"
    assert fig.layout.yaxis.title.text == "Months"
    assert list(fig.layout.xaxis.tickvals) == [1850, 1860]
    assert fig.layout.width == layout.width


def test_plotly_heatmap_options_off(layout):
    options = HeatMapOptions(show_tooltip=False, show_legend=False, show_labels=False)
    fig = charts.f201__plotly_heatmap(layout, options)

    trace = fig.data[0]
    assert trace.showscale is False
    assert trace.hoverinfo == "skip"
    assert fig.layout.xaxis.title.text is None
    assert fig.layout.yaxis.title.text is None


def test_plotly_colorbar_leaves_out_empty_warmest_bucket(layout):
    trace = charts.f201__plotly_heatmap(layout).data[0]
    colors = [c for _, c in trace.colorscale]

    assert max(c.bucket for c in layout.cells) == len(layout.palette) - 2
    assert layout.palette[-1] not in colors
    assert colors[-1] == layout.palette[-2]
    assert trace.zmax == len(layout.palette) - 1
    assert len(trace.colorbar.tickvals) == len(trace.colorbar.ticktext) == len(layout.palette)
    assert trace.colorbar.ticktext[-1] == f"{layout.temp_max:.1f}"


def test_stepped_colorscale_is_flat_per_color():
    scale = charts._stepped_colorscale(["#000000", "#ffffff"])
    assert scale == [[0.0, "#000000"], [0.5, "#000000"], [0.5, "#ffffff"], [1.0, "#ffffff"]]


def _payload_from_html(html: str) -> dict:
    m = re.search(r"const L = (\{.*?\});\n", html, flags=re.S)
    assert m is not None
    return json.loads(m.group(1))


def test_d3_html_carries_layout(layout):
    html = charts.f202__d3_heatmap_html(layout)
    payload = _payload_from_html(html)

    assert "d3@7" in html
    assert layout.title in html
    assert len(payload["cells"]) == len(layout.cells)
    first = payload["cells"][0]
    assert first["month"] == 0
    assert first["fill"] == layout.cells[0].color
    assert first["tip"][0] == "1850 - January"
    assert len(payload["legend"]) == len(layout.palette)
    assert payload["xTicks"] == [1850, 1860]
    assert '"showTooltip": true' in html


def test_d3_html_options(layout):
    options = HeatMapOptions(show_tooltip=False, show_legend=False, show_labels=True, x_label="Anni", y_label="Mesi")
    html = charts.f202__d3_heatmap_html(layout, options)

    assert '"showTooltip": false' in html
    assert '"showLegend": false' in html
    assert '"xLabel": "Anni"' in html


def test_d3_legend_offset_follows_bucket_count():
    rows = [(2000, m, m * 0.3) for m in range(1, 13)]
    small = f310__build_heatmap_layout(Dataset(8.0, records_from_tuples(rows)), bucket_count=5)
    html = charts.f202__d3_heatmap_html(small)

    assert len(_payload_from_html(html)["domain"]) == 5
    assert "(2 * lh) / L.domain.length" in html
    assert "(2 * lh) / 11" not in html

