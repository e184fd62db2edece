from __future__ import annotations

import calendar
import html
import json
from typing import Any, Dict, List, Optional

import numpy as np
import plotly.graph_objects as go

from .fn__libs_models import HeatMapCell, HeatMapLayout, HeatMapOptions


def f200__tooltip_lines(cell: HeatMapCell) -> List[str]:
    """Tooltip text: "1753 - January", "2.6℃", "-6.1℃"."""
    return [
        f"{cell.year} - {calendar.month_name[cell.month]}",
        f"{cell.temperature:.1f}℃",
        f"{cell.variance:+.1f}℃",
    ]


def _stepped_colorscale(palette) -> List[list]:
    """Discrete plotly colorscale: one flat segment per palette color."""
    n = len(palette)
    scale = []
    for k, color in enumerate(palette):
        scale.append([k / n, color])
        scale.append([(k + 1) / n, color])
    return scale


def f201__plotly_heatmap(
    layout: HeatMapLayout,
    options: Optional[HeatMapOptions] = None,
) -> go.Figure:
    """
    Year x month heatmap of color buckets, drawn with the layout's palette.

    z holds bucket + 0.5 so each cell sits in the middle of its flat colorscale
    segment; the colorbar ticks sit on the bucket boundaries. The top boundary is
    the dataset maximum, so the warmest palette color never holds a cell and is
    left off the colorbar.
    """
    options = options or HeatMapOptions()
    years = list(layout.years)
    col_of = {y: i for i, y in enumerate(years)}
    shown = layout.palette[:-1]
    n_colors = len(shown)

    z = np.full((12, len(years)), np.nan)
    text = np.full((12, len(years)), "", dtype=object)
    for cell in layout.cells:
        row, col = cell.month_index, col_of[cell.year]
        z[row, col] = cell.bucket + 0.5
        text[row, col] = "<br>".join(f200__tooltip_lines(cell))

    month_names = [name for _, name in layout.y_ticks]
    heatmap_kwargs: Dict[str, Any] = dict(
        z=z,
        x=years,
        y=month_names,
        colorscale=_stepped_colorscale(shown),
        zmin=0,
        zmax=n_colors,
        xgap=0,
        ygap=0,
        showscale=bool(options.show_legend),
    )
    if options.show_tooltip:
        heatmap_kwargs.update(text=text, hovertemplate="%{text}<extra></extra>")
    else:
        heatmap_kwargs.update(hoverinfo="skip")
    if options.show_legend:
        heatmap_kwargs["colorbar"] = dict(
            title="°C",
            orientation="h",
            x=0.0,
            xanchor="left",
            y=-0.28,
            yanchor="top",
            len=min(1.0, layout.legend_width / max(1, layout.plot_right - layout.plot_left)),
            thickness=layout.legend_height,
            tickvals=list(range(0, n_colors + 1)),
            ticktext=[f"{v:.1f}" for v in (layout.temp_min, *layout.color_domain)],
            outlinecolor="black",
            outlinewidth=1,
        )

    fig = go.Figure(data=go.Heatmap(**heatmap_kwargs))
    fig.update_layout(
        title=dict(
            text=f"<b>{layout.title}</b><br><sup>{layout.description}</sup>",
            x=0.5,
            xanchor="center",
        ),
        width=layout.width,
        height=layout.height,
        margin=dict(l=layout.margin["l"], r=layout.margin["r"], t=layout.margin["t"] + 60, b=layout.margin["b"]),
        plot_bgcolor="white",
    )
    fig.update_xaxes(
        tickmode="array",
        tickvals=list(layout.x_ticks),
        title=options.x_label if options.show_labels else None,
        showgrid=False,
    )
    fig.update_yaxes(
        autorange="reversed",
        title=options.y_label if options.show_labels else None,
        title_standoff=5,
        showgrid=False,
    )
    return fig


def _layout_payload(layout: HeatMapLayout) -> Dict[str, Any]:
    return {
        "width": layout.width,
        "height": layout.height,
        "margin": layout.margin,
        "cells": [
            {
                "x": c.x,
                "y": c.y,
                "w": c.width,
                "h": c.height,
                "fill": c.color,
                "year": c.year,
                "month": c.month_index,
                "temp": c.temperature,
                "tip": f200__tooltip_lines(c),
            }
            for c in layout.cells
        ],
        "years": list(layout.years),
        "xTicks": list(layout.x_ticks),
        "yTicks": [[i, name] for i, name in layout.y_ticks],
        "domain": list(layout.color_domain),
        "legend": [
            {"lower": b.lower, "upper": b.upper, "fill": b.color, "x": b.x, "w": b.width}
            for b in layout.legend
        ],
        "tempMin": layout.temp_min,
        "tempMax": layout.temp_max,
        "legendWidth": layout.legend_width,
        "legendHeight": layout.legend_height,
    }


def f202__d3_heatmap_html(
    layout: HeatMapLayout,
    options: Optional[HeatMapOptions] = None,
) -> str:
    """
    Self-contained D3 page drawing the precomputed layout.

    Geometry and colors come from Python; D3 only creates the SVG elements,
    the axes and the hover tooltip.
    """
    options = options or HeatMapOptions()
    data_json = json.dumps(_layout_payload(layout), ensure_ascii=False)
    opts_json = json.dumps(
        {
            "showTooltip": bool(options.show_tooltip),
            "showLegend": bool(options.show_legend),
            "showLabels": bool(options.show_labels),
            "xLabel": options.x_label,
            "yLabel": options.y_label,
        },
        ensure_ascii=False,
    )

    return f"""
<!doctype html>
<meta charset="utf-8" />
<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Inter:wght@400;600&display=swap">
<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Lora:wght@400;600&display=swap">
<style>
  :root {{
    --font: Inter, Helvetica, Arial, sans-serif;
    --serif-font: 'Lora', 'Source Serif Pro', Georgia, serif;
    --fs: 13px;
    --fg: #222;
  }}
  body {{ font-family: var(--font); margin: 0; }}
  .heading {{ display: flex; flex-direction: column; align-items: center; }}
  #title {{ font: 600 22px var(--serif-font); color: var(--fg); margin: 8px 0 2px; }}
  #description {{ font: 400 15px var(--font); color: var(--fg); margin: 0 0 8px; }}
  .scroll {{ width: 100%; overflow-x: auto; }}
  svg text {{ font-family: var(--font); font-size: var(--fs); fill: var(--fg); }}
  .cell:hover {{ stroke: black; }}
  .axis-label {{ text-anchor: middle; }}
  #tooltip {{
    position: absolute;
    pointer-events: none;
    display: none;
    flex-direction: column;
    align-items: center;
    min-width: 50px;
    padding: 6px 12px;
    border-radius: 6px;
    background: rgba(0,0,0,0.8);
    color: white;
    font: 600 12px var(--font);
  }}
</style>

<div class="heading">
  <h1 id="title">{html.escape(layout.title)}</h1>
  <h3 id="description">{html.escape(layout.description)}</h3>
</div>
<div class="scroll"><div id="chart"></div></div>
<div id="tooltip"></div>

<script src="https://cdn.jsdelivr.net/npm/d3@7/dist/d3.min.js"></script>
<script>
(function() {{
  const L = {data_json};
  const O = {opts_json};
  const W = L.width, H = L.height, M = L.margin;

  const svg = d3.select("#chart").append("svg")
    .attr("width", W)
    .attr("height", H);

  // Axes only position ticks; the bands were computed upstream.
  const x = d3.scaleBand().domain(L.years.map(String)).range([M.l, W - M.r]);
  const y = d3.scaleBand().domain(d3.range(12).map(String)).rangeRound([M.t, H - M.b]);
  const monthName = new Map(L.yTicks.map(([i, name]) => [String(i), name]));

  svg.append("g")
    .attr("id", "x-axis")
    .attr("transform", `translate(0,${{H - M.b}})`)
    .call(d3.axisBottom(x).tickValues(L.xTicks.map(String)));

  svg.append("g")
    .attr("id", "y-axis")
    .attr("transform", `translate(${{M.l}},0)`)
    .call(d3.axisLeft(y).tickFormat((m) => monthName.get(m)));

  const tip = d3.select("#tooltip");
  const cells = svg.append("g").attr("class", "map")
    .selectAll("rect")
    .data(L.cells)
    .join("rect")
    .attr("class", "cell")
    .attr("data-month", (d) => d.month)
    .attr("data-year", (d) => d.year)
    .attr("data-temp", (d) => d.temp)
    .attr("x", (d) => d.x)
    .attr("y", (d) => d.y)
    .attr("width", (d) => d.w)
    .attr("height", (d) => d.h)
    .attr("fill", (d) => d.fill);

  if (O.showTooltip) {{
    cells
      .on("mouseover", function(event, d) {{
        tip.attr("data-year", d.year)
          .html(d.tip.map((t) => `<span>${{t}}</span>`).join(""))
          .style("display", "flex");
      }})
      .on("mousemove", function(event) {{
        tip.style("left", (event.pageX + 12) + "px").style("top", (event.pageY - 48) + "px");
      }})
      .on("mouseout", function() {{
        tip.style("display", "none");
      }});
  }}

  if (O.showLabels) {{
    svg.append("text")
      .attr("class", "axis-label")
      .attr("x", (W - M.l - M.r) / 2 + M.l)
      .attr("y", H - M.b + 40)
      .text(O.xLabel);
    svg.append("text")
      .attr("class", "axis-label")
      .attr("transform", "rotate(-90)")
      .attr("x", -(H - M.b - M.t) / 2 - M.t)
      .attr("y", 20)
      .text(O.yLabel);
  }}

  if (O.showLegend) {{
    const lh = L.legendHeight;
    const legendX = d3.scaleLinear([L.tempMin, L.tempMax], [0, L.legendWidth]);
    const legend = svg.append("g")
      .attr("id", "legend")
      .attr("transform", `translate(${{M.l}},${{H - M.b + 48 - (2 * lh) / L.domain.length}})`);

    legend.append("g").selectAll("rect")
      .data(L.legend)
      .join("rect")
      .style("fill", (d) => d.fill)
      .style("stroke", "black")
      .attr("x", (d) => d.x)
      .attr("y", 0)
      .attr("width", (d) => d.w)
      .attr("height", lh);

    legend.append("g")
      .attr("transform", `translate(0,${{lh}})`)
      .call(d3.axisBottom(legendX).tickSize(10).tickValues(L.domain).tickFormat(d3.format(".1f")));
  }}
}})();
</script>
"""
