"""
Grid layout and color binning for the monthly temperature heat map.

Turns a Dataset into positioned, colored cells:

- threshold color scale over absolute temperature (base + variance)
- band scale for years (x) and months (y)
- legend buckets placed on a linear axis
"""
from __future__ import annotations

import calendar
import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import plotly.colors as pc

from .fn__libs_models import (
    Band,
    Dataset,
    EmptyDatasetError,
    HeatMapCell,
    HeatMapLayout,
    LegendBucket,
    TemperatureRecord,
)

logger = logging.getLogger("heatlibs.scales")

BUCKET_COUNT = 11
DEFAULT_WIDTH = 1600
DEFAULT_HEIGHT = 560
DEFAULT_MARGIN = dict(t=20, r=20, b=120, l=90)
LEGEND_WIDTH = 400
LEGEND_HEIGHT = 24
MONTHS = 12
TITLE = "Monthly Global Land-Surface Temperature"


def _rgb_to_hex(rgb_tuple):
    """Convert RGB tuple to hex color string."""
    return "#{:02x}{:02x}{:02x}".format(*(int(round(c)) for c in rgb_tuple[:3]))


def _js_round(value: float) -> int:
    # half-up, like Math.round; Python's round() is half-to-even
    return int(math.floor(value + 0.5))


def _temperature_extent(records: Sequence[TemperatureRecord], base_temperature: float) -> Tuple[float, float]:
    if len(records) == 0:
        raise EmptyDatasetError("Cannot compute a temperature extent from an empty record set")
    temps = base_temperature + np.fromiter((r.variance for r in records), dtype=np.float64, count=len(records))
    return float(temps.min()), float(temps.max())


def f301__compute_color_domain(
    records: Sequence[TemperatureRecord],
    base_temperature: float,
    bucket_count: int = BUCKET_COUNT,
) -> List[float]:
    """
    Threshold boundaries splitting [min, max] absolute temperature into equal steps.

    Returns `bucket_count` boundaries, i.e. `bucket_count + 1` buckets.
    When every record has the same temperature all boundaries collapse to it.
    """
    if int(bucket_count) != bucket_count or bucket_count < 1:
        raise ValueError(f"bucket_count must be a positive integer, got {bucket_count!r}")
    bucket_count = int(bucket_count)

    min_temp, max_temp = _temperature_extent(records, base_temperature)
    step = (max_temp - min_temp) / bucket_count
    domain = [min(min_temp + (i + 1) * step, max_temp) for i in range(bucket_count - 1)]
    # the top boundary is the maximum itself, so the hottest record always sits in bucket_count - 1
    domain.append(max_temp)
    logger.debug("color domain: min=%.3f max=%.3f step=%.4f", min_temp, max_temp, step)
    return domain


def f306__bucket_index(value: float, domain: Sequence[float]) -> int:
    """Number of boundaries strictly below `value`."""
    if value is None or math.isnan(value):
        raise ValueError("Cannot bucket a NaN temperature")
    return int(np.searchsorted(np.asarray(domain, dtype=np.float64), value, side="left"))


def f306b__bucket_indices(values: Iterable[float], domain: Sequence[float]) -> np.ndarray:
    """Vectorised f306__bucket_index."""
    arr = np.asarray(list(values), dtype=np.float64)
    if np.isnan(arr).any():
        raise ValueError("Cannot bucket NaN temperatures")
    return np.searchsorted(np.asarray(domain, dtype=np.float64), arr, side="left")


def f302__assign_color(absolute_temp: float, domain: Sequence[float], palette: Sequence[str]) -> str:
    """Palette color of the bucket holding `absolute_temp`."""
    if len(palette) != len(domain) + 1:
        raise ValueError(
            f"palette needs {len(domain) + 1} colors for {len(domain)} boundaries, got {len(palette)}"
        )
    return palette[f306__bucket_index(absolute_temp, domain)]


def f309__diverging_palette(n_colors: int, scheme: str = "RdYlBu", reverse: bool = True) -> List[str]:
    """
    Sample `n_colors` evenly from a plotly named colorscale, as hex strings.

    RdYlBu runs red -> blue, so the default reversed palette starts cold (blue).
    """
    if n_colors < 1:
        raise ValueError(f"n_colors must be >= 1, got {n_colors}")
    points = [i / (n_colors - 1) for i in range(n_colors)] if n_colors > 1 else [0.0]
    sampled = pc.sample_colorscale(scheme, points)
    colors = [_rgb_to_hex(pc.unlabel_rgb(c)) for c in sampled]
    return colors[::-1] if reverse else colors


def _band_scale(
    domain: Sequence,
    pixel_range: Tuple[float, float],
    *,
    round_bands: bool = False,
    align: float = 0.5,
) -> Dict[object, Band]:
    """Equal-width contiguous bands, no padding. Rounded mode snaps to whole pixels."""
    n = len(domain)
    if n == 0:
        return {}
    r0, r1 = float(pixel_range[0]), float(pixel_range[1])
    reverse = r1 < r0
    start, stop = (r1, r0) if reverse else (r0, r1)

    step = (stop - start) / n
    if round_bands:
        step = math.floor(step)
    start += (stop - start - step * n) * align
    bandwidth = step
    if round_bands:
        start = _js_round(start)
        bandwidth = _js_round(bandwidth)

    offsets = [start + step * i for i in range(n)]
    if reverse:
        offsets.reverse()
    return {key: Band(offset, bandwidth) for key, offset in zip(domain, offsets)}


def f303__compute_year_band(years: Iterable[int], pixel_range: Tuple[float, float]) -> Dict[int, Band]:
    """One equal-width band per distinct year, in first-occurrence order."""
    distinct = list(dict.fromkeys(int(y) for y in years))
    return _band_scale(distinct, pixel_range, align=0.0)


def f304__compute_month_band(pixel_range: Tuple[float, float]) -> Dict[int, Band]:
    return _band_scale(list(range(MONTHS)), pixel_range, round_bands=True)


def f305__legend_bucket_ranges(
    domain: Sequence[float],
    palette: Sequence[str],
    temp_min: float,
    temp_max: float,
) -> List[Tuple[float, float, str]]:
    """(lower, upper, color) per bucket; together they tile [temp_min, temp_max]."""
    if len(palette) != len(domain) + 1:
        raise ValueError(
            f"palette needs {len(domain) + 1} colors for {len(domain)} boundaries, got {len(palette)}"
        )
    edges = [temp_min, *domain, temp_max]
    return [(edges[k], edges[k + 1], palette[k]) for k in range(len(palette))]


def f307__legend_swatches(
    ranges: Sequence[Tuple[float, float, str]],
    temp_min: float,
    temp_max: float,
    legend_width: float = LEGEND_WIDTH,
) -> List[LegendBucket]:
    span = temp_max - temp_min

    def _x(v: float) -> float:
        if span == 0:
            return legend_width / 2
        return (v - temp_min) / span * legend_width

    return [
        LegendBucket(lower=lo, upper=hi, color=color, x=_x(lo), width=_x(hi) - _x(lo))
        for lo, hi, color in ranges
    ]


def f308__year_tick_values(years: Iterable[int]) -> List[int]:
    return [y for y in dict.fromkeys(int(y) for y in years) if y % 10 == 0]


def f308b__month_tick_values() -> List[Tuple[int, str]]:
    return [(i, calendar.month_name[i + 1]) for i in range(MONTHS)]


def f310__build_heatmap_layout(
    dataset: Dataset,
    *,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    margin: Optional[dict] = None,
    bucket_count: int = BUCKET_COUNT,
    palette: Optional[Sequence[str]] = None,
    legend_width: int = LEGEND_WIDTH,
    legend_height: int = LEGEND_HEIGHT,
) -> HeatMapLayout:
    """
    Compute the full heat map geometry for a dataset.

    Cells carry pixel position, size, bucket and color; the legend carries
    swatch placement along [0, legend_width].
    """
    margin = {**DEFAULT_MARGIN, **(margin or {})}
    records = dataset.records

    domain = f301__compute_color_domain(records, dataset.base_temperature, bucket_count)
    temp_min, temp_max = _temperature_extent(records, dataset.base_temperature)
    palette = list(palette) if palette is not None else f309__diverging_palette(len(domain) + 1)
    if len(palette) != len(domain) + 1:
        raise ValueError(f"palette needs {len(domain) + 1} colors, got {len(palette)}")

    x_bands = f303__compute_year_band((r.year for r in records), (margin["l"], width - margin["r"]))
    y_bands = f304__compute_month_band((margin["t"], height - margin["b"]))

    temps = [dataset.absolute_temperature(r) for r in records]
    buckets = f306b__bucket_indices(temps, domain)

    cells = []
    for rec, temp, bucket in zip(records, temps, buckets):
        xb = x_bands[rec.year]
        yb = y_bands[rec.month_index]
        cells.append(
            HeatMapCell(
                year=rec.year,
                month=rec.month,
                month_index=rec.month_index,
                variance=rec.variance,
                temperature=temp,
                x=xb.offset,
                y=yb.offset,
                width=xb.size,
                height=yb.size,
                bucket=int(bucket),
                color=palette[int(bucket)],
            )
        )

    ranges = f305__legend_bucket_ranges(domain, palette, temp_min, temp_max)
    years = tuple(x_bands.keys())
    logger.debug("layout: %d cells, %d years, %d buckets", len(cells), len(years), len(palette))

    return HeatMapLayout(
        cells=tuple(cells),
        years=years,
        color_domain=tuple(domain),
        palette=tuple(palette),
        legend=tuple(f307__legend_swatches(ranges, temp_min, temp_max, legend_width)),
        x_ticks=tuple(f308__year_tick_values(years)),
        y_ticks=tuple(f308b__month_tick_values()),
        temp_min=temp_min,
        temp_max=temp_max,
        base_temperature=dataset.base_temperature,
        title=TITLE,
        description=f"{dataset.first_year} - {dataset.last_year}: base temperature {dataset.base_temperature}℃",
        width=width,
        height=height,
        margin=margin,
        legend_width=legend_width,
        legend_height=legend_height,
    )
