"""
Data model for the temperature heat map: input records, computed layout and errors.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from typing import Dict, List, Tuple


class EmptyDatasetError(ValueError):
    """Raised when a dataset has no records (min/max temperature are undefined)."""


class MalformedRecordError(ValueError):
    """Raised when a record or the base temperature is missing or not numeric."""


@dataclass(frozen=True)
class TemperatureRecord:
    year: int
    month: int  # 1..12
    variance: float  # °C offset from the dataset base temperature

    @property
    def month_index(self) -> int:
        return self.month - 1

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]


@dataclass(frozen=True)
class Dataset:
    base_temperature: float
    records: Tuple[TemperatureRecord, ...]

    def absolute_temperature(self, record: TemperatureRecord) -> float:
        return self.base_temperature + record.variance

    @property
    def first_year(self) -> int | None:
        return self.records[0].year if self.records else None

    @property
    def last_year(self) -> int | None:
        return self.records[-1].year if self.records else None

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class Band:
    offset: float
    size: float

    @property
    def end(self) -> float:
        return self.offset + self.size


@dataclass(frozen=True)
class HeatMapCell:
    year: int
    month: int
    month_index: int
    variance: float
    temperature: float
    x: float
    y: float
    width: float
    height: float
    bucket: int
    color: str


@dataclass(frozen=True)
class LegendBucket:
    lower: float
    upper: float
    color: str
    x: float = 0.0
    width: float = 0.0


@dataclass(frozen=True)
class HeatMapLayout:
    """Everything a renderer needs to draw the heat map, in pixels and °C."""

    cells: Tuple[HeatMapCell, ...]
    years: Tuple[int, ...]  # distinct years, band order
    color_domain: Tuple[float, ...]
    palette: Tuple[str, ...]
    legend: Tuple[LegendBucket, ...]
    x_ticks: Tuple[int, ...]
    y_ticks: Tuple[Tuple[int, str], ...]  # (month_index, month name)
    temp_min: float
    temp_max: float
    base_temperature: float
    title: str
    description: str
    width: int
    height: int
    margin: Dict[str, int] = field(default_factory=dict)
    legend_width: int = 400
    legend_height: int = 24

    @property
    def plot_left(self) -> int:
        return self.margin["l"]

    @property
    def plot_right(self) -> int:
        return self.width - self.margin["r"]

    @property
    def plot_top(self) -> int:
        return self.margin["t"]

    @property
    def plot_bottom(self) -> int:
        return self.height - self.margin["b"]


@dataclass(frozen=True)
class HeatMapOptions:
    show_tooltip: bool = True
    show_legend: bool = True
    show_labels: bool = True
    x_label: str = "Years"
    y_label: str = "Months"


def records_from_tuples(rows: List[Tuple[int, int, float]]) -> Tuple[TemperatureRecord, ...]:
    """Build records from plain (year, month, variance) tuples."""
    return tuple(TemperatureRecord(int(y), int(m), float(v)) for y, m, v in rows)
