import json
import logging
import math
from pathlib import Path
from typing import Any, Mapping

import numpy as np
import pandas as pd
import requests
import streamlit as st

from .fn__libs_models import (
    Dataset,
    EmptyDatasetError,
    MalformedRecordError,
    TemperatureRecord,
)

logger = logging.getLogger("heatlibs.libs")

DATA_URL = (
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/global-temperature.json"
)
RECORD_FIELDS = ("year", "month", "variance")


def f101__inject_inter_font() -> None:
    """
    Apply Inter as the default font across the Streamlit UI, serif headings.
    """
    st.markdown(
        """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap');
@import url('https://fonts.googleapis.com/css2?family=Lora:wght@400;600;700&display=swap');

html, body, .stApp {
  font-family: 'Inter', system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif;
}

h1, h2, h3, h4,
.stMarkdown h1, .stMarkdown h2, .stMarkdown h3, .stMarkdown h4 {
  font-family: 'Lora', 'Source Serif Pro', 'Source Serif 4', serif;
}

[data-testid="stSidebar"] {
  font-size: 0.85rem !important;
}

/* The heat map is wider than most screens; let the iframe scroll sideways. */
[data-testid="stIFrame"] {
  overflow-x: auto !important;
}
</style>
        """,
        unsafe_allow_html=True,
    )


def f002__custom_hr(margin_top: float = 0.5, margin_bottom: float = 0.5) -> None:
    """Thin grey divider with configurable spacing (rem)."""
    st.markdown(
        f"<div style='margin: {margin_top}rem 0 {margin_bottom}rem 0; height: 1px; background-color: #ccc;'></div>",
        unsafe_allow_html=True,
    )


def f003__vertical_spacing(height_px: float = 20.0) -> None:
    st.markdown(
        f"<div style='height: {height_px}px; width: 100%;'></div>",
        unsafe_allow_html=True,
    )


# -----------------------------
# Dataset loading / validation
# -----------------------------


def _is_number(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def _bad_rows(mask: pd.Series, limit: int = 10) -> str:
    rows = mask[mask].index.tolist()
    shown = ", ".join(str(r) for r in rows[:limit])
    return shown + (f" (+{len(rows) - limit} more)" if len(rows) > limit else "")


def f110__parse_dataset(payload: Mapping[str, Any]) -> Dataset:
    """
    Validate a `{baseTemperature, monthlyVariance: [{year, month, variance}]}` payload.

    The whole dataset is rejected on the first class of problem found, so a
    NaN never reaches the color scale.
    """
    if not isinstance(payload, Mapping):
        raise MalformedRecordError(f"Dataset must be a JSON object, got {type(payload).__name__}")

    base = payload.get("baseTemperature")
    if not _is_number(base) or not math.isfinite(float(base)):
        raise MalformedRecordError(f"baseTemperature must be a finite number, got {base!r}")

    raw = payload.get("monthlyVariance")
    if raw is None:
        raise MalformedRecordError("monthlyVariance is missing")
    if not isinstance(raw, (list, tuple)):
        raise MalformedRecordError(f"monthlyVariance must be a list, got {type(raw).__name__}")
    if len(raw) == 0:
        raise EmptyDatasetError("monthlyVariance is empty")

    not_objects = [i for i, r in enumerate(raw) if not isinstance(r, Mapping)]
    if not_objects:
        raise MalformedRecordError(f"Records must be objects; rows {not_objects[:10]} are not")

    df = pd.DataFrame.from_records(list(raw))
    missing = [c for c in RECORD_FIELDS if c not in df.columns]
    if missing:
        raise MalformedRecordError(f"Records are missing fields: {missing}")
    df = df[list(RECORD_FIELDS)].copy()

    for col in RECORD_FIELDS:
        not_numeric = df[col].astype(object).map(lambda v: not _is_number(v))
        values = pd.to_numeric(df[col].where(~not_numeric), errors="coerce").astype(float)
        bad = not_numeric | values.isna() | ~np.isfinite(values)
        if bad.any():
            raise MalformedRecordError(f"Field '{col}' is missing or not numeric in rows: {_bad_rows(bad)}")
        df[col] = values

    bad = (df["year"] % 1 != 0) | (df["month"] % 1 != 0)
    if bad.any():
        raise MalformedRecordError(f"year/month must be integers in rows: {_bad_rows(bad)}")

    bad = ~df["month"].between(1, 12)
    if bad.any():
        raise MalformedRecordError(f"month must be within 1-12 in rows: {_bad_rows(bad)}")

    records = tuple(
        TemperatureRecord(int(y), int(m), float(v))
        for y, m, v in df.itertuples(index=False, name=None)
    )
    logger.debug("parsed dataset: %d records, base %.3f", len(records), float(base))
    return Dataset(base_temperature=float(base), records=records)


def f111__load_dataset_json(path: Path) -> Dataset:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    return f110__parse_dataset(payload)


def f112__fetch_dataset(url: str = DATA_URL, timeout: float = 30) -> Dataset:
    """Download and validate the dataset; HTTP errors propagate."""
    logger.info("fetching dataset from %s", url)
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return f110__parse_dataset(r.json())


def f113__dataset_to_frame(dataset: Dataset) -> pd.DataFrame:
    """Tabular view: year, month, month_name, variance, temperature."""
    df = pd.DataFrame(
        [(r.year, r.month, r.month_name, r.variance) for r in dataset.records],
        columns=["year", "month", "month_name", "variance"],
    )
    df["temperature"] = dataset.base_temperature + df["variance"]
    return df
