import json
import time

import requests
import streamlit as st
import streamlit.components.v1 as components

import heatlibs.fn__libs as h
import heatlibs.fn__libs_charts as charts
import heatlibs.fn__libs_scales as scales
from heatlibs.fn__libs_bilingual import label
from heatlibs.fn__libs_models import (
    EmptyDatasetError,
    HeatMapOptions,
    MalformedRecordError,
)
from heatlibs.fn__page_header import f001__create_page_header
from heatlibs.fn__page_welcome import render_welcome_page

f001__create_page_header()
h.f101__inject_inter_font()


def _record_timing(name: str, seconds: float, notes: str | None = None) -> None:
    timings = st.session_state.setdefault("code_timing", {})
    timings[name] = {"seconds": float(seconds), "notes": notes or ""}


def _timed(name: str, fn, notes: str | None = None):
    start = time.perf_counter()
    result = fn()
    _record_timing(name, time.perf_counter() - start, notes=notes)
    return result


@st.cache_data(show_spinner=False)
def _fetch_remote_dataset(url: str):
    return h.f112__fetch_dataset(url)


# -----------------------------
# Sidebar
# -----------------------------
with st.sidebar:
    st.markdown(f"##### {label('data_source')}")
    source = st.radio(
        label("data_source"),
        options=["remote", "upload"],
        format_func=lambda v: label("remote_dataset") if v == "remote" else label("upload_json"),
        key="data_source_radio",
        label_visibility="collapsed",
    )
    upload = None
    if source == "upload":
        upload = st.file_uploader(label("upload_json"), type=["json"], key="dataset_upload")
    else:
        data_url = st.text_input("URL", value=h.DATA_URL, key="dataset_url")

    h.f002__custom_hr()
    st.markdown(f"##### {label('renderer')}")
    renderer = st.radio(
        label("renderer"),
        options=["Plotly", "D3"],
        horizontal=True,
        key="renderer_radio",
        label_visibility="collapsed",
    )
    show_tooltip = st.toggle(label("show_tooltip"), value=True, key="show_tooltip")
    show_legend = st.toggle(label("show_legend"), value=True, key="show_legend")
    show_labels = st.toggle(label("show_labels"), value=True, key="show_labels")

    h.f002__custom_hr()
    bucket_count = st.slider(label("bucket_count"), min_value=3, max_value=11, value=scales.BUCKET_COUNT)
    chart_width = st.number_input(
        label("chart_width"), min_value=400, max_value=4000, value=scales.DEFAULT_WIDTH, step=50
    )
    chart_height = st.number_input(
        label("chart_height"), min_value=300, max_value=2000, value=scales.DEFAULT_HEIGHT, step=20
    )


# -----------------------------
# Data
# -----------------------------
dataset = None
try:
    if source == "upload":
        if upload is not None:
            dataset = h.f110__parse_dataset(json.loads(upload.getvalue().decode("utf-8")))
    else:
        with st.spinner("Loading dataset..."):
            dataset = _timed("f112__fetch_dataset", lambda: _fetch_remote_dataset(data_url))
except EmptyDatasetError:
    st.error("The dataset has no monthly records.")
    st.stop()
except (MalformedRecordError, json.JSONDecodeError, UnicodeDecodeError) as e:
    st.error(f"Invalid dataset: {e}")
    st.stop()
except requests.RequestException as e:
    st.error(f"Could not download the dataset: {e}")
    st.stop()

top_tabs = st.tabs([label("welcome"), label("heat_map"), label("table_view")])

with top_tabs[0]:
    render_welcome_page()

if dataset is None:
    with top_tabs[1]:
        st.info("Upload a JSON dataset to draw the heat map.")
    st.stop()

layout = _timed(
    "f310__build_heatmap_layout",
    lambda: scales.f310__build_heatmap_layout(
        dataset,
        width=int(chart_width),
        height=int(chart_height),
        bucket_count=int(bucket_count),
    ),
    notes="Color domain, bands and legend for all records.",
)
options = HeatMapOptions(
    show_tooltip=show_tooltip,
    show_legend=show_legend,
    show_labels=show_labels,
    x_label=label("years"),
    y_label=label("months"),
)

with top_tabs[1]:
    if renderer == "D3":
        html = _timed("f202__d3_heatmap_html", lambda: charts.f202__d3_heatmap_html(layout, options))
        components.html(html, height=layout.height + 120, scrolling=True)
    else:
        fig = _timed("f201__plotly_heatmap", lambda: charts.f201__plotly_heatmap(layout, options))
        st.plotly_chart(fig, width="content", key="heatmap_plotly")

    with st.expander("Color scale"):
        st.dataframe(
            [
                {"from (°C)": round(b.lower, 2), "to (°C)": round(b.upper, 2), "color": b.color}
                for b in layout.legend
            ],
            hide_index=True,
        )

with top_tabs[2]:
    table = h.f113__dataset_to_frame(dataset)
    num_cols = table.select_dtypes("number").columns.drop(["year", "month"])
    table[num_cols] = table[num_cols].round(3)
    st.dataframe(table, width="stretch", height=620, hide_index=True)
    st.download_button(
        label("download_csv"),
        data=table.to_csv(index=False).encode("utf-8"),
        file_name="global_temperature_monthly.csv",
        mime="text/csv",
    )
    timings = st.session_state.get("code_timing", {})
    if timings:
        st.caption(" · ".join(f"{k}: {v['seconds'] * 1000:.0f} ms" for k, v in timings.items()))
