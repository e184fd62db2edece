# Bilingual UI labels: EN / IT
# Use label(key) or label(key, lang) for current or explicit language.

LABELS = {
    "EN": {
        "app_title": "Global Temperature Heat Map",
        "welcome": "Welcome",
        "heat_map": "Heat Map",
        "table_view": "Table View",
        "data_source": "Data Source",
        "remote_dataset": "Remote dataset",
        "upload_json": "Upload JSON",
        "renderer": "Renderer",
        "show_tooltip": "Tooltip",
        "show_legend": "Legend",
        "show_labels": "Axis labels",
        "bucket_count": "Color buckets",
        "chart_width": "Width (px)",
        "chart_height": "Height (px)",
        "years": "Years",
        "months": "Months",
        "download_csv": "Download CSV",
    },
    "IT": {
        "app_title": "Mappa di calore delle temperature globali",
        "welcome": "Benvenuti",
        "heat_map": "Mappa di calore",
        "table_view": "Tabella",
        "data_source": "Origine dati",
        "remote_dataset": "Dataset remoto",
        "upload_json": "Carica JSON",
        "renderer": "Visualizzazione",
        "show_tooltip": "Tooltip",
        "show_legend": "Legenda",
        "show_labels": "Etichette assi",
        "bucket_count": "Classi di colore",
        "chart_width": "Larghezza (px)",
        "chart_height": "Altezza (px)",
        "years": "Anni",
        "months": "Mesi",
        "download_csv": "Scarica CSV",
    },
}


def label(key: str, lang: str | None = None) -> str:
    """Return the label for `key` in the current or given language (default: EN)."""
    if lang is None:
        try:
            import streamlit as st
            lang = st.session_state.get("ui_lang", "EN")
        except Exception:
            lang = "EN"
    return LABELS.get(lang, LABELS["EN"]).get(key, key)
