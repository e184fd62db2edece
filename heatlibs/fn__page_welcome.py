"""
Welcome page content: bilingual copy describing how to read the heat map.
"""
import streamlit as st

COPY = {
    "EN": {
        "title": "Welcome",
        "tagline": "Monthly global land-surface temperature, one colored cell per month since 1753.",
        "read_title": "How to read the map",
        "step1": "Each **column** is a year, each **row** a calendar month (January on top).",
        "step2": "The **color** is the absolute temperature: base temperature plus the monthly variance.",
        "step3": "Hover a cell to see the month, its temperature and its variance from the base.",
        "scale_title": "Color scale",
        "scale_body": (
            "The range between the coldest and the warmest month is split into **equal steps**. "
            "Each step gets one color of a diverging palette, from **blue** (cold) to **red** (warm). "
            "The legend under the map shows where each step starts and ends."
        ),
        "data_title": "Data",
        "data_body": (
            "The dataset holds a single **base temperature** and, for every month, the **variance** "
            "from that base in °C. Load the public reference file or upload your own JSON with the "
            "same shape: `baseTemperature` and `monthlyVariance` (`year`, `month`, `variance`)."
        ),
    },
    "IT": {
        "title": "Benvenuti",
        "tagline": "Temperatura mensile globale delle terre emerse, una cella colorata per ogni mese dal 1753.",
        "read_title": "Come leggere la mappa",
        "step1": "Ogni **colonna** è un anno, ogni **riga** un mese (gennaio in alto).",
        "step2": "Il **colore** è la temperatura assoluta: temperatura di base più la variazione mensile.",
        "step3": "Passa sopra una cella per vedere mese, temperatura e variazione rispetto alla base.",
        "scale_title": "Scala di colori",
        "scale_body": (
            "L'intervallo tra il mese più freddo e quello più caldo è diviso in **passi uguali**. "
            "Ogni passo ha un colore di una palette divergente, dal **blu** (freddo) al **rosso** (caldo). "
            "La legenda sotto la mappa mostra dove inizia e finisce ogni passo."
        ),
        "data_title": "Dati",
        "data_body": (
            "Il dataset contiene una **temperatura di base** e, per ogni mese, la **variazione** "
            "rispetto alla base in °C. Carica il file pubblico di riferimento o un tuo JSON con la "
            "stessa struttura: `baseTemperature` e `monthlyVariance` (`year`, `month`, `variance`)."
        ),
    },
}


def render_welcome_page() -> None:
    """Render the Welcome tab. Language from st.session_state['ui_lang']."""
    lang = st.session_state.get("ui_lang", "EN")
    c = COPY.get(lang, COPY["EN"])

    st.markdown(f"##### {c['title']}")
    st.markdown(c["tagline"])
    st.markdown("")

    col1, col2, col3 = st.columns([3, 2, 2], gap="medium")

    with col1:
        st.markdown(f"##### {c['read_title']}")
        st.markdown(f"1. {c['step1']}")
        st.markdown(f"2. {c['step2']}")
        st.markdown(f"3. {c['step3']}")

    with col2:
        st.markdown(f"##### {c['scale_title']}")
        st.markdown(c["scale_body"])

    with col3:
        st.markdown(f"##### {c['data_title']}")
        st.markdown(c["data_body"])
