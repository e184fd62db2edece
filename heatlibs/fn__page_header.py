# IMPORT LIBRARIES
import streamlit as st

from .fn__libs_bilingual import label


def f001__create_page_header():

    ##### PAGE CONFIG
    st.set_page_config(page_title="Global Temperature Heat Map", page_icon="🌡️", layout="wide")

    st.markdown("""
        <style>
            .block-container {
                padding-top: 0.5rem;
                padding-bottom: 0.5rem;
                padding-left: 2rem;
                padding-right: 2rem;
            }
            h2.custom-title {
                font-family: 'Lora', 'Source Serif Pro', 'Source Serif 4', serif;
                font-weight: 400;
                color: #313695;
                margin-bottom: -20px;
            }
            .stRadio label {
                margin-bottom: 0.15rem !important;
            }
            .stRadio [role="radiogroup"] {
                margin-top: 0 !important;
            }
        </style>
    """, unsafe_allow_html=True)

    ##### TOP CONTAINER
    title_col, lang_col = st.columns([200, 40])

    with lang_col:
        st.session_state.setdefault("ui_lang", "EN")
        lang_choice = st.radio(
            "App Language",
            options=["🇬🇧 ENG", "🇮🇹 ITA"],
            index=1 if st.session_state["ui_lang"] == "IT" else 0,
            key="header_lang_radio",
            horizontal=True,
            label_visibility="visible",
        )
        st.session_state["ui_lang"] = "IT" if "ITA" in lang_choice else "EN"

    with title_col:
        st.write('')
        st.markdown(
            f"""
            <div style="margin: -18px 0px;">
                <h2 class="custom-title">{label("app_title")}</h2>
            </div>
            """,
            unsafe_allow_html=True
        )
