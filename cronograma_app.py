import streamlit as st

st.set_page_config(
    page_title="Cronograma de clases",
    page_icon="📅",
    layout="wide",
)

from cronograma.ui import render_schedule_page

render_schedule_page()
