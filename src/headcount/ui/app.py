"""Streamlit page for the registered-vs-actual headcount chart.

Run with:  streamlit run src/headcount/ui/app.py   (or ``headcount ui``)
"""
import asyncio

import streamlit as st

from headcount.config import settings
from headcount.logging import logger
from headcount.schemas.widget import WidgetInputs, WidgetState
from headcount.ui.chart import SUBTITLE, TITLE, build_figure
from headcount.ui.state import get_widget, inputs_changed, reset_widget

st.set_page_config(page_title=TITLE, layout="centered")

# --- Sidebar: widget inputs ---
with st.sidebar:
    st.header("Data source")
    fetch_url = st.text_input(
        "Legacy fetch URL",
        value="",
        help=f"Leave empty to use the attendee service at {settings.attendees_endpoint}",
    ).strip()
    height = st.slider("Chart height (px)", min_value=200, max_value=800, value=settings.CHART_HEIGHT, step=20)
    if st.button("Reload"):
        reset_widget()

inputs = WidgetInputs(fetch_url=fetch_url or None, height=height)
widget = get_widget()

if widget.state is WidgetState.LOADING or inputs_changed(widget, inputs):
    with st.spinner("Loading attendees…"):
        asyncio.run(widget.refresh(inputs))

view = widget.view()

# --- Header ---
c1, c2 = st.columns([3, 2])
c1.subheader(TITLE)
c2.caption(SUBTITLE)

if view.state is WidgetState.ERROR:
    logger.info("Rendering error state: %s", view.error)
    st.error(f"Error: {view.error}")
    st.stop()

st.plotly_chart(build_figure(view.chart_rows, height=height), use_container_width=True)
st.caption(view.summary)
