"""Session-state helpers for the Streamlit page.

Only reads/writes ``st.session_state``; no network calls.
"""
import streamlit as st
from typing import Optional

from headcount.infra.attendees import HttpAttendeeSource
from headcount.schemas.widget import WidgetInputs
from headcount.ui.widget import AttendanceWidget

_WIDGET_KEY = "headcount_widget"


def get_widget() -> AttendanceWidget:
    """Return the ``AttendanceWidget`` cached for the current Streamlit session."""
    if _WIDGET_KEY not in st.session_state:
        st.session_state[_WIDGET_KEY] = AttendanceWidget(HttpAttendeeSource())
    return st.session_state[_WIDGET_KEY]


def reset_widget() -> None:
    """Tear down the cached widget so the next run starts from scratch."""
    widget: Optional[AttendanceWidget] = st.session_state.pop(_WIDGET_KEY, None)
    if widget is not None:
        widget.teardown()


def inputs_changed(widget: AttendanceWidget, inputs: WidgetInputs) -> bool:
    """True when the data-affecting inputs differ from what the widget last resolved."""
    current = widget.inputs
    return (current.attendees, current.fetch_url) != (inputs.attendees, inputs.fetch_url)
