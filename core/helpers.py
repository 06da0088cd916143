from datetime import date
from typing import Optional

import streamlit as st

from core.time_utils import age_on, today_utc


def format_age(birthday: Optional[date], today: Optional[date] = None) -> str:
    """Age in years for display, "-" when the birthday is unknown."""
    if birthday is None:
        return "-"
    return str(age_on(birthday, today or today_utc()))


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else "-"


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar():
    """Render the clinic sidebar menu.

    Items:
    - Case Search
    - Compare Visits
    - Portfolios
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Clinic Menu")
        if st.button("Case Search", use_container_width=True):
            st.switch_page("pages/case_search.py")
        if st.button("Compare Visits", use_container_width=True):
            st.switch_page("pages/compare_visits.py")
        if st.button("Portfolios", use_container_width=True):
            st.switch_page("pages/portfolio.py")
        st.divider()
        if st.button("Home", use_container_width=True):
            st.switch_page("app.py")
