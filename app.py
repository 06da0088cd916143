import logging

import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from core.config import LOG_LEVEL
from core.database import Base, engine, get_db_context
from core.logging_config import setup_logging
import models  # noqa: F401
from services.patient_service import get_all_patients
from services.portfolio_service import list_portfolios

logger = logging.getLogger(__name__)


def go_to(page_path: str):
    st.switch_page(page_path)


def main():
    st.set_page_config(
        page_title="Clinic Case Search",
        page_icon="🩺",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    setup_logging(LOG_LEVEL)

    try:
        Base.metadata.create_all(bind=engine)
        with get_db_context() as db:
            patient_total = len(get_all_patients(db))
            portfolio_total = len(list_portfolios(db))
    except SQLAlchemyError as e:
        logger.exception("Could not open the clinic database")
        st.error(f"Database unavailable: {e}")
        return

    st.title("Clinic Case Search")
    st.caption(f"{patient_total} patients • {portfolio_total} portfolios")
    st.write("---")

    c1, c2, c3 = st.columns(3)

    with c1:
        st.markdown("### Case Search")
        st.write("Find patients by demographics, consents, visits and treatments.")
        if st.button("Open Case Search"):
            go_to("pages/case_search.py")

    with c2:
        st.markdown("### Compare Visits")
        st.write("Line up before and after photos of two visits.")
        if st.button("Open Compare"):
            go_to("pages/compare_visits.py")

    with c3:
        st.markdown("### Portfolios")
        st.write("Review curated before/after collections.")
        if st.button("Open Portfolios"):
            go_to("pages/portfolio.py")


if __name__ == "__main__":
    main()
