import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from core.helpers import render_sidebar
from services.portfolio_service import run_list_portfolios, run_list_portfolio_items


def _show_side(path, label, visit_date):
    caption = f"{label} • {visit_date}" if visit_date else label
    if not path:
        st.info(f"{label}: no matching photo")
        return
    try:
        st.image(path, caption=caption, use_container_width=True)
    except Exception:
        st.warning(f"Image not found: {path}")


def main():
    render_sidebar()
    st.title("Portfolios")

    try:
        portfolios = run_list_portfolios()
    except SQLAlchemyError as e:
        st.error(f"Could not load portfolios: {e}")
        return

    if not portfolios:
        st.info("No portfolios yet.")
        return

    labels = {p["id"]: f"{p['title']} ({p['itemCount']})" for p in portfolios}
    portfolio_id = st.selectbox("Portfolio", list(labels), format_func=labels.get)

    items = run_list_portfolio_items(portfolio_id)
    if not items:
        st.info("This portfolio is empty.")
        return

    for item in items:
        name = f"{item['patientFirstName']} {item['patientLastName']}".strip()
        key = item["photoPosition"] or "-"
        if item["photoState"]:
            key += f" ({item['photoState']})"
        st.markdown(f"#### {name} • {key}")
        left, right = st.columns(2)
        with left:
            _show_side(item["beforeThumbnailPath"] or item["beforePhotoPath"], "Before", item["beforeDate"])
        with right:
            _show_side(item["afterThumbnailPath"] or item["afterPhotoPath"], "After", item["afterDate"])
        st.markdown("---")


if __name__ == "__main__":
    main()
