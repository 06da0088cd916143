import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from core.helpers import render_sidebar, format_date
from services.compare_service import run_compare_visit_photos
from services.patient_service import list_patients
from services.visit_service import get_visits_for_patient


def _show_photo(photo, caption):
    if photo is None:
        st.info("No photo")
        return
    path = photo.get("thumbnailPath") or photo.get("originalPath")
    try:
        st.image(path, caption=caption, use_container_width=True)
    except Exception:
        # photo files can go missing on disk
        st.warning(f"Image not found: {path}")


def main():
    render_sidebar()
    st.title("Compare Visits")

    try:
        patients = list_patients()
    except SQLAlchemyError as e:
        st.error(f"Could not load patients: {e}")
        return

    if not patients:
        st.info("No patients found.")
        return

    labels = {p.id: f"{p.last_name}, {p.first_name}" for p in patients}
    ids = list(labels)
    preselected = st.session_state.get("compare_patient_id")
    index = ids.index(preselected) if preselected in ids else 0
    patient_id = st.selectbox("Patient", ids, index=index, format_func=labels.get)

    try:
        visits = get_visits_for_patient(patient_id)
    except SQLAlchemyError as e:
        st.error(f"Could not load visits: {e}")
        return

    if len(visits) < 2:
        st.info("This patient needs at least two visits to compare.")
        return

    visit_labels = {v.id: format_date(v.date) for v in visits}
    visit_ids = list(visit_labels)
    c1, c2 = st.columns(2)
    with c1:
        before_id = st.selectbox("Before", visit_ids, index=len(visit_ids) - 1, format_func=visit_labels.get)
    with c2:
        after_id = st.selectbox("After", visit_ids, index=0, format_func=visit_labels.get)

    try:
        pairs = run_compare_visit_photos(before_id, after_id)
    except SQLAlchemyError as e:
        st.error(f"Could not compare visits: {e}")
        return

    if not pairs:
        st.info("Neither visit has positioned photos.")
        return

    # Matcher order is arbitrary; sort for a stable layout
    pairs.sort(key=lambda p: (p["position"], p["photoState"] or ""))
    for pair in pairs:
        title = pair["position"] + (f" ({pair['photoState']})" if pair["photoState"] else "")
        st.markdown(f"#### {title}")
        left, right = st.columns(2)
        with left:
            _show_photo(pair["beforePhoto"], f"Before • {visit_labels[before_id]}")
        with right:
            _show_photo(pair["afterPhoto"], f"After • {visit_labels[after_id]}")
        st.markdown("---")


if __name__ == "__main__":
    main()
