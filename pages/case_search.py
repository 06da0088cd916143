import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from core.helpers import render_sidebar, format_age
from core.time_utils import parse_iso_date
from services.catalog_service import search_filter_options
from services.patient_service import list_practitioners
from services.search_service import run_case_search

# Page config is set globally in app.py
render_sidebar()

st.title("Case Search")
st.write("Every filter is optional. Filters combine with AND; multi-select filters match any chosen value.")

try:
    options = search_filter_options()
    practitioners = list_practitioners()
except SQLAlchemyError as e:
    st.error(f"Could not load search options: {e}")
    st.stop()

product_labels = dict(options["products"])
area_labels = dict(options["treated_areas"])
category_labels = dict(options["treatment_categories"])
practitioner_labels = {p.id: p.name for p in practitioners}

with st.form("case_search"):
    st.markdown("#### Patient")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        sex = st.selectbox("Sex", ["", "female", "male", "other"])
    with c2:
        ethnicity = st.text_input("Ethnicity")
    with c3:
        age_min = st.number_input("Min age", min_value=0, max_value=120, value=None, step=1)
    with c4:
        age_max = st.number_input("Max age", min_value=0, max_value=120, value=None, step=1)
    min_visits = st.number_input("Min visits", min_value=0, value=None, step=1)

    st.markdown("#### Consents on file")
    k1, k2, k3 = st.columns(3)
    with k1:
        has_botulinum = st.checkbox("Botulinum")
    with k2:
        has_filler = st.checkbox("Filler")
    with k3:
        has_photo = st.checkbox("Photo")

    st.markdown("#### Visits")
    v1, v2, v3, v4 = st.columns(4)
    with v1:
        date_from = st.date_input("From", value=None)
    with v2:
        date_to = st.date_input("To", value=None)
    with v3:
        lot_number = st.text_input("Lot number contains")
    with v4:
        practitioner_id = st.selectbox(
            "Practitioner",
            [""] + list(practitioner_labels),
            format_func=lambda k: practitioner_labels.get(k, "Any"),
        )

    st.markdown("#### Treatments")
    product_ids = st.multiselect("Products", list(product_labels), format_func=product_labels.get)
    category_slugs = st.multiselect("Categories", list(category_labels), format_func=category_labels.get)
    area_ids = st.multiselect("Treated areas", list(area_labels), format_func=area_labels.get)

    submitted = st.form_submit_button("Search")

if not submitted:
    st.stop()

filters = {
    "sex": sex,
    "ethnicity": ethnicity.strip(),
    "ageMin": age_min,
    "ageMax": age_max,
    "minVisits": min_visits,
    "hasBotulinumConsent": has_botulinum,
    "hasFillerConsent": has_filler,
    "hasPhotoConsent": has_photo,
    "visitDateFrom": parse_iso_date(date_from),
    "visitDateTo": parse_iso_date(date_to),
    "lotNumber": lot_number.strip(),
    "practitionerId": practitioner_id,
    "productIds": product_ids,
    "treatmentCategorySlugs": category_slugs,
    "treatedAreaIds": area_ids,
}

try:
    results = run_case_search(filters)
except SQLAlchemyError as e:
    st.error(f"Search failed: {e}")
    st.stop()

if not results:
    st.info("No cases match these filters.")
    st.stop()

st.write(f"**{len(results)}** case(s)")
for r in results:
    with st.container():
        st.write(f"**{r['lastName']}, {r['firstName']}**")
        birthday = parse_iso_date(r["birthday"])
        location = ", ".join(x for x in (r["city"], r["province"]) if x) or "-"
        st.caption(
            f"Age {format_age(birthday)} • {r['sex'] or '-'} • {r['ethnicity'] or '-'} • {location}"
        )
        st.write(f"Visits: {r['visitCount']} • Treatments: {r['treatmentCount']}")
        if st.button("Compare this patient's visits", key=f"cmp_{r['patientId']}"):
            st.session_state["compare_patient_id"] = r["patientId"]
            st.switch_page("pages/compare_visits.py")
    st.markdown("---")
