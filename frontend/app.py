import streamlit as st
from utils.state import init_session_state
from utils.api_client import api_client
from utils.components import (
    card_grid,
    emit_json_ld,
    hero,
    inject_styles,
    newsletter_form,
    place_card,
    region_card,
)
from config import PAGE_TITLE, PAGE_ICON, LAYOUT, BRAND_NAME, CONTACT_EMAIL

# Page configuration
st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
    initial_sidebar_state="collapsed"
)

# Initialize session state
init_session_state()
inject_styles()

site_response = api_client.get_site()
site = site_response["data"] if site_response["success"] else {}

# Sidebar
with st.sidebar:
    st.header(site.get("brandName", BRAND_NAME))

    health_response = api_client.get_health()
    if health_response.get("success"):
        st.success("🟢 Site online")
    else:
        st.error("🔴 Content unavailable")

# Main content
hero(
    site.get("brandName", BRAND_NAME),
    "Slow journeys, private guides, and the places worth lingering in.",
    image=site.get("heroImage", ""),
)
emit_json_ld(site.get("schema"))

st.subheader("Where we travel")
regions_response = api_client.get_regions()
if regions_response["success"]:
    regions = regions_response["data"].get("regions", [])
    if regions:
        card_grid(regions, region_card)
    else:
        st.info("No regions published yet.")
else:
    st.error(f"Could not load regions: {regions_response['error']}")

st.subheader("Places we love")
places_response = api_client.get_places(featured=True)
if places_response["success"]:
    places = places_response["data"].get("places", [])
    if places:
        card_grid(places, place_card)
    else:
        st.info("No featured places yet.")
else:
    st.error(f"Could not load places: {places_response['error']}")

col1, col2 = st.columns([1, 1])
with col1:
    st.subheader("Day trips from Marrakech")
    st.markdown("Private car and driver, up to three guests, booked in a few minutes.")
    st.page_link("pages/2_🚗_Day_Trips.py", label="See all day trips", icon="🚗")
with col2:
    newsletter_form("home")

# Footer
st.markdown("---")
st.markdown(f"""
<div style="text-align: center; color: #666; padding: 1rem;">
    <p>{BRAND_NAME} | <a href="mailto:{CONTACT_EMAIL}">{CONTACT_EMAIL}</a></p>
</div>
""", unsafe_allow_html=True)
