import streamlit as st
from typing import Any, Dict, List

from utils.api_client import api_client
from utils.booking_wizard import AddonOption, BookingWizard, TripOption
from utils.gallery import Lightbox
from utils.payments import PayPalProvider


def init_session_state():
    """Initialize session state variables."""
    if "wizards" not in st.session_state:
        st.session_state.wizards = {}
    if "lightboxes" not in st.session_state:
        st.session_state.lightboxes = {}
    if "booking_open" not in st.session_state:
        st.session_state.booking_open = None
    if "payments" not in st.session_state:
        st.session_state.payments = PayPalProvider()


def get_wizard(trip: Dict[str, Any], addons: List[Dict[str, Any]]) -> BookingWizard:
    """The session's wizard for a trip, created on first use."""
    slug = trip.get("slug", "")
    wizard = st.session_state.wizards.get(slug)
    if wizard is None:
        wizard = BookingWizard(
            trip=TripOption.from_api(trip),
            addons=[AddonOption.from_api(a) for a in addons],
            payments=st.session_state.payments,
            submitter=api_client,
        )
        st.session_state.wizards[slug] = wizard
    return wizard


def open_booking(slug: str):
    st.session_state.booking_open = slug
    wizard = st.session_state.wizards.get(slug)
    if wizard is not None:
        wizard.reset()


def close_booking():
    slug = st.session_state.booking_open
    wizard = st.session_state.wizards.get(slug)
    if wizard is not None:
        wizard.reset()
    st.session_state.booking_open = None


def get_lightbox(key: str, count: int) -> Lightbox:
    lightbox = st.session_state.lightboxes.get(key)
    if lightbox is None or lightbox.count != count:
        lightbox = Lightbox(count=count)
        st.session_state.lightboxes[key] = lightbox
    return lightbox
