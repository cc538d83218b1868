import html
import json
import streamlit as st
from typing import Any, Dict, List, Optional

from utils.api_client import api_client
from utils.gallery import Lightbox
from utils.rich_text import parse_blocks, to_markdown

PLACEHOLDER_IMAGE = "https://placehold.co/800x500?text=Slow+Travel"


def inject_styles():
    st.markdown("""
<style>
    .hero-title {
        font-family: Georgia, serif;
        font-size: 3rem;
        font-weight: 400;
        margin-bottom: 0.25rem;
    }

    .hero-subtitle {
        color: #6b5b4b;
        font-size: 1.2rem;
        margin-bottom: 2rem;
    }

    .card-meta {
        color: #8b7b6b;
        font-size: 0.8rem;
        letter-spacing: 0.08em;
        text-transform: uppercase;
    }

    .price-tag {
        font-size: 1.4rem;
        font-weight: 600;
    }
</style>
""", unsafe_allow_html=True)


def emit_json_ld(schemas: Any):
    """Embed one or more schema.org objects as JSON-LD."""
    if not schemas:
        return
    if isinstance(schemas, dict):
        schemas = [schemas]
    for schema in schemas:
        payload = json.dumps(schema, ensure_ascii=False).replace("</", "<\\/")
        st.markdown(f'<script type="application/ld+json">{payload}</script>', unsafe_allow_html=True)


def hero(title: str, subtitle: str = "", image: str = "", caption: str = ""):
    if image:
        st.image(image, use_container_width=True, caption=caption or None)
    st.markdown(f'<div class="hero-title">{html.escape(title)}</div>', unsafe_allow_html=True)
    if subtitle:
        st.markdown(f'<div class="hero-subtitle">{html.escape(subtitle)}</div>', unsafe_allow_html=True)


def render_body(body: str):
    """Render sheet body text as headings, quotes and paragraphs."""
    blocks = parse_blocks(body)
    if blocks:
        st.markdown(to_markdown(blocks))


def _card(image: str, title: str, meta: str = "", text: str = "", link: Optional[str] = None, label: str = ""):
    with st.container(border=True):
        st.image(image or PLACEHOLDER_IMAGE, use_container_width=True)
        if meta:
            st.markdown(f'<div class="card-meta">{html.escape(meta)}</div>', unsafe_allow_html=True)
        st.subheader(title)
        if text:
            st.write(text)
        if link:
            st.link_button(label or "Read more", link)


def region_card(region: Dict[str, Any]):
    _card(
        region.get("heroImage", ""),
        region.get("title", ""),
        text=region.get("subtitle", ""),
        link=f"Places?region={region.get('slug', '')}",
        label="Explore",
    )


def destination_card(destination: Dict[str, Any]):
    _card(
        destination.get("heroImage", ""),
        destination.get("title", ""),
        meta=", ".join(destination.get("regions", [])),
        text=destination.get("excerpt") or destination.get("subtitle", ""),
        link=f"Places?destination={destination.get('slug', '')}",
    )


def place_card(place: Dict[str, Any]):
    _card(
        place.get("heroImage", ""),
        place.get("title", ""),
        meta=place.get("category", ""),
        text=place.get("excerpt", ""),
        link=f"Places?place={place.get('slug', '')}",
    )


def journey_card(journey: Dict[str, Any]):
    _card(
        journey.get("heroImage", ""),
        journey.get("title", ""),
        meta=journey.get("duration", ""),
        text=journey.get("description", ""),
    )


def day_trip_card(trip: Dict[str, Any]):
    _card(
        trip.get("heroImage", ""),
        trip.get("title", ""),
        meta=f"{trip.get('durationHours', 0)} hours · from {trip.get('departureCity', '')}",
        text=trip.get("shortDescription", ""),
        link=f"Day_Trips?trip={trip.get('slug', '')}",
        label=f"From €{trip.get('priceEUR', 0):.0f} per car",
    )


def card_grid(items: List[Dict[str, Any]], render, columns: int = 3):
    for start in range(0, len(items), columns):
        cols = st.columns(columns)
        for col, item in zip(cols, items[start:start + columns]):
            with col:
                render(item)


def render_gallery(key: str, images: List[Dict[str, Any]], lightbox: Lightbox):
    """Thumbnail grid with a lightbox that steps through the images."""
    if not images:
        return

    if lightbox.is_open:
        image = images[lightbox.index]
        st.image(image.get("imageUrl", ""), use_container_width=True, caption=image.get("caption") or None)

        prev_col, count_col, next_col, close_col = st.columns([1, 2, 1, 1])
        with prev_col:
            if st.button("← Previous", key=f"{key}_prev"):
                lightbox.previous()
                st.rerun()
        with count_col:
            st.caption(f"{lightbox.index + 1} / {lightbox.count}")
        with next_col:
            if st.button("Next →", key=f"{key}_next"):
                lightbox.next()
                st.rerun()
        with close_col:
            if st.button("Close", key=f"{key}_close"):
                lightbox.close()
                st.rerun()
        return

    cols = st.columns(4)
    for i, image in enumerate(images):
        with cols[i % 4]:
            st.image(image.get("imageUrl", ""), use_container_width=True)
            if st.button("View", key=f"{key}_open_{i}"):
                lightbox.open(i)
                st.rerun()


def render_sources(sources: List[str]):
    if not sources:
        return
    st.markdown("#### Sources")
    for source in sources:
        st.caption(source)


def newsletter_form(key: str = "newsletter"):
    with st.form(f"{key}_form", clear_on_submit=True):
        st.markdown("#### Letters from the road")
        email = st.text_input("Email", placeholder="you@example.com")
        submit = st.form_submit_button("Subscribe")

        if submit:
            if not email:
                st.error("Please enter your email.")
                return
            response = api_client.subscribe(email)
            if response["success"] and response["data"].get("success"):
                st.success(response["data"].get("message", "You're in."))
            else:
                error = response["data"].get("message") if response["success"] else response["error"]
                st.error(error or "Something went wrong. Please try again.")
