"""JSON-LD and page metadata builders.

Everything here returns plain dicts; ``None`` values are dropped so the output
can be embedded as-is in a ``application/ld+json`` script tag.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from slowtravel.core.brands import brand_name
from slowtravel.models import Destination, Place, Region

SCHEMA_CONTEXT = "https://schema.org"

SITE_PROFILES: Dict[str, Dict[str, Any]] = {
    "slow-morocco": {
        "description": "Thoughtful private journeys across Morocco, designed for travellers who prefer depth over speed.",
        "email": "hello@slowmorocco.com",
        "locality": "Marrakech",
        "country_code": "MA",
        "country": "Morocco",
        "offers": [
            ("Imperial Cities", "Discover Fes, Meknes, and Rabat"),
            ("Sahara Explorer", "Journey to the desert dunes of Erg Chebbi"),
            ("Atlas Mountains", "Trek through Berber villages and high passes"),
        ],
    },
    "slow-mauritius": {
        "description": "Thoughtful private journeys across Mauritius, designed for travellers who prefer ease and deep immersion.",
        "email": "hello@slowmauritius.com",
        "locality": "Port Louis",
        "country_code": "MU",
        "country": "Mauritius",
        "offers": [
            ("Black River Gorges Explorer", "Discover the volcanic heart of Mauritius"),
            ("Coastal Paradise", "Turquoise lagoons and pristine beaches"),
            ("Complete Mauritius", "The full island experience"),
        ],
    },
}


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def travel_agency_schema(site_id: str, site_url: str) -> Dict[str, Any]:
    """Site-wide TravelAgency schema with the brand's offer catalogue."""
    name = brand_name(site_id)
    profile = SITE_PROFILES.get(site_id, SITE_PROFILES["slow-morocco"])

    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "TravelAgency",
        "name": name,
        "description": profile["description"],
        "url": site_url,
        "email": profile["email"],
        "address": {
            "@type": "PostalAddress",
            "addressLocality": profile["locality"],
            "addressCountry": profile["country_code"],
        },
        "areaServed": {"@type": "Country", "name": profile["country"]},
        "image": f"{site_url}/og-image.jpg",
        "priceRange": "€€€",
        "hasOfferCatalog": {
            "@type": "OfferCatalog",
            "name": f"{profile['country']} Private Journeys",
            "itemListElement": [
                {
                    "@type": "Offer",
                    "itemOffered": {"@type": "TouristTrip", "name": title, "description": text},
                }
                for title, text in profile["offers"]
            ],
        },
    }


def breadcrumb_schema(crumbs: List[Tuple[str, str]]) -> Dict[str, Any]:
    """BreadcrumbList from (name, url) pairs, in order."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": position, "name": name, "item": url}
            for position, (name, url) in enumerate(crumbs, start=1)
        ],
    }


def read_time_duration(read_time: str) -> Optional[str]:
    """Convert "14 min read" to "PT14M"."""
    match = re.search(r"(\d+)", read_time or "")
    return f"PT{match.group(1)}M" if match else None


def place_article_schema(place: Place, site_id: str, site_url: str) -> Dict[str, Any]:
    url = f"{site_url}/place/{place.slug}"
    author = {"@type": "Person", "name": place.text_by} if place.text_by else None

    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": place.title,
        "description": place.excerpt or place.subtitle or None,
        "image": place.hero_image or None,
        "author": author,
        "publisher": {
            "@type": "Organization",
            "name": brand_name(site_id),
            "logo": {"@type": "ImageObject", "url": f"{site_url}/favicon.svg"},
        },
        "datePublished": f"{place.year}-01-01" if place.year else None,
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "articleSection": place.category or "Places",
        "wordCount": place.word_count or None,
        "timeRequired": read_time_duration(place.read_time),
    })


def page_metadata(
    title: str,
    description: str,
    url: str,
    site_id: str,
    image: Optional[str] = None,
    page_type: str = "website",
    keywords: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Title, description, canonical URL plus OpenGraph and Twitter card fields."""
    site_name = brand_name(site_id)
    full_title = f"{title} | {site_name}"
    images = [{"url": image, "width": 1200, "height": 630, "alt": title}] if image else None

    return _compact({
        "title": title,
        "description": description,
        "keywords": keywords or None,
        "canonical": url,
        "openGraph": _compact({
            "title": full_title,
            "description": description,
            "url": url,
            "siteName": site_name,
            "locale": "en_GB",
            "type": page_type,
            "images": images,
        }),
        "twitter": _compact({
            "card": "summary_large_image",
            "title": full_title,
            "description": description,
            "images": [image] if image else None,
        }),
    })


def region_metadata(region: Region, site_id: str, site_url: str) -> Dict[str, Any]:
    return page_metadata(
        title=region.title,
        description=region.description or f"Explore {region.title}.",
        url=f"{site_url}/places/{region.slug}",
        site_id=site_id,
        image=region.hero_image or None,
    )


def destination_metadata(destination: Destination, site_id: str, site_url: str) -> Dict[str, Any]:
    return page_metadata(
        title=destination.title,
        description=(destination.excerpt or destination.subtitle
                     or f"Discover {destination.title} with {brand_name(site_id)}."),
        url=f"{site_url}/destination/{destination.slug}",
        site_id=site_id,
        image=destination.hero_image or None,
        page_type="article",
    )


def place_metadata(place: Place, site_id: str, site_url: str) -> Dict[str, Any]:
    return page_metadata(
        title=place.title,
        description=place.excerpt or place.subtitle or f"Discover {place.title} with {brand_name(site_id)}.",
        url=f"{site_url}/place/{place.slug}",
        site_id=site_id,
        image=place.hero_image or None,
        page_type="article",
        keywords=place.tags,
    )
