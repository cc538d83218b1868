from typing import Optional

from .config import settings

BRAND_NAMES = {
    "slow-morocco": "Slow Morocco",
    "slow-namibia": "Slow Namibia",
    "slow-turkiye": "Slow Türkiye",
    "slow-tunisia": "Slow Tunisia",
    "slow-mauritius": "Slow Mauritius",
    "riad-di-siena": "Riad di Siena",
    "dancing-with-lions": "Dancing with Lions",
    "slow-world": "Slow World",
}


def brand_name(site_id: Optional[str] = None) -> str:
    """Display name for a site id; unknown ids are used verbatim."""
    site_id = site_id or settings.site_id
    return BRAND_NAMES.get(site_id, site_id)
