from .client import SheetsClient, rows_to_records, get_content_sheet, get_nexus_sheet
from .auth import ServiceAccountTokenManager, load_service_account

__all__ = [
    "SheetsClient",
    "rows_to_records",
    "get_content_sheet",
    "get_nexus_sheet",
    "ServiceAccountTokenManager",
    "load_service_account",
]
