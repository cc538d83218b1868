from fastapi import APIRouter, HTTPException
import asyncio
from datetime import datetime
from typing import Any, Dict

from slowtravel.content.repository import FETCH_ERRORS, SETTINGS_TAB
from slowtravel.sheets import SheetsClient, get_content_sheet, get_nexus_sheet

router = APIRouter()


async def check_sheet(sheet: SheetsClient, tab: str) -> Dict[str, Any]:
    """Check that a spreadsheet is reachable with the configured credentials."""
    try:
        rows = await sheet.get_values(f"{tab}!A1:B2")
        return {
            "status": "healthy",
            "rows_sampled": len(rows),
            "timestamp": datetime.now().isoformat(),
        }
    except FETCH_ERRORS as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "timestamp": datetime.now().isoformat(),
        }


@router.get("/healthz")
async def health_check():
    """
    Spreadsheet connectivity check.
    Returns 200 when the content sheet is reachable, 503 otherwise. The
    newsletter sheet only degrades the status.
    """
    content_check, nexus_check = await asyncio.gather(
        check_sheet(get_content_sheet(), SETTINGS_TAB),
        check_sheet(get_nexus_sheet(), "Newsletter_Subscribers"),
        return_exceptions=True,
    )

    if isinstance(content_check, Exception):
        content_check = {"status": "unhealthy", "error": str(content_check)}
    if isinstance(nexus_check, Exception):
        nexus_check = {"status": "unhealthy", "error": str(nexus_check)}

    if content_check.get("status") != "healthy":
        overall_status = "unhealthy"
    elif nexus_check.get("status") != "healthy":
        overall_status = "degraded"
    else:
        overall_status = "healthy"

    response = {
        "status": overall_status,
        "timestamp": datetime.now().isoformat(),
        "checks": {
            "content_sheet": content_check,
            "newsletter_sheet": nexus_check,
        },
        "version": "1.0.0",
    }

    if overall_status == "unhealthy":
        raise HTTPException(status_code=503, detail=response)

    return response


@router.get("/health")
async def simple_health_check():
    """Simple health check for load balancers."""
    return {"status": "ok", "timestamp": datetime.now().isoformat()}
