from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Optional

from slowtravel.content.newsletter import NewsletterService, get_newsletter_service

router = APIRouter(prefix="/api/newsletter", tags=["newsletter"])


class SubscribeRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    brand: Optional[str] = Field(None, max_length=100)


class UnsubscribeRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=64)


@router.post("/subscribe")
async def subscribe(
    request: SubscribeRequest,
    service: NewsletterService = Depends(get_newsletter_service),
):
    result = await service.subscribe(request.email, request.brand)
    return result.model_dump(by_alias=True, exclude_none=True)


@router.post("/unsubscribe")
async def unsubscribe(
    request: UnsubscribeRequest,
    service: NewsletterService = Depends(get_newsletter_service),
):
    result = await service.unsubscribe(request.token)
    return result.model_dump(by_alias=True, exclude_none=True)
