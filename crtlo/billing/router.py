"""
Subscription management.

Payments need an authenticated account, so the endpoint is kept only as a
stable placeholder that always reports the service as unavailable.
"""

from http import HTTPStatus

from fastapi import APIRouter, HTTPException

router = APIRouter(tags=["Billing"])


@router.post("/get-or-create-subscription")
async def get_or_create_subscription() -> None:
    raise HTTPException(
        status_code=HTTPStatus.SERVICE_UNAVAILABLE,
        detail="Authentication required for subscription management",
    )
