# =============================================================================
# app/routers/payment.py - Payment Token Endpoint
# =============================================================================

from fastapi import APIRouter

from app.dependencies import PaymentDep
from core.models.gateway import PaymentTokenRequest, PaymentTokenResponse

router = APIRouter()


@router.post("/token", response_model=PaymentTokenResponse)
async def create_payment_token(body: PaymentTokenRequest, payment: PaymentDep):
    """
    Create a Midtrans Snap transaction.

    The storefront opens the Snap popup with the returned token.
    """
    token, redirect_url = await payment.create_transaction(body)
    return PaymentTokenResponse(token=token, redirect_url=redirect_url)
