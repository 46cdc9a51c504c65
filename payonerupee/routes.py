from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from payonerupee.auth import require_token
from payonerupee.counter import CounterStore
from payonerupee.razorpay_service import OrderGateway
from payonerupee.verification import PaymentVerifier

router = APIRouter()

HEALTH_MESSAGE = "API is running"


class VerifyRequest(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None


def get_store(request: Request) -> CounterStore:
    return request.app.state.store


def get_gateway(request: Request) -> OrderGateway:
    return request.app.state.gateway


def get_verifier(request: Request) -> PaymentVerifier:
    return request.app.state.verifier


@router.get("/", response_class=PlainTextResponse)
async def health():
    return HEALTH_MESSAGE


@router.post("/create-order")
async def create_order(gateway: OrderGateway = Depends(get_gateway)):
    return await gateway.create_order()


@router.post("/verify")
async def verify_payment(
    payload: Optional[VerifyRequest] = None,
    verifier: PaymentVerifier = Depends(get_verifier),
):
    payload = payload or VerifyRequest()
    result = await verifier.verify(
        payload.razorpay_order_id,
        payload.razorpay_payment_id,
        payload.razorpay_signature,
    )
    return {"success": True, "token": result.token, "count": result.count}


@router.get("/count")
async def read_count(
    claims: dict = Depends(require_token),
    store: CounterStore = Depends(get_store),
):
    return {"count": await store.get()}
