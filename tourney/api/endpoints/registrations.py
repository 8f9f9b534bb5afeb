from typing import Optional

from fastapi import APIRouter, Depends

from tourney.api.dependencies import get_payment_simulator, get_storage
from tourney.api.errors import internal_errors
from tourney.schemas.payment_schemas import PaymentRequest, PaymentResult
from tourney.services import payment_service
from tourney.services.payment_service import PaymentSimulator
from tourney.services.storage import Storage

router = APIRouter()


@router.post("/{registration_id}/payment", response_model=PaymentResult, summary="Pay the registration fee")
async def process_payment(
    registration_id: str,
    payment_in: Optional[PaymentRequest] = None,
    storage: Storage = Depends(get_storage),
    simulator: PaymentSimulator = Depends(get_payment_simulator),
):
    """
    Runs the simulated payment for a registration and stores the outcome.
    A declined payment is returned with `success: false`, still as a 200.
    """
    payment_method = payment_in.payment_method if payment_in else None
    with internal_errors("Failed to process payment"):
        return await payment_service.pay_for_registration(storage, simulator, registration_id, payment_method)
