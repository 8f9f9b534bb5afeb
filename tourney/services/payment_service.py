import asyncio
import random
import time
import uuid
from typing import Optional

import structlog

from tourney.schemas.payment_schemas import PaymentMethod, PaymentResult, PaymentStatus
from tourney.services.storage import Storage

logger = structlog.get_logger(__name__)

SUCCESS_MESSAGE = "Payment completed successfully"
FAILURE_MESSAGE = "Payment failed. Please try again."


def generate_transaction_id() -> str:
    return f"TXN_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12].upper()}"


class PaymentSimulator:
    """Stand-in for an external payment gateway.

    Each call waits ``latency_seconds`` and then succeeds with probability
    ``success_rate``, independent of the method or amount. Not seeded unless an
    ``rng`` is passed in.
    """

    def __init__(self, latency_seconds: float = 2.0, success_rate: float = 0.9, rng: Optional[random.Random] = None):
        self.latency_seconds = latency_seconds
        self.success_rate = success_rate
        self._rng = rng or random.Random()

    async def process(self, registration_id: str, payment_method: Optional[PaymentMethod] = None) -> PaymentResult:
        await asyncio.sleep(self.latency_seconds)

        success = self._rng.random() < self.success_rate
        return PaymentResult(
            success=success,
            status=PaymentStatus.COMPLETED if success else PaymentStatus.FAILED,
            transaction_id=generate_transaction_id(),
            message=SUCCESS_MESSAGE if success else FAILURE_MESSAGE,
            registration_id=registration_id,
            payment_method=payment_method,
        )


async def pay_for_registration(
    storage: Storage,
    simulator: PaymentSimulator,
    registration_id: str,
    payment_method: Optional[PaymentMethod] = None,
) -> PaymentResult:
    """Run the simulated payment and store its outcome on the registration.

    Falls back to the method chosen at registration time when none is given.
    A failed payment is a normal result, not an error. An unknown registration
    still gets a result; there is simply nothing to update.
    """
    registration = storage.get_registration(registration_id)
    if payment_method is None and registration is not None:
        payment_method = registration.payment_method

    result = await simulator.process(registration_id, payment_method)

    if registration is None:
        logger.warning("payment_for_unknown_registration", registration_id=registration_id)
    else:
        storage.update_registration_payment(registration_id, result.status, payment_method)

    logger.info(
        "payment_processed",
        registration_id=registration_id,
        transaction_id=result.transaction_id,
        status=result.status,
    )
    return result
