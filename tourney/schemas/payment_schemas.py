from enum import Enum
from typing import Optional

from .base import CamelModel


class PaymentMethod(str, Enum):
    UPI = "upi"
    CARD = "card"
    WALLET = "wallet"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentRequest(CamelModel):
    payment_method: Optional[PaymentMethod] = None


class PaymentResult(CamelModel):
    success: bool
    status: PaymentStatus
    transaction_id: str
    message: str
    registration_id: str
    payment_method: Optional[PaymentMethod] = None
