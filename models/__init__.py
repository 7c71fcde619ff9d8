from .base import Base
from .types import Int128
from .invoice import Invoice, InvoiceStatus
from .payment_ledger import PaymentLedger
from .signing_key import SigningKey
from .revoked_token import RevokedToken

__all__ = [
     "Base",
     "Int128",
     "Invoice",
     "InvoiceStatus",
     "PaymentLedger",
     "SigningKey",
     "RevokedToken",
]
