from .errors import (
     ErrorCode,
     PaymentError,
     NotFoundError,
     ExpiredError,
     AlreadyPaidError,
     InvalidTxError,
     BadJWTError,
)
from .invoice_service import InvoiceService, INVOICE_TTL_SECONDS, compute_payment_id
from .payment_service import MIN_TX_HASH_LENGTH, get_record, submit_payment
from .token_service import TokenIssuer, generate_signing_key

__all__ = [
     "ErrorCode",
     "PaymentError",
     "NotFoundError",
     "ExpiredError",
     "AlreadyPaidError",
     "InvalidTxError",
     "BadJWTError",
     "InvoiceService",
     "INVOICE_TTL_SECONDS",
     "compute_payment_id",
     "MIN_TX_HASH_LENGTH",
     "get_record",
     "submit_payment",
     "TokenIssuer",
     "generate_signing_key",
]
