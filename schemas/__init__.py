from .invoice import (
     PaymentInvoice,
     InvoiceCreate,
     InvoiceResponse,
     InvoiceListResponse,
     SiteRevenueResponse,
)
from .payment import (
     PaymentRecord,
     PaymentSubmitRequest,
     PaymentSubmitResponse,
     TokenResolveRequest,
     TokenRevokeRequest,
     ErrorResponse,
)
from .signing_key import (
     SigningKeyMaterial,
     PublicKeyResponse,
     PublicKeyListResponse,
)

__all__ = [
     "PaymentInvoice",
     "InvoiceCreate",
     "InvoiceResponse",
     "InvoiceListResponse",
     "SiteRevenueResponse",
     "PaymentRecord",
     "PaymentSubmitRequest",
     "PaymentSubmitResponse",
     "TokenResolveRequest",
     "TokenRevokeRequest",
     "ErrorResponse",
     "SigningKeyMaterial",
     "PublicKeyResponse",
     "PublicKeyListResponse",
]
