# schemas/payment.py
"""
Pydantic schemas for payment submission and token resolution.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.types import Int128


class PaymentRecord(BaseModel):
     """Immutable proof that an invoice was paid."""
     payment_id: str
     tx_hash: str
     payer_public_key: str
     verified_at: int
     site_id: str
     amount: int = Field(..., ge=Int128.MIN, le=Int128.MAX)

     model_config = ConfigDict(from_attributes=True, frozen=True)


class PaymentSubmitRequest(BaseModel):
     """Request body for POST /api/payments/submit."""

     payment_id: str = Field(..., description="Invoice being paid")
     # Well-formedness of tx_hash is a payment guard, not a schema rule
     tx_hash: str = Field(..., max_length=255, description="Reference to the settling transaction")
     payer_public_key: str = Field(..., max_length=255, description="Public key of the paying account")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "payment_id": "pay_3f1c0a9e5b7d4c2e8a6f1b0d9c7e5a3b",
                    "tx_hash": "stellar_tx_hash_123456",
                    "payer_public_key": "GCKFBEIYTKP6RCZNVPH73XL7XFWTEOYVEXEDRLGNZ3OJJXNVDQMQOAEG",
               }
          }
     )


class PaymentSubmitResponse(BaseModel):
     """Response for POST /api/payments/submit."""

     payment_id: str = Field(..., description="Invoice that was paid")
     token: str = Field(..., description="Bearer token redeemable for access")
     status: str = Field(default="PAID", description="Invoice status after submission")


class TokenResolveRequest(BaseModel):
     """Request body for POST /api/tokens/resolve."""

     token: str = Field(..., description="Bearer token issued by a successful payment")


class TokenRevokeRequest(BaseModel):
     """Request body for POST /api/tokens/{payment_id}/revoke."""

     reason: Optional[str] = Field(None, max_length=255)


class ErrorResponse(BaseModel):
     """Body returned for every payment error."""

     error: str
     code: int
     detail: str
