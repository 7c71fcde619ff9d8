# schemas/invoice.py
"""
Pydantic schemas for invoices: the stored invoice value and the API request/response shapes.
"""
from typing import List
from pydantic import BaseModel, Field, ConfigDict

from models.invoice import InvoiceStatus
from models.types import Int128


class PaymentInvoice(BaseModel):
     """A priced access request, as persisted in the store."""
     payment_id: str
     site_id: str
     url_hash: str
     amount: int = Field(..., ge=Int128.MIN, le=Int128.MAX)
     created_at: int
     expires_at: int
     status: InvoiceStatus = InvoiceStatus.PENDING

     model_config = ConfigDict(from_attributes=True, frozen=True)

     def is_expired(self, now: int) -> bool:
          """Expiry is a read-time predicate; it never changes the stored status."""
          return now > self.expires_at


class InvoiceCreate(BaseModel):
     """Schema for requesting a new invoice."""
     site_id: str = Field(..., min_length=1, max_length=255, description="Site that owns the resource")
     url_hash: str = Field(..., min_length=1, max_length=255, description="Hash identifying the gated URL")
     amount: int = Field(
          ...,
          ge=Int128.MIN,
          le=Int128.MAX,
          description="Price in the smallest currency unit (signed 128-bit)",
     )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "site_id": "site123",
                    "url_hash": "hash456",
                    "amount": 1000000
               }
          }
     )


class InvoiceResponse(PaymentInvoice):
     """Schema for invoice response, with the status as seen at request time."""
     effective_status: InvoiceStatus

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "payment_id": "pay_3f1c0a9e5b7d4c2e8a6f1b0d9c7e5a3b",
                    "site_id": "site123",
                    "url_hash": "hash456",
                    "amount": 1000000,
                    "created_at": 1000,
                    "expires_at": 4600,
                    "status": "PENDING",
                    "effective_status": "PENDING"
               }
          }
     )


class InvoiceListResponse(BaseModel):
     """Schema for a site's invoice list."""
     invoices: List[InvoiceResponse]
     total: int


class SiteRevenueResponse(BaseModel):
     """Earnings summary for one site."""
     site_id: str
     paid_amount: int
     paid_count: int
     pending_count: int
     expired_count: int
     total_invoices: int
