# models/invoice.py
import enum
from sqlalchemy import Column, String, BigInteger, Enum
from sqlalchemy.orm import relationship
from .base import Base
from .types import Int128


class InvoiceStatus(str, enum.Enum):
     """
     Enumeration for invoice payment status.

     EXPIRED is never stored: it is derived at read time from expires_at.
     """
     PENDING = "PENDING"
     PAID = "PAID"
     EXPIRED = "EXPIRED"


class Invoice(Base):
     """
     Invoice model - a priced request for access to one resource of one site.

     Created PENDING; flipped to PAID exactly once when a payment is accepted.
     Rows are never deleted.
     """

     payment_id = Column(String(64), primary_key=True)

     # Gated resource
     site_id = Column(String(255), nullable=False, index=True)
     url_hash = Column(String(255), nullable=False)

     # Price in the smallest currency unit
     amount = Column(Int128, nullable=False)

     # Ledger time (seconds), expires_at = created_at + INVOICE_TTL_SECONDS
     created_at = Column(BigInteger, nullable=False)
     expires_at = Column(BigInteger, nullable=False, index=True)

     status = Column(
          Enum(InvoiceStatus, name="invoice_status", create_constraint=True),
          default=InvoiceStatus.PENDING,
          nullable=False,
          index=True
     )

     # Relationships
     payment_ledger_entry = relationship(
          "PaymentLedger",
          back_populates="invoice",
          uselist=False,
     )

     def __repr__(self):
          return f"<Invoice(payment_id={self.payment_id}, amount={self.amount}, status='{self.status.value}', expires_at={self.expires_at})>"

     def is_expired_at(self, now: int) -> bool:
          """Check if the invoice can no longer be paid at ``now``."""
          return now > self.expires_at

     def mark_as_paid(self) -> None:
          """Mark the invoice as paid."""
          self.status = InvoiceStatus.PAID
