# models/payment_ledger.py
"""
PaymentLedger model - immutable proof that an invoice was paid.

One row per paid invoice, keyed by the invoice's payment_id. Site and amount are
snapshotted from the invoice at verification time.
Records are append-only; modification is prevented at the application layer.
"""
from sqlalchemy import Column, String, BigInteger, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base
from .types import Int128


class PaymentLedger(Base):
     """
     Immutable payment record. Created in the same transaction that marks
     its invoice PAID.
     """
     __tablename__ = "payment_ledger"

     payment_id = Column(
          String(64),
          ForeignKey("invoices.payment_id", ondelete="RESTRICT"),  # Prevent delete if record exists
          primary_key=True,  # One record per invoice payment
     )
     tx_hash = Column(String(255), nullable=False, index=True)  # Opaque network reference
     payer_public_key = Column(String(255), nullable=False)
     verified_at = Column(BigInteger, nullable=False)
     site_id = Column(String(255), nullable=False, index=True)
     amount = Column(Int128, nullable=False)

     # Relationships
     invoice = relationship("Invoice", back_populates="payment_ledger_entry", uselist=False)

     def __repr__(self):
          return f"<PaymentLedger(payment_id={self.payment_id}, tx_hash={self.tx_hash[:16]}...)>"
