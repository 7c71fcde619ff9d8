# services/invoice_service.py
"""
Invoice Service - Business logic layer for invoice operations.

This service mints payment invoices, looks them up, and owns the
Pending / Paid / Expired lifecycle gate, separate from the API layer.
"""
import hashlib
import logging
import secrets
from typing import Optional

from models.invoice import InvoiceStatus
from schemas.invoice import PaymentInvoice
from store.base import PaymentStore

logger = logging.getLogger(__name__)

# Invoices can be paid for one hour after creation
INVOICE_TTL_SECONDS = 3600

PAYMENT_ID_PREFIX = "pay_"


def compute_payment_id(site_id: str, url_hash: str, now: int, nonce: str) -> str:
     """
     Derive a payment identifier.

     Input string: site_id|url_hash|now|nonce (canonical format).
     Returns "pay_" followed by 32 hex chars of the SHA-256 digest.
     """
     payload = "|".join([site_id, url_hash, str(now), nonce])
     digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
     return PAYMENT_ID_PREFIX + digest[:32]


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def create_invoice(
          store: PaymentStore,
          site_id: str,
          url_hash: str,
          amount: int,
          now: int,
     ) -> PaymentInvoice:
          """
          Create a pending invoice for one resource of one site.

          Args:
               store: Persistent payment store
               site_id: Site that owns the resource
               url_hash: Hash identifying the gated URL
               amount: Price in the smallest currency unit; any signed 128-bit value
               now: Trusted current time in seconds

          Returns:
               The persisted PaymentInvoice, expiring INVOICE_TTL_SECONDS after now

          Raises:
               pydantic.ValidationError: If amount does not fit in 128 bits
          """
          while True:
               invoice = PaymentInvoice(
                    payment_id=compute_payment_id(site_id, url_hash, now, secrets.token_hex(16)),
                    site_id=site_id,
                    url_hash=url_hash,
                    amount=amount,
                    created_at=now,
                    expires_at=now + INVOICE_TTL_SECONDS,
                    status=InvoiceStatus.PENDING,
               )
               # A taken id only means a fresh nonce is needed
               if store.add_invoice(invoice):
                    break

          logger.info(
               "Invoice created",
               extra={
                    "payment_id": invoice.payment_id,
                    "site_id": site_id,
                    "url_hash": url_hash,
                    "amount": amount,
               },
          )
          return invoice

     @staticmethod
     def get_invoice(store: PaymentStore, payment_id: str) -> Optional[PaymentInvoice]:
          """Look up an invoice. Expiry does not hide it."""
          return store.get_invoice(payment_id)

     @staticmethod
     def effective_status(invoice: PaymentInvoice, now: int) -> InvoiceStatus:
          """
          Status as observed at ``now``.

          A pending invoice past its expiry reads as EXPIRED; the stored
          status is left untouched.
          """
          if invoice.status == InvoiceStatus.PENDING and invoice.is_expired(now):
               return InvoiceStatus.EXPIRED
          return invoice.status

     @staticmethod
     def list_site_invoices(store: PaymentStore, site_id: str) -> list[PaymentInvoice]:
          """All invoices of a site, newest first."""
          return store.list_invoices(site_id)

     @staticmethod
     def calculate_site_revenue(store: PaymentStore, site_id: str, now: int) -> dict:
          """
          Summarize what a site has earned.

          Paid amounts come from payment records, which snapshot the price at
          verification time.

          Returns:
               Dictionary with revenue information
          """
          invoices = store.list_invoices(site_id)
          records = store.list_records(site_id)

          statuses = [InvoiceService.effective_status(inv, now) for inv in invoices]

          return {
               "site_id": site_id,
               "paid_amount": sum(rec.amount for rec in records),
               "paid_count": len(records),
               "pending_count": statuses.count(InvoiceStatus.PENDING),
               "expired_count": statuses.count(InvoiceStatus.EXPIRED),
               "total_invoices": len(invoices),
          }
