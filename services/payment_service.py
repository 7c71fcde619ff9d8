# services/payment_service.py
"""
Payment Service - accepts proof of payment and issues access tokens.

submit_payment evaluates its guards in a fixed order and stops at the first
failure, so the reported error is always the highest-precedence one:

     1. NotFound     - no invoice for payment_id
     2. Expired      - now > expires_at (even if never paid)
     3. AlreadyPaid  - invoice status is PAID
     4. InvalidTx    - tx_hash fails the well-formedness policy

Nothing is written unless every guard passes and the token has been signed.
The invoice update and the record insert are committed as one unit by the
store, and the token is only handed out once that commit succeeds.
"""
import logging
from typing import Optional

from models.invoice import InvoiceStatus
from schemas.payment import PaymentRecord
from services.errors import AlreadyPaidError, ExpiredError, InvalidTxError, NotFoundError
from services.token_service import TokenIssuer
from store.base import PaymentStore

logger = logging.getLogger(__name__)

# Placeholder policy until transactions are verified on the settlement network
MIN_TX_HASH_LENGTH = 10


def is_well_formed_tx_hash(tx_hash: str) -> bool:
     return len(tx_hash) >= MIN_TX_HASH_LENGTH


def submit_payment(
     store: PaymentStore,
     issuer: TokenIssuer,
     payment_id: str,
     tx_hash: str,
     payer_public_key: str,
     now: int,
) -> str:
     """
     Record payment of an invoice and mint an access token for it.

     Raises:
          NotFoundError, ExpiredError, AlreadyPaidError, InvalidTxError
     """
     invoice = store.get_invoice(payment_id)
     if invoice is None:
          raise NotFoundError(f"Invoice {payment_id} not found")

     if invoice.is_expired(now):
          raise ExpiredError(f"Invoice {payment_id} expired at {invoice.expires_at}")

     if invoice.status == InvoiceStatus.PAID:
          raise AlreadyPaidError(f"Invoice {payment_id} is already paid")

     if not is_well_formed_tx_hash(tx_hash):
          raise InvalidTxError(
               f"Transaction hash must be at least {MIN_TX_HASH_LENGTH} characters"
          )

     record = PaymentRecord(
          payment_id=invoice.payment_id,
          tx_hash=tx_hash,
          payer_public_key=payer_public_key,
          verified_at=now,
          site_id=invoice.site_id,
          amount=invoice.amount,
     )

     # Signed before the commit so a signing failure leaves the invoice unpaid
     token = issuer.issue(record, now)

     # Another submission may have paid the invoice since it was read
     if not store.commit_payment(invoice, record):
          raise AlreadyPaidError(f"Invoice {payment_id} is already paid")

     logger.info(
          "Payment accepted",
          extra={"payment_id": payment_id, "site_id": invoice.site_id, "amount": invoice.amount},
     )
     return token


def get_record(store: PaymentStore, payment_id: str) -> Optional[PaymentRecord]:
     """Look up the payment record of an invoice."""
     return store.get_record(payment_id)
