# store/base.py
"""
PaymentStore - the persistent key-value contract every service depends on.

Keys are logical: Invoice(payment_id), Record(payment_id), the signing key slot
and the revocation list. Domain conditions are reported through return values
(None / False); only infrastructure failures raise.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from schemas.invoice import PaymentInvoice
from schemas.payment import PaymentRecord
from schemas.signing_key import SigningKeyMaterial


class PaymentStore(ABC):
     @abstractmethod
     def get_invoice(self, payment_id: str) -> Optional[PaymentInvoice]:
          raise NotImplementedError

     @abstractmethod
     def add_invoice(self, invoice: PaymentInvoice) -> bool:
          """Insert a new invoice. Returns False if the payment_id is taken."""
          raise NotImplementedError

     @abstractmethod
     def get_record(self, payment_id: str) -> Optional[PaymentRecord]:
          raise NotImplementedError

     @abstractmethod
     def commit_payment(self, invoice: PaymentInvoice, record: PaymentRecord) -> bool:
          """
          Atomically mark the invoice PAID and insert its payment record.

          Both writes land or neither does. Returns False, writing nothing,
          if the stored invoice is missing or no longer PENDING.
          """
          raise NotImplementedError

     @abstractmethod
     def list_invoices(self, site_id: str) -> List[PaymentInvoice]:
          raise NotImplementedError

     @abstractmethod
     def list_records(self, site_id: str) -> List[PaymentRecord]:
          raise NotImplementedError

     @abstractmethod
     def get_signing_key(self, kid: str) -> Optional[SigningKeyMaterial]:
          raise NotImplementedError

     @abstractmethod
     def get_active_signing_key(self) -> Optional[SigningKeyMaterial]:
          raise NotImplementedError

     @abstractmethod
     def list_signing_keys(self) -> List[SigningKeyMaterial]:
          """All keys, active key first, then newest first."""
          raise NotImplementedError

     @abstractmethod
     def add_signing_key(self, key: SigningKeyMaterial) -> None:
          """Store a key as the active one; previously active keys are retired."""
          raise NotImplementedError

     @abstractmethod
     def revoke(self, payment_id: str, reason: Optional[str], now: int) -> bool:
          """Add a payment to the disablement list. Returns False if already listed."""
          raise NotImplementedError

     @abstractmethod
     def is_revoked(self, payment_id: str) -> bool:
          raise NotImplementedError
