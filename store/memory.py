# store/memory.py
"""
In-memory PaymentStore.

Only for single-process use and tests: nothing survives a restart. A single
lock serializes every call, which makes commit_payment a compare-and-swap.
"""
import threading
from typing import Dict, List, Optional

from models.invoice import InvoiceStatus
from schemas.invoice import PaymentInvoice
from schemas.payment import PaymentRecord
from schemas.signing_key import SigningKeyMaterial

from .base import PaymentStore


class MemoryStore(PaymentStore):
     def __init__(self) -> None:
          self._invoices: Dict[str, PaymentInvoice] = {}
          self._records: Dict[str, PaymentRecord] = {}
          self._keys: Dict[str, SigningKeyMaterial] = {}
          self._revoked: Dict[str, Optional[str]] = {}
          self._lock = threading.Lock()

     def get_invoice(self, payment_id: str) -> Optional[PaymentInvoice]:
          with self._lock:
               return self._invoices.get(payment_id)

     def add_invoice(self, invoice: PaymentInvoice) -> bool:
          with self._lock:
               if invoice.payment_id in self._invoices:
                    return False
               self._invoices[invoice.payment_id] = invoice
               return True

     def get_record(self, payment_id: str) -> Optional[PaymentRecord]:
          with self._lock:
               return self._records.get(payment_id)

     def commit_payment(self, invoice: PaymentInvoice, record: PaymentRecord) -> bool:
          with self._lock:
               current = self._invoices.get(invoice.payment_id)
               if current is None or current.status != InvoiceStatus.PENDING:
                    return False
               if record.payment_id in self._records:
                    return False
               self._invoices[invoice.payment_id] = current.model_copy(
                    update={"status": InvoiceStatus.PAID}
               )
               self._records[record.payment_id] = record
               return True

     def list_invoices(self, site_id: str) -> List[PaymentInvoice]:
          with self._lock:
               invoices = [inv for inv in self._invoices.values() if inv.site_id == site_id]
          return sorted(invoices, key=lambda inv: inv.created_at, reverse=True)

     def list_records(self, site_id: str) -> List[PaymentRecord]:
          with self._lock:
               records = [rec for rec in self._records.values() if rec.site_id == site_id]
          return sorted(records, key=lambda rec: rec.verified_at, reverse=True)

     def get_signing_key(self, kid: str) -> Optional[SigningKeyMaterial]:
          with self._lock:
               return self._keys.get(kid)

     def get_active_signing_key(self) -> Optional[SigningKeyMaterial]:
          with self._lock:
               for key in self._keys.values():
                    if key.active:
                         return key
          return None

     def list_signing_keys(self) -> List[SigningKeyMaterial]:
          with self._lock:
               keys = list(self._keys.values())
          return sorted(keys, key=lambda k: (k.active, k.created_at), reverse=True)

     def add_signing_key(self, key: SigningKeyMaterial) -> None:
          with self._lock:
               for kid, existing in list(self._keys.items()):
                    if existing.active:
                         self._keys[kid] = existing.model_copy(update={"active": False})
               self._keys[key.kid] = key.model_copy(update={"active": True})

     def revoke(self, payment_id: str, reason: Optional[str], now: int) -> bool:
          with self._lock:
               if payment_id in self._revoked:
                    return False
               self._revoked[payment_id] = reason
               return True

     def is_revoked(self, payment_id: str) -> bool:
          with self._lock:
               return payment_id in self._revoked
