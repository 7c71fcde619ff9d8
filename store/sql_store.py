# store/sql_store.py
"""
SQLAlchemy-backed PaymentStore.

Every call runs in its own session/transaction. commit_payment relies on a
conditional UPDATE (status = PENDING) so two concurrent submissions cannot both
win, and on the payment_ledger primary key so a record is never written twice.
"""
import logging
from contextlib import contextmanager
from typing import Generator, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from models import Invoice, InvoiceStatus, PaymentLedger, RevokedToken, SigningKey
from schemas.invoice import PaymentInvoice
from schemas.payment import PaymentRecord
from schemas.signing_key import SigningKeyMaterial

from .base import PaymentStore

logger = logging.getLogger(__name__)


class SqlStore(PaymentStore):
     def __init__(self, session_factory: sessionmaker) -> None:
          self._session_factory = session_factory

     @contextmanager
     def _session(self) -> Generator[Session, None, None]:
          session = self._session_factory()
          try:
               yield session
               session.commit()
          except Exception:
               session.rollback()
               raise
          finally:
               session.close()

     # ------------------------------------------------------------------
     # Invoices and records
     # ------------------------------------------------------------------

     def get_invoice(self, payment_id: str) -> Optional[PaymentInvoice]:
          with self._session() as db:
               row = db.get(Invoice, payment_id)
               return PaymentInvoice.model_validate(row) if row else None

     def add_invoice(self, invoice: PaymentInvoice) -> bool:
          with self._session() as db:
               if db.get(Invoice, invoice.payment_id) is not None:
                    return False
               db.add(Invoice(**invoice.model_dump()))
               try:
                    db.flush()
               except IntegrityError:
                    db.rollback()
                    return False
               return True

     def get_record(self, payment_id: str) -> Optional[PaymentRecord]:
          with self._session() as db:
               row = db.get(PaymentLedger, payment_id)
               return PaymentRecord.model_validate(row) if row else None

     def commit_payment(self, invoice: PaymentInvoice, record: PaymentRecord) -> bool:
          with self._session() as db:
               result = db.execute(
                    update(Invoice)
                    .where(
                         Invoice.payment_id == invoice.payment_id,
                         Invoice.status == InvoiceStatus.PENDING,
                    )
                    .values(status=InvoiceStatus.PAID)
               )
               if result.rowcount != 1:
                    return False

               db.add(PaymentLedger(**record.model_dump()))
               try:
                    db.flush()
               except IntegrityError:
                    # Undo the status flip together with the failed insert
                    db.rollback()
                    logger.warning(
                         "Payment record already exists",
                         extra={"payment_id": record.payment_id},
                    )
                    return False
               return True

     def list_invoices(self, site_id: str) -> List[PaymentInvoice]:
          with self._session() as db:
               rows = db.scalars(
                    select(Invoice)
                    .where(Invoice.site_id == site_id)
                    .order_by(Invoice.created_at.desc())
               ).all()
               return [PaymentInvoice.model_validate(row) for row in rows]

     def list_records(self, site_id: str) -> List[PaymentRecord]:
          with self._session() as db:
               rows = db.scalars(
                    select(PaymentLedger)
                    .where(PaymentLedger.site_id == site_id)
                    .order_by(PaymentLedger.verified_at.desc())
               ).all()
               return [PaymentRecord.model_validate(row) for row in rows]

     # ------------------------------------------------------------------
     # Signing key slot
     # ------------------------------------------------------------------

     def get_signing_key(self, kid: str) -> Optional[SigningKeyMaterial]:
          with self._session() as db:
               row = db.get(SigningKey, kid)
               return SigningKeyMaterial.model_validate(row) if row else None

     def get_active_signing_key(self) -> Optional[SigningKeyMaterial]:
          with self._session() as db:
               row = db.scalars(
                    select(SigningKey)
                    .where(SigningKey.active.is_(True))
                    .order_by(SigningKey.created_at.desc())
                    .limit(1)
               ).first()
               return SigningKeyMaterial.model_validate(row) if row else None

     def list_signing_keys(self) -> List[SigningKeyMaterial]:
          with self._session() as db:
               rows = db.scalars(
                    select(SigningKey).order_by(
                         SigningKey.active.desc(), SigningKey.created_at.desc()
                    )
               ).all()
               return [SigningKeyMaterial.model_validate(row) for row in rows]

     def add_signing_key(self, key: SigningKeyMaterial) -> None:
          with self._session() as db:
               db.execute(
                    update(SigningKey)
                    .where(SigningKey.active.is_(True))
                    .values(active=False)
               )
               db.add(SigningKey(**key.model_dump(exclude={"active"}), active=True))

     # ------------------------------------------------------------------
     # Disablement list
     # ------------------------------------------------------------------

     def revoke(self, payment_id: str, reason: Optional[str], now: int) -> bool:
          with self._session() as db:
               if db.get(RevokedToken, payment_id) is not None:
                    return False
               db.add(RevokedToken(payment_id=payment_id, reason=reason, revoked_at=now))
               return True

     def is_revoked(self, payment_id: str) -> bool:
          with self._session() as db:
               return db.get(RevokedToken, payment_id) is not None
