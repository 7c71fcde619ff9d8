"""
Tests for the PaymentStore implementations.
"""
import unittest

from models.invoice import InvoiceStatus
from schemas.invoice import PaymentInvoice
from schemas.payment import PaymentRecord
from services.token_service import generate_signing_key
from tests.support import AMOUNT, PAYER_KEY, SITE_ID, TX_HASH, URL_HASH, make_memory_store, make_sql_store


def _invoice(payment_id="pay_1", created_at=1000, amount=AMOUNT):
    return PaymentInvoice(
        payment_id=payment_id,
        site_id=SITE_ID,
        url_hash=URL_HASH,
        amount=amount,
        created_at=created_at,
        expires_at=created_at + 3600,
        status=InvoiceStatus.PENDING,
    )


def _record(payment_id="pay_1", tx_hash=TX_HASH, amount=AMOUNT):
    return PaymentRecord(
        payment_id=payment_id,
        tx_hash=tx_hash,
        payer_public_key=PAYER_KEY,
        verified_at=1500,
        site_id=SITE_ID,
        amount=amount,
    )


class StoreCases:
    """Contract shared by every PaymentStore."""

    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        self.store = self.make_store()

    def test_add_and_get_invoice(self):
        self.assertTrue(self.store.add_invoice(_invoice()))
        self.assertEqual(self.store.get_invoice("pay_1"), _invoice())

    def test_add_invoice_refuses_taken_id(self):
        self.store.add_invoice(_invoice())
        self.assertFalse(self.store.add_invoice(_invoice(created_at=2000)))
        self.assertEqual(self.store.get_invoice("pay_1").created_at, 1000)

    def test_commit_payment_writes_both(self):
        self.store.add_invoice(_invoice())
        self.assertTrue(self.store.commit_payment(_invoice(), _record()))
        self.assertEqual(self.store.get_invoice("pay_1").status, InvoiceStatus.PAID)
        self.assertEqual(self.store.get_record("pay_1"), _record())

    def test_commit_payment_only_once(self):
        self.store.add_invoice(_invoice())
        self.store.commit_payment(_invoice(), _record())
        self.assertFalse(self.store.commit_payment(_invoice(), _record(tx_hash="second_tx_hash_000")))
        self.assertEqual(self.store.get_record("pay_1").tx_hash, TX_HASH)

    def test_commit_payment_for_missing_invoice_writes_nothing(self):
        self.assertFalse(self.store.commit_payment(_invoice(), _record()))
        self.assertIsNone(self.store.get_record("pay_1"))
        self.assertIsNone(self.store.get_invoice("pay_1"))

    def test_amounts_wider_than_64_bits_are_exact(self):
        for payment_id, amount in (("pay_big", 2**63 + 7), ("pay_max", 2**127 - 1), ("pay_min", -(2**127))):
            self.store.add_invoice(_invoice(payment_id, amount=amount))
            self.assertTrue(
                self.store.commit_payment(_invoice(payment_id, amount=amount), _record(payment_id, amount=amount))
            )
            self.assertEqual(self.store.get_invoice(payment_id).amount, amount)
            self.assertEqual(self.store.get_record(payment_id).amount, amount)

    def test_list_by_site(self):
        self.store.add_invoice(_invoice("pay_1", created_at=1000))
        self.store.add_invoice(_invoice("pay_2", created_at=2000))
        self.store.commit_payment(_invoice("pay_1"), _record("pay_1"))
        self.assertEqual([inv.payment_id for inv in self.store.list_invoices(SITE_ID)], ["pay_2", "pay_1"])
        self.assertEqual([rec.payment_id for rec in self.store.list_records(SITE_ID)], ["pay_1"])
        self.assertEqual(self.store.list_invoices("site999"), [])

    def test_signing_key_slot(self):
        self.assertIsNone(self.store.get_active_signing_key())
        first = generate_signing_key("ES256", now=1000)
        second = generate_signing_key("ES256", now=2000)
        self.store.add_signing_key(first)
        self.assertEqual(self.store.get_active_signing_key().kid, first.kid)

        self.store.add_signing_key(second)
        self.assertEqual(self.store.get_active_signing_key().kid, second.kid)
        retired = self.store.get_signing_key(first.kid)
        self.assertFalse(retired.active)
        self.assertEqual(retired.public_pem, first.public_pem)
        self.assertIsNone(self.store.get_signing_key("missing"))

    def test_revocation_list(self):
        self.assertFalse(self.store.is_revoked("pay_1"))
        self.assertTrue(self.store.revoke("pay_1", "chargeback", now=1000))
        self.assertFalse(self.store.revoke("pay_1", None, now=1001))
        self.assertTrue(self.store.is_revoked("pay_1"))


class TestMemoryStore(StoreCases, unittest.TestCase):
    def make_store(self):
        return make_memory_store()


class TestSqlStore(StoreCases, unittest.TestCase):
    def make_store(self):
        return make_sql_store()
