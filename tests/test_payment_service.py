"""
Tests for submit_payment: guard order, atomic commit and token issuance.
"""
import unittest

from models.invoice import InvoiceStatus
from schemas.payment import PaymentRecord
from services import payment_service
from services.errors import (
    AlreadyPaidError,
    ErrorCode,
    ExpiredError,
    InvalidTxError,
    NotFoundError,
)
from services.invoice_service import InvoiceService
from services.token_service import TokenIssuer
from tests.support import (
    AMOUNT,
    PAYER_KEY,
    SITE_ID,
    TX_HASH,
    URL_HASH,
    make_memory_store,
    make_sql_store,
)


class PaymentServiceCases:
    """Cases run against every store implementation."""

    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        self.store = self.make_store()
        self.issuer = TokenIssuer(self.store, prefix="ethicrawler")
        self.invoice = InvoiceService.create_invoice(self.store, SITE_ID, URL_HASH, AMOUNT, now=1000)

    def submit(self, payment_id=None, tx_hash=TX_HASH, payer_public_key=PAYER_KEY, now=1000):
        return payment_service.submit_payment(
            self.store,
            self.issuer,
            payment_id or self.invoice.payment_id,
            tx_hash,
            payer_public_key,
            now=now,
        )

    def assert_untouched(self):
        invoice = self.store.get_invoice(self.invoice.payment_id)
        self.assertEqual(invoice.status, InvoiceStatus.PENDING)
        self.assertIsNone(self.store.get_record(self.invoice.payment_id))

    def test_full_scenario(self):
        token = self.submit()
        self.assertTrue(token.startswith("ethicrawler."))

        invoice = self.store.get_invoice(self.invoice.payment_id)
        self.assertEqual(invoice.status, InvoiceStatus.PAID)
        self.assertIsNotNone(payment_service.get_record(self.store, self.invoice.payment_id))

        with self.assertRaises(AlreadyPaidError):
            self.submit()

        record = self.issuer.resolve(token, now=1000)
        self.assertEqual(record.payment_id, self.invoice.payment_id)

        second = InvoiceService.create_invoice(self.store, SITE_ID, URL_HASH, AMOUNT, now=1000)
        with self.assertRaises(ExpiredError):
            self.submit(payment_id=second.payment_id, tx_hash="tx_hash_123", payer_public_key="payer_key", now=5000)

    def test_record_snapshots_invoice(self):
        self.submit(now=1200)
        record = self.store.get_record(self.invoice.payment_id)
        self.assertEqual(
            record,
            PaymentRecord(
                payment_id=self.invoice.payment_id,
                tx_hash=TX_HASH,
                payer_public_key=PAYER_KEY,
                verified_at=1200,
                site_id=SITE_ID,
                amount=AMOUNT,
            ),
        )

    def test_unknown_payment_id_is_not_found_regardless_of_arguments(self):
        for tx_hash, now in ((TX_HASH, 1000), ("short", 1000), (TX_HASH, 10**9), ("", 0)):
            with self.assertRaises(NotFoundError) as ctx:
                self.submit(payment_id="pay_missing", tx_hash=tx_hash, now=now)
            self.assertEqual(ctx.exception.code, ErrorCode.NOT_FOUND)

    def test_expired_before_payment(self):
        with self.assertRaises(ExpiredError) as ctx:
            self.submit(now=4601)
        self.assertEqual(ctx.exception.code, ErrorCode.EXPIRED)
        self.assert_untouched()

    def test_submission_at_expiry_second_is_accepted(self):
        self.submit(now=4600)
        self.assertEqual(self.store.get_invoice(self.invoice.payment_id).status, InvoiceStatus.PAID)

    def test_expired_takes_precedence_over_already_paid(self):
        self.submit(now=1000)
        with self.assertRaises(ExpiredError):
            self.submit(now=5000)

    def test_expired_takes_precedence_over_invalid_tx(self):
        with self.assertRaises(ExpiredError):
            self.submit(tx_hash="bad", now=5000)

    def test_second_submission_with_other_details_is_already_paid(self):
        self.submit()
        with self.assertRaises(AlreadyPaidError) as ctx:
            self.submit(tx_hash="another_tx_hash_9999", payer_public_key="GOTHERPAYER")
        self.assertEqual(ctx.exception.code, ErrorCode.ALREADY_PAID)
        # The first record is kept
        self.assertEqual(self.store.get_record(self.invoice.payment_id).tx_hash, TX_HASH)

    def test_already_paid_takes_precedence_over_invalid_tx(self):
        self.submit()
        with self.assertRaises(AlreadyPaidError):
            self.submit(tx_hash="x")

    def test_short_tx_hash_is_invalid_and_writes_nothing(self):
        with self.assertRaises(InvalidTxError) as ctx:
            self.submit(tx_hash="123456789")
        self.assertEqual(ctx.exception.code, ErrorCode.INVALID_TX)
        self.assert_untouched()

    def test_tx_hash_of_minimum_length_is_accepted(self):
        self.submit(tx_hash="1234567890")
        self.assertIsNotNone(self.store.get_record(self.invoice.payment_id))

    def test_lost_race_reports_already_paid(self):
        stale = self.store.get_invoice(self.invoice.payment_id)
        self.submit()

        class StaleReadStore:
            """Serves the invoice as read before the other submission landed."""

            def __init__(self, inner):
                self._inner = inner

            def get_invoice(self, payment_id):
                return stale

            def __getattr__(self, name):
                return getattr(self._inner, name)

        with self.assertRaises(AlreadyPaidError):
            payment_service.submit_payment(
                StaleReadStore(self.store),
                self.issuer,
                self.invoice.payment_id,
                "racing_tx_hash_0000",
                PAYER_KEY,
                now=1000,
            )
        self.assertEqual(self.store.get_record(self.invoice.payment_id).tx_hash, TX_HASH)

    def test_signing_failure_leaves_invoice_unpaid(self):
        class BrokenKeySlotStore:
            """Key slot writes fail, as on a fresh deployment with a bad key table."""

            def __init__(self, inner):
                self._inner = inner

            def add_signing_key(self, key):
                raise RuntimeError("key slot unavailable")

            def __getattr__(self, name):
                return getattr(self._inner, name)

        broken = BrokenKeySlotStore(self.store)
        with self.assertRaises(RuntimeError):
            payment_service.submit_payment(
                broken,
                TokenIssuer(broken, prefix="ethicrawler"),
                self.invoice.payment_id,
                TX_HASH,
                PAYER_KEY,
                now=1000,
            )
        self.assert_untouched()

        # Once the slot works again the same payment goes through
        token = self.submit()
        self.assertEqual(self.issuer.resolve(token, now=1000).payment_id, self.invoice.payment_id)

    def test_amount_beyond_64_bits(self):
        for amount in (2**63 + 7, 2**127 - 1):
            invoice = InvoiceService.create_invoice(self.store, SITE_ID, URL_HASH, amount, now=1000)
            token = self.submit(payment_id=invoice.payment_id)
            self.assertEqual(self.store.get_invoice(invoice.payment_id).amount, amount)
            self.assertEqual(self.store.get_record(invoice.payment_id).amount, amount)
            self.assertEqual(self.issuer.resolve(token, now=1000).amount, amount)

    def test_get_record_absent_before_payment(self):
        self.assertIsNone(payment_service.get_record(self.store, self.invoice.payment_id))


class TestPaymentServiceMemoryStore(PaymentServiceCases, unittest.TestCase):
    def make_store(self):
        return make_memory_store()


class TestPaymentServiceSqlStore(PaymentServiceCases, unittest.TestCase):
    def make_store(self):
        return make_sql_store()


class TestErrorCodes(unittest.TestCase):
    def test_codes_are_stable(self):
        self.assertEqual(int(ErrorCode.NOT_FOUND), 1)
        self.assertEqual(int(ErrorCode.EXPIRED), 2)
        self.assertEqual(int(ErrorCode.ALREADY_PAID), 3)
        self.assertEqual(int(ErrorCode.INVALID_TX), 4)
        self.assertEqual(int(ErrorCode.BAD_JWT), 5)
