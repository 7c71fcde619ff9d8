"""
Shared helpers for tests: store factories and a controllable clock.
"""
from database import init_db, make_engine, make_session_factory
from store import MemoryStore, SqlStore

SITE_ID = "site123"
URL_HASH = "hash456"
AMOUNT = 1000000
TX_HASH = "stellar_tx_hash_123456"
PAYER_KEY = "GCKFBEIYTKP6RCZNVPH73XL7XFWTEOYVEXEDRLGNZ3OJJXNVDQMQOAEG"


def make_memory_store() -> MemoryStore:
    return MemoryStore()


def make_sql_store() -> SqlStore:
    engine = make_engine("sqlite://")
    init_db(engine)
    return SqlStore(make_session_factory(engine))


class MutableClock:
    """Clock whose time tests can move forward."""

    def __init__(self, now: int = 1000):
        self.now = now

    def __call__(self) -> int:
        return self.now
