from .base import PaymentStore
from .memory import MemoryStore
from .sql_store import SqlStore

__all__ = [
     "PaymentStore",
     "MemoryStore",
     "SqlStore",
]
