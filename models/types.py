# models/types.py
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class Int128(TypeDecorator):
     """
     Signed 128-bit integer stored as its decimal string.

     BigInteger stops at 2**63 - 1 and SQLite has no wider integer type, so
     amounts are kept as text and converted back to int on load. Arithmetic
     on these columns happens in Python, never in SQL.
     """

     impl = String(40)
     cache_ok = True

     MIN = -(2 ** 127)
     MAX = 2 ** 127 - 1

     def process_bind_param(self, value, dialect):
          if value is None:
               return None
          value = int(value)
          if not self.MIN <= value <= self.MAX:
               raise ValueError(f"{value} does not fit in a signed 128-bit integer")
          return str(value)

     def process_result_value(self, value, dialect):
          if value is None:
               return None
          return int(value)
