# models/revoked_token.py
from sqlalchemy import Column, String, BigInteger
from .base import Base


class RevokedToken(Base):
     """Disablement list: tokens bound to these payments are no longer honored."""

     payment_id = Column(String(64), primary_key=True)
     reason = Column(String(255), nullable=True)
     revoked_at = Column(BigInteger, nullable=False)
