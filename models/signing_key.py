# models/signing_key.py
from sqlalchemy import Column, String, BigInteger, Boolean, Text
from .base import Base


class SigningKey(Base):
     """
     Token signing key slot.

     Exactly one key is active and signs new tokens; retired keys stay
     here so tokens they signed still verify until they expire.
     """

     kid = Column(String(64), primary_key=True)
     algorithm = Column(String(16), nullable=False)
     private_pem = Column(Text, nullable=False)
     public_pem = Column(Text, nullable=False)
     created_at = Column(BigInteger, nullable=False)
     active = Column(Boolean, default=True, nullable=False, index=True)

     def __repr__(self):
          return f"<SigningKey(kid={self.kid}, algorithm='{self.algorithm}', active={self.active})>"
