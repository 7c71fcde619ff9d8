# schemas/signing_key.py
"""
Pydantic schemas for token signing keys.
"""
from typing import List
from pydantic import BaseModel, ConfigDict


class SigningKeyMaterial(BaseModel):
     """Key pair held in the signing key slot. Never returned over the API."""
     kid: str
     algorithm: str
     private_pem: str
     public_pem: str
     created_at: int
     active: bool = True

     model_config = ConfigDict(from_attributes=True, frozen=True)


class PublicKeyResponse(BaseModel):
     """Verification material for one signing key."""
     kid: str
     algorithm: str
     public_pem: str
     active: bool

     model_config = ConfigDict(from_attributes=True)


class PublicKeyListResponse(BaseModel):
     keys: List[PublicKeyResponse]
