# services/token_service.py
"""
Token Service - access tokens bound to payment records.

A token is "<prefix>.<JWT>". The prefix names the token namespace, so several
gated deployments can share one codebase without accepting each other's tokens.
The JWT is signed with the active key in the signing key slot and carries:

     iss      - the namespace prefix
     sub      - payment_id of the record the token redeems
     site_id  - site the payment was made to
     amount   - amount paid
     iat/exp  - issue time and expiry, in trusted clock seconds
     jti      - random token id

Resolution verifies the signature with the key named by the "kid" header,
so tokens signed before a key rotation keep working until they expire.
"""
import hashlib
import logging
import secrets
import threading
from typing import List, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jose import JWTError, jwt

import config
from schemas.payment import PaymentRecord
from schemas.signing_key import SigningKeyMaterial
from services.errors import BadJWTError, NotFoundError
from store.base import PaymentStore

logger = logging.getLogger(__name__)

_EC_CURVES = {
     "ES256": ec.SECP256R1,
     "ES384": ec.SECP384R1,
     "ES512": ec.SECP521R1,
}
_RSA_ALGORITHMS = ("RS256", "RS384", "RS512")

# Serializes creation of the first key when the slot is empty
_key_slot_lock = threading.Lock()


def is_supported_algorithm(algorithm: str) -> bool:
     return algorithm in _EC_CURVES or algorithm in _RSA_ALGORITHMS


def generate_signing_key(algorithm: str, now: int) -> SigningKeyMaterial:
     """
     Generate a fresh asymmetric key pair for ``algorithm``.

     The kid is a thumbprint of the public key.

     Raises:
          ValueError: If the algorithm is not an EC or RSA signature algorithm
     """
     if algorithm in _EC_CURVES:
          private_key = ec.generate_private_key(_EC_CURVES[algorithm]())
     elif algorithm in _RSA_ALGORITHMS:
          private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
     else:
          raise ValueError(f"Unsupported token signing algorithm: {algorithm}")

     private_pem = private_key.private_bytes(
          encoding=serialization.Encoding.PEM,
          format=serialization.PrivateFormat.PKCS8,
          encryption_algorithm=serialization.NoEncryption(),
     ).decode("ascii")
     public_pem = private_key.public_key().public_bytes(
          encoding=serialization.Encoding.PEM,
          format=serialization.PublicFormat.SubjectPublicKeyInfo,
     ).decode("ascii")

     return SigningKeyMaterial(
          kid=hashlib.sha256(public_pem.encode("ascii")).hexdigest()[:16],
          algorithm=algorithm,
          private_pem=private_pem,
          public_pem=public_pem,
          created_at=now,
          active=True,
     )


class TokenIssuer:
     """Mints and resolves access tokens for one token namespace."""

     def __init__(
          self,
          store: PaymentStore,
          prefix: str = config.TOKEN_PREFIX,
          algorithm: str = config.JWT_ALGORITHM,
          token_ttl: int = config.TOKEN_TTL_SECONDS,
     ) -> None:
          if not prefix or "." in prefix:
               raise ValueError("Token prefix must be non-empty and must not contain '.'")
          if not is_supported_algorithm(algorithm):
               raise ValueError(f"Unsupported token signing algorithm: {algorithm}")
          self.store = store
          self.prefix = prefix
          self.algorithm = algorithm
          self.token_ttl = token_ttl

     # ------------------------------------------------------------------
     # Signing keys
     # ------------------------------------------------------------------

     def ensure_signing_key(self, now: int) -> SigningKeyMaterial:
          """
          Return the active signing key, creating the first one if the slot is empty.

          Creation is serialized within the process; multi-worker deployments
          fill the slot once at startup before serving requests.
          """
          key = self.store.get_active_signing_key()
          if key is not None:
               return key
          with _key_slot_lock:
               key = self.store.get_active_signing_key()
               if key is None:
                    key = self.rotate_signing_key(now)
          return key

     def rotate_signing_key(self, now: int) -> SigningKeyMaterial:
          """Install a new active key; older keys are kept for verification only."""
          key = generate_signing_key(self.algorithm, now)
          self.store.add_signing_key(key)
          logger.info("Signing key installed", extra={"kid": key.kid})
          return key

     def public_keys(self) -> List[SigningKeyMaterial]:
          return self.store.list_signing_keys()

     # ------------------------------------------------------------------
     # Tokens
     # ------------------------------------------------------------------

     def issue(self, record: PaymentRecord, now: int) -> str:
          """Sign a token redeemable for ``record``."""
          key = self.ensure_signing_key(now)
          claims = {
               "iss": self.prefix,
               "sub": record.payment_id,
               "site_id": record.site_id,
               "amount": record.amount,
               "iat": now,
               "exp": now + self.token_ttl,
               "jti": secrets.token_hex(16),
          }
          encoded = jwt.encode(
               claims,
               key.private_pem,
               algorithm=key.algorithm,
               headers={"kid": key.kid},
          )
          return f"{self.prefix}.{encoded}"

     def resolve(self, token: str, now: int) -> PaymentRecord:
          """
          Resolve a bearer token to the payment record it was issued for.

          Raises:
               BadJWTError: Malformed token, foreign namespace, unknown key,
                    bad signature, expired, or revoked
               NotFoundError: Well-formed token whose payment has no record
          """
          claims = self._verify(token, now)
          payment_id = claims["sub"]

          if self.store.is_revoked(payment_id):
               raise BadJWTError("Token has been revoked")

          record = self.store.get_record(payment_id)
          if record is None:
               raise NotFoundError(f"No payment record for {payment_id}")
          if claims.get("site_id") != record.site_id:
               raise BadJWTError("Token is bound to a different site")
          return record

     def revoke(self, payment_id: str, now: int, reason: Optional[str] = None) -> bool:
          """
          Stop honoring tokens bound to ``payment_id``.

          Returns False if the payment was already revoked.

          Raises:
               NotFoundError: If there is no payment record for payment_id
          """
          if self.store.get_record(payment_id) is None:
               raise NotFoundError(f"No payment record for {payment_id}")
          revoked = self.store.revoke(payment_id, reason, now)
          if revoked:
               logger.info("Token revoked", extra={"payment_id": payment_id})
          return revoked

     def _verify(self, token: str, now: int) -> dict:
          namespace = self.prefix + "."
          if not token or not token.startswith(namespace):
               raise BadJWTError("Token is empty or outside this namespace")
          encoded = token[len(namespace):]

          try:
               header = jwt.get_unverified_header(encoded)
          except JWTError as exc:
               raise BadJWTError("Token is not a JWT") from exc

          kid = header.get("kid")
          key = self.store.get_signing_key(kid) if isinstance(kid, str) else None
          if key is None:
               raise BadJWTError("Token signed with an unknown key")

          try:
               # Expiry is checked against the trusted clock below, not wall time
               claims = jwt.decode(
                    encoded,
                    key.public_pem,
                    algorithms=[key.algorithm],
                    issuer=self.prefix,
                    options={"verify_exp": False, "verify_aud": False},
               )
          except JWTError as exc:
               raise BadJWTError("Token signature or claims are invalid") from exc

          exp = claims.get("exp")
          if not isinstance(exp, int) or now > exp:
               raise BadJWTError("Token has expired")
          if not isinstance(claims.get("sub"), str) or not claims["sub"]:
               raise BadJWTError("Token does not name a payment")
          return claims
