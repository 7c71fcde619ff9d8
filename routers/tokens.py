# routers/tokens.py
"""
Token API routes, used by resource servers to authorize access.
"""
from fastapi import APIRouter, Depends

from dependencies import get_issuer, get_now, require_admin
from schemas.payment import PaymentRecord, TokenResolveRequest, TokenRevokeRequest
from schemas.signing_key import PublicKeyListResponse, PublicKeyResponse
from services.token_service import TokenIssuer

router = APIRouter(prefix="/api/tokens", tags=["tokens"])


@router.post(
     "/resolve",
     response_model=PaymentRecord,
     summary="Resolve a bearer token",
)
def resolve_token(
     body: TokenResolveRequest,
     issuer: TokenIssuer = Depends(get_issuer),
     now: int = Depends(get_now),
):
     """
     Verify a token and return the payment record it redeems.

     - **5 BadJWT**: malformed, wrongly signed, expired or revoked token
     - **1 NotFound**: valid token whose payment has no record
     """
     return issuer.resolve(body.token, now)


@router.get(
     "/keys",
     response_model=PublicKeyListResponse,
     summary="Public token verification keys",
)
def list_public_keys(issuer: TokenIssuer = Depends(get_issuer)):
     return PublicKeyListResponse(
          keys=[PublicKeyResponse.model_validate(key) for key in issuer.public_keys()]
     )


@router.post(
     "/keys/rotate",
     response_model=PublicKeyResponse,
     summary="Rotate the signing key",
     dependencies=[Depends(require_admin)],
)
def rotate_signing_key(
     issuer: TokenIssuer = Depends(get_issuer),
     now: int = Depends(get_now),
):
     return PublicKeyResponse.model_validate(issuer.rotate_signing_key(now))


@router.post(
     "/{payment_id}/revoke",
     summary="Stop honoring tokens for a payment",
     dependencies=[Depends(require_admin)],
)
def revoke_token(
     payment_id: str,
     body: TokenRevokeRequest,
     issuer: TokenIssuer = Depends(get_issuer),
     now: int = Depends(get_now),
):
     revoked = issuer.revoke(payment_id, now, reason=body.reason)
     return {"payment_id": payment_id, "revoked": revoked}
