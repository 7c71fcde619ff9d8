# routers/payments.py
"""
Payment submission API.

POST /api/payments/submit: submit proof of an off-system payment for an invoice.
Marks the invoice PAID, writes the immutable payment record and returns an access token.
Does NOT verify the transaction on the settlement network; tx_hash is only checked
for well-formedness.
"""
from fastapi import APIRouter, Depends, status

from dependencies import get_issuer, get_now, get_store
from schemas.payment import PaymentRecord, PaymentSubmitRequest, PaymentSubmitResponse
from services import payment_service
from services.errors import NotFoundError
from services.token_service import TokenIssuer
from store import PaymentStore

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
     "/submit",
     response_model=PaymentSubmitResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit payment",
)
def submit_payment(
     body: PaymentSubmitRequest,
     store: PaymentStore = Depends(get_store),
     issuer: TokenIssuer = Depends(get_issuer),
     now: int = Depends(get_now),
):
     """
     Submit proof that an invoice was paid.

     Errors, in order of precedence:
     - **1 NotFound**: unknown payment_id
     - **2 Expired**: invoice expired before submission
     - **3 AlreadyPaid**: invoice was paid before
     - **4 InvalidTx**: tx_hash is not well-formed
     """
     token = payment_service.submit_payment(
          store,
          issuer,
          payment_id=body.payment_id,
          tx_hash=body.tx_hash,
          payer_public_key=body.payer_public_key,
          now=now,
     )
     return PaymentSubmitResponse(payment_id=body.payment_id, token=token, status="PAID")


@router.get(
     "/{payment_id}/record",
     response_model=PaymentRecord,
     summary="Get payment record",
)
def get_payment_record(
     payment_id: str,
     store: PaymentStore = Depends(get_store),
):
     record = payment_service.get_record(store, payment_id)
     if record is None:
          raise NotFoundError(f"No payment record for {payment_id}")
     return record
