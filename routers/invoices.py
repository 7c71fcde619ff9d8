# routers/invoices.py
"""
Invoice API routes.

A client asks for an invoice before paying for a gated resource; site owners
can list their invoices and see what they earned.
"""
from fastapi import APIRouter, Depends, status

from dependencies import get_now, get_store
from schemas.invoice import (
     InvoiceCreate,
     InvoiceResponse,
     InvoiceListResponse,
     PaymentInvoice,
     SiteRevenueResponse,
)
from services.errors import NotFoundError
from services.invoice_service import InvoiceService
from store import PaymentStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def _build_invoice_response(invoice: PaymentInvoice, now: int) -> InvoiceResponse:
     return InvoiceResponse(
          **invoice.model_dump(),
          effective_status=InvoiceService.effective_status(invoice, now),
     )


@router.post(
     "",
     response_model=InvoiceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Request a payment invoice"
)
def create_invoice(
     body: InvoiceCreate,
     store: PaymentStore = Depends(get_store),
     now: int = Depends(get_now),
):
     """
     Create a PENDING invoice for a gated resource.

     The invoice can be paid until **expires_at** (one hour after creation).
     """
     invoice = InvoiceService.create_invoice(
          store,
          site_id=body.site_id,
          url_hash=body.url_hash,
          amount=body.amount,
          now=now,
     )
     return _build_invoice_response(invoice, now)


@router.get(
     "/{payment_id}",
     response_model=InvoiceResponse,
     summary="Get invoice by payment ID"
)
def get_invoice(
     payment_id: str,
     store: PaymentStore = Depends(get_store),
     now: int = Depends(get_now),
):
     """
     Retrieve an invoice. Expired invoices are still returned, with
     **effective_status** = EXPIRED.
     """
     invoice = InvoiceService.get_invoice(store, payment_id)
     if invoice is None:
          raise NotFoundError(f"Invoice {payment_id} not found")
     return _build_invoice_response(invoice, now)


@router.get(
     "/site/{site_id}",
     response_model=InvoiceListResponse,
     summary="List invoices for a site"
)
def list_site_invoices(
     site_id: str,
     store: PaymentStore = Depends(get_store),
     now: int = Depends(get_now),
):
     invoices = InvoiceService.list_site_invoices(store, site_id)
     return InvoiceListResponse(
          invoices=[_build_invoice_response(inv, now) for inv in invoices],
          total=len(invoices),
     )


@router.get(
     "/site/{site_id}/revenue",
     response_model=SiteRevenueResponse,
     summary="Earnings summary for a site"
)
def get_site_revenue(
     site_id: str,
     store: PaymentStore = Depends(get_store),
     now: int = Depends(get_now),
):
     summary = InvoiceService.calculate_site_revenue(store, site_id, now)
     if summary["total_invoices"] == 0:
          raise NotFoundError(f"No invoices for site {site_id}")
     return SiteRevenueResponse(**summary)
