import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from database import check_connection, init_db
from dependencies import get_store
from routers import invoices_router, payments_router, tokens_router
from services.errors import ErrorCode, PaymentError
from services.token_service import TokenIssuer
from utils.clock import system_clock
from utils.logging import configure_logging

logger = logging.getLogger(__name__)

# HTTP status for each payment error code
ERROR_STATUS = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.EXPIRED: 410,
    ErrorCode.ALREADY_PAID: 409,
    ErrorCode.INVALID_TX: 422,
    ErrorCode.BAD_JWT: 401,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    # Populate the signing key slot before the first payment needs it
    TokenIssuer(get_store()).ensure_signing_key(system_clock())
    logger.info("Paywall service started")
    yield


# App instance
app = FastAPI(title="pertoken paywall", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError):
    logger.info(
        "Payment request rejected",
        extra={"path": request.url.path, "error_code": int(exc.code)},
    )
    return JSONResponse(
        status_code=ERROR_STATUS[exc.code],
        content={"error": exc.code.name, "code": int(exc.code), "detail": exc.message},
    )


@app.get("/api/health")
def health():
    if not check_connection():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}


app.include_router(invoices_router)
app.include_router(payments_router)
app.include_router(tokens_router)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
