# dependencies.py
"""
FastAPI dependencies shared by the routers.

The current time always comes from the server clock; request bodies never
carry a time used by any guard.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

import config
from database import SessionLocal
from services.token_service import TokenIssuer
from store import PaymentStore, SqlStore
from utils.clock import Clock, system_clock

_store: Optional[PaymentStore] = None


def get_store() -> PaymentStore:
     global _store
     if _store is None:
          _store = SqlStore(SessionLocal)
     return _store


def get_clock() -> Clock:
     return system_clock


def get_now(clock: Clock = Depends(get_clock)) -> int:
     return clock()


def get_issuer(store: PaymentStore = Depends(get_store)) -> TokenIssuer:
     return TokenIssuer(store)


def require_admin(x_admin_key: Optional[str] = Header(None)) -> None:
     """Gate for key rotation and revocation."""
     if not config.ADMIN_API_KEY or x_admin_key != config.ADMIN_API_KEY:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin key required")
