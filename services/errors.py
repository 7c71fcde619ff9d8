# services/errors.py
"""
Payment errors exposed to callers.

Codes are part of the wire contract and must never be renumbered.
"""
import enum


class ErrorCode(enum.IntEnum):
     NOT_FOUND = 1
     EXPIRED = 2
     ALREADY_PAID = 3
     INVALID_TX = 4
     BAD_JWT = 5


class PaymentError(Exception):
     """Base class for every expected, caller-caused failure."""
     code: ErrorCode

     def __init__(self, message: str = ""):
          super().__init__(message or self.__class__.__name__)
          self.message = message or self.__class__.__name__


class NotFoundError(PaymentError):
     code = ErrorCode.NOT_FOUND


class ExpiredError(PaymentError):
     code = ErrorCode.EXPIRED


class AlreadyPaidError(PaymentError):
     code = ErrorCode.ALREADY_PAID


class InvalidTxError(PaymentError):
     code = ErrorCode.INVALID_TX


class BadJWTError(PaymentError):
     code = ErrorCode.BAD_JWT
