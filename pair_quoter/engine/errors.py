# pair_quoter/engine/errors.py
from __future__ import annotations


class QuoteError(Exception):
    """Base class for every failure raised while producing a quote."""


class RemoteCallError(QuoteError):
    """
    A router/factory/pair read failed. The cause is kept opaque:
    remote error codes are not interpreted here.
    """

    def __init__(self, call: str, cause: BaseException):
        super().__init__(f"{call} failed: {cause}")
        self.call = call
        self.cause = cause


class QuoteUnavailableError(QuoteError):
    """A quote could not be produced; the caller must not fall back to a stale price."""


class DegeneratePoolError(QuoteUnavailableError):
    """A pool reserve is zero (never seeded or fully drained)."""


class InvalidPathError(QuoteUnavailableError):
    """A swap path shorter than two tokens."""


__all__ = [
    "QuoteError",
    "RemoteCallError",
    "QuoteUnavailableError",
    "DegeneratePoolError",
    "InvalidPathError",
]
