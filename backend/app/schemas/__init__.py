"""Schema exports."""

from app.schemas.quote import QuoteError, QuoteRead, QuoteRequest

__all__ = ["QuoteError", "QuoteRead", "QuoteRequest"]
