"""Stay quote API endpoints."""

from __future__ import annotations

import datetime
from typing import Annotated
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.config import get_settings
from app.schemas.quote import QuoteError, QuoteRead, QuoteRequest
from app.services import quote_service
from app.services.quote_engine import InvalidRequest

router = APIRouter(prefix="/quotes", tags=["quotes"])


def _quote_date(payload: QuoteRequest) -> datetime.date:
    if payload.as_of is not None:
        return payload.as_of
    settings = get_settings()
    return datetime.datetime.now(ZoneInfo(settings.quote_timezone)).date()


@router.post(
    "",
    response_model=QuoteRead,
    summary="Quote a stay",
    responses={status.HTTP_400_BAD_REQUEST: {"model": QuoteError}},
)
async def create_quote(
    payload: QuoteRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> QuoteRead:
    try:
        quote = await quote_service.quote_stay(
            session,
            checkin=payload.checkin,
            checkout=payload.checkout,
            room_code=payload.room_code,
            payment_method=payload.payment_method,
            requester_id=payload.requester_id,
            today=_quote_date(payload),
        )
    except InvalidRequest as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=QuoteError(kind=exc.kind.value, message=exc.message).model_dump(),
        ) from exc
    return QuoteRead.model_validate(quote)
