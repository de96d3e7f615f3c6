from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Generic, Optional, TypeVar

from netrate.core.config import get_settings
from netrate.shared.base import BaseSchema


T = TypeVar("T")


class Meta(BaseSchema):
    as_of_date: str
    source: str
    time_window: str
    calculation_version: str
    currency: Optional[str] = None
    platform: Optional[str] = None
    generated_at: Optional[str] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    meta: Optional[Meta] = None


def build_meta(
    year: int,
    currency: Optional[str] = None,
    platform: Optional[str] = None,
    source: str = "scenario",
) -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source=source,
        time_window=str(year),
        calculation_version=get_settings().calculation_version,
        currency=currency,
        platform=platform,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
