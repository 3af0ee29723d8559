"""Decoding of raw usercollection bodies into typed pages."""

from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from .errors import DecodeError
from .models import ActivityRecord, PaginatedResponse, SleepRecord, SleepScoreRecord

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def _decode(
    payload: bytes, record_type: type[T], category: str
) -> PaginatedResponse[T]:
    """Validate ``payload`` as a page of ``record_type``.

    Raises:
        DecodeError: If the body is not JSON or an item does not match.
    """
    try:
        page = PaginatedResponse[record_type].model_validate_json(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise DecodeError(
            category, f"{e.error_count()} error(s), first at '{location}': {first['msg']}"
        ) from e

    if page.continuation_token is not None:
        logger.warning(
            "pagination_token_ignored",
            category=category,
            items=len(page.items),
        )

    logger.debug("response_decoded", category=category, items=len(page.items))
    return page


def decode_activity(payload: bytes) -> PaginatedResponse[ActivityRecord]:
    return _decode(payload, ActivityRecord, "daily_activity")


def decode_sleep(payload: bytes) -> PaginatedResponse[SleepRecord]:
    return _decode(payload, SleepRecord, "sleep")


def decode_sleep_score(payload: bytes) -> PaginatedResponse[SleepScoreRecord]:
    return _decode(payload, SleepScoreRecord, "daily_sleep")


def select_authoritative(response: PaginatedResponse[T]) -> T | None:
    """Pick the record that represents the window.

    The last item in response order wins; multiple sleep sessions are not
    merged. Returns None when the page is empty.
    """
    if not response.items:
        return None
    return response.items[-1]
