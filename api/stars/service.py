"""
Star catalog business logic.

Rows come back from Postgres as dicts and are converted to `Star` one by one.
A row that does not convert (e.g. a NULL name or mass) is logged and skipped;
the rest of the result is still returned.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from core.db import Database
from core.responses import ApiError

from . import repository
from .schemas import SearchRequest, Star

logger = logging.getLogger(__name__)


def _to_stars(rows: Iterable[dict[str, Any]]) -> list[Star]:
    stars: list[Star] = []
    for row in rows:
        try:
            stars.append(Star.model_validate(row))
        except ValidationError as exc:
            logger.warning("star_row_skipped id=%s errors=%s", row.get("id"), exc.errors())
            continue
    return stars


async def list_stars(db: Database) -> list[Star]:
    try:
        rows = await repository.list_stars(db)
    except Exception as exc:
        logger.exception("star_list_failed")
        raise ApiError(500, "Failed to fetch stars") from exc
    return _to_stars(rows)


def resolve_search(request: SearchRequest) -> tuple[repository.SearchField, str | float]:
    """
    Validate a search request and pick its query.

    Returns the matching `SearchField` and the parameter to bind.
    """
    if not request.field or not request.value:
        raise ApiError(400, "Both field and value are required")

    field = repository.SEARCH_FIELDS.get(request.field)
    if field is None:
        raise ApiError(400, "Invalid search field")

    try:
        param = field.bind(request.value)
    except ValueError as exc:
        raise ApiError(400, f"Invalid value for field {field.name}") from exc
    return field, param


async def search_stars(db: Database, request: SearchRequest) -> list[Star]:
    field, param = resolve_search(request)
    try:
        rows = await repository.search_stars(db, field, param)
    except Exception as exc:
        logger.exception("star_search_failed field=%s", field.name)
        raise ApiError(500, "Search failed") from exc
    return _to_stars(rows)
