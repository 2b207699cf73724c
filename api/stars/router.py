"""
Star catalog API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.db import Database, get_database
from core.responses import ok

from . import service
from .schemas import SearchRequest

router = APIRouter(prefix="/api/stars")


@router.get("")
async def list_stars(db: Database = Depends(get_database)) -> JSONResponse:
    stars = await service.list_stars(db)
    return ok("Stars fetched", stars)


@router.post("/search")
async def search_stars(
    request: SearchRequest | None = None,
    db: Database = Depends(get_database),
) -> JSONResponse:
    # A JSON null body reads as an empty request.
    if request is None:
        request = SearchRequest()
    stars = await service.search_stars(db, request)
    return ok(f"Stars found: {len(stars)}", stars)
