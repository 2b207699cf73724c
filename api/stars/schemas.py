"""
Pydantic schemas for the star catalog endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class Star(BaseModel):
    id: int
    name: str
    alternative_name: str
    constellation: str
    distance: float
    mass: float


class SearchRequest(BaseModel):
    # Missing keys decode as empty strings; the service rejects empties.
    field: str = ""
    value: str = ""
