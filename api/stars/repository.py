"""
Star catalog SQL (raw).

Every query reads the same three-table join:
- `stars` (distance, mass, foreign keys)
- `star_names` (id, name, alternative name)
- `constellations` (id, name)

Searchable fields are declared once in `SEARCH_FIELDS`; each entry knows its
WHERE clause and how to turn the request's string value into the bound
parameter.
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Any

from core.db import Database


STAR_SELECT = """
    SELECT
      sn.id,
      sn.name,
      sn.alternative_name,
      c.name AS constellation,
      s.distance_light_years AS distance,
      s.solar_masses AS mass
    FROM stars s
    JOIN star_names sn ON s.star_name_id = sn.id
    JOIN constellations c ON s.constellation_id = c.id
"""

# Plain decimal or exponent notation, as Postgres reads a float literal.
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class FieldKind(enum.Enum):
    TEXT = "text"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class SearchField:
    name: str
    column: str
    kind: FieldKind

    @property
    def sql(self) -> str:
        # Text: case-insensitive pattern match. Numeric: exact equality.
        op = "ILIKE" if self.kind is FieldKind.TEXT else "="
        return f"{STAR_SELECT}    WHERE {self.column} {op} $1\n"

    def bind(self, value: str) -> str | float:
        """
        Convert the raw request value into the query parameter.

        Raises ValueError when a numeric field gets a non-numeric value.
        """
        if self.kind is FieldKind.TEXT:
            return value
        text = value.strip()
        if not NUMBER_RE.fullmatch(text):
            raise ValueError(f"not a number: {value!r}")
        number = float(text)
        if not math.isfinite(number):
            raise ValueError(f"not a finite number: {value!r}")
        return number


SEARCH_FIELDS: dict[str, SearchField] = {
    f.name: f
    for f in (
        SearchField("name", "sn.name", FieldKind.TEXT),
        SearchField("constellation", "c.name", FieldKind.TEXT),
        SearchField("distance", "s.distance_light_years", FieldKind.NUMERIC),
        SearchField("mass", "s.solar_masses", FieldKind.NUMERIC),
    )
}


async def list_stars(db: Database) -> list[dict[str, Any]]:
    return await db.fetch_all(STAR_SELECT)


async def search_stars(db: Database, field: SearchField, param: str | float) -> list[dict[str, Any]]:
    return await db.fetch_all(field.sql, param)
