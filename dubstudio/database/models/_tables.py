from __future__ import annotations

from sqlalchemy import Table

from dubstudio.database.core.main import Base


def _t(name: str) -> Table:
    """Return Table object from metadata, honoring schema on Base.metadata."""
    schema = Base.metadata.schema
    key = f"{schema}.{name}" if schema else name
    return Base.metadata.tables[key]
