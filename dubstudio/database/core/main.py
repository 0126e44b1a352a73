# dubstudio/database/core/main.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import MetaData, create_engine, event, Column, Table
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import Settings, get_settings

_settings = get_settings()
logger = get_logger(__name__)

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id", "date_created", "last_updated", "data_origin", "meta_data")


class Base(DeclarativeBase):
    # Explicit schema only when one is configured (None keeps SQLite usable)
    metadata = MetaData(
        schema=_settings.db_schema,
        naming_convention=NAMING_CONVENTION,
    )

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}

        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


def _engine_kwargs(url: str, cfg: Settings) -> dict:
    kw = {"echo": cfg.db.echo, "future": True}
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool
        kw["connect_args"] = {"check_same_thread": False}
        return kw
    kw.update(
        pool_size=cfg.db.pool_size,
        max_overflow=cfg.db.max_overflow,
        pool_pre_ping=cfg.db.pool_pre_ping,
        pool_recycle=cfg.db.pool_recycle,
    )
    return kw


class Database:
    """
    Owns the engine and session factory for one process. Built by the
    composition root (the app factory, a CLI, a test fixture), opened once
    and disposed on shutdown; nothing else creates engines.
    """

    def __init__(self, url: Optional[str] = None, *, settings: Optional[Settings] = None) -> None:
        cfg = settings or get_settings()
        self.url = url or cfg.database_url
        self.schema = cfg.db_schema
        self.engine: Engine = create_engine(self.url, **_engine_kwargs(self.url, cfg))
        self._install_connect_hooks()
        self.session_factory = sessionmaker(
            bind=self.engine, expire_on_commit=False, future=True, autoflush=False
        )

    def _install_connect_hooks(self) -> None:
        if self.engine.dialect.name == "sqlite":
            @event.listens_for(self.engine, "connect")
            def _sqlite_fk_on(dbapi_conn, _):
                cur = dbapi_conn.cursor()
                cur.execute("PRAGMA foreign_keys=ON")
                cur.close()
        elif self.schema:
            # Ensure the app schema is first, then public (so extensions remain visible)
            schema = self.schema

            @event.listens_for(self.engine, "connect")
            def _set_search_path(dbapi_conn, _):
                with dbapi_conn.cursor() as cur:
                    cur.execute(f'SET search_path TO "{schema}", public')

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        # models must be imported so every table is registered on Base.metadata
        import dubstudio.database.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        import dubstudio.database.models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        logger.info("Disposing database engine for %s", self.engine.url.render_as_string(hide_password=True))
        self.engine.dispose()

