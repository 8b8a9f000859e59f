"""Sessions and transactions for the SQLAlchemy contact store.

``startup()`` binds the store to an engine once per process; every
``SqlAlchemyContactUnitOfWork`` then opens its own session from that binding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from contact_reconciler.config import get_database_config

from .mappings import create_all_tables
from .repositories import SqlAlchemyContactRecords

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when the contact store is used before ``startup()`` or started twice."""


@dataclass(frozen=True, slots=True)
class _Binding:
    engine: Engine
    sessions: sessionmaker[Session]


_binding: _Binding | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Create the contact tables and bind new units of work to ``engine``.

    Without an explicit engine one is created from ``database_uri`` or the
    configured database. Returns the bound engine.
    """

    global _binding
    if _binding is not None and not force:
        raise StartupError("Contact store already started. Pass force=True to rebind it.")

    bound_engine = engine or create_engine(database_uri or get_database_config().uri)
    create_all_tables(bound_engine)
    _binding = _Binding(
        engine=bound_engine,
        sessions=sessionmaker(bind=bound_engine, expire_on_commit=False),
    )
    return bound_engine


def is_started() -> bool:
    return _binding is not None


def shutdown() -> None:
    """Dispose the bound engine; a later ``startup()`` may bind a new one."""

    global _binding
    if _binding is not None:
        _binding.engine.dispose()
    _binding = None


class SqlAlchemyContactUnitOfWork:
    """One session around contact record access, rolled back on error."""

    def __init__(self) -> None:
        if _binding is None:
            raise StartupError(
                "Contact store not started. Call contact_reconciler.adapters.sqlalchemy."
                "startup() before opening a unit of work."
            )
        self._sessions = _binding.sessions
        self._session: Session | None = None
        self._contacts: SqlAlchemyContactRecords | None = None

    def __enter__(self) -> SqlAlchemyContactUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._sessions()
        self._contacts = SqlAlchemyContactRecords(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self._open_session()
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._contacts = None
        return False

    @property
    def contacts(self) -> SqlAlchemyContactRecords:
        if self._contacts is None:
            raise StartupError("Unit of work is not open")
        return self._contacts

    def commit(self) -> None:
        self._open_session().commit()

    def _open_session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session
