from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from threading import Lock
from typing import Any, Iterator, Optional, Sequence, Union
from uuid import UUID

from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db.models.market import AgentRow, Base, LedgerRow, SectorRow, StockRecordRow
from market.domain import Agent, Ledger, Sector, StockRecord
from market.errors import InvalidArgument, PreconditionFailed, SourceUnavailable
from market.persistence.interfaces import MarketStore
from market.storage.sql.config import StoreConfig

logger = logging.getLogger(__name__)

_Staged = Union[Sector, Agent, tuple[UUID, Decimal], tuple[UUID, UUID, str, int]]


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAlchemyMarketStore(MarketStore):
    """SQLAlchemy-backed market store.

    Writes are buffered in memory and applied in a single transaction on
    ``commit``; reads open short-lived sessions, so they never observe a
    half-applied batch.
    """

    def __init__(self, *, config: Optional[StoreConfig] = None) -> None:
        self._config = config or StoreConfig.from_env()
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._lock = Lock()
        self._staged: list[_Staged] = []

    def _get_engine(self) -> Engine:
        if self._engine is None:
            # Do not log the URL (it may contain secrets).
            engine = create_engine(self._config.database_url, echo=self._config.echo, pool_pre_ping=True)
            if engine.dialect.name == "sqlite":
                _enable_sqlite_foreign_keys(engine)
            self._engine = engine
            self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        return self._engine

    def _session(self) -> Session:
        self._get_engine()
        assert self._session_factory is not None
        return self._session_factory()

    def init_schema(self, *, reset: bool = False) -> None:
        """Create all market tables; with ``reset`` drop them first."""
        engine = self._get_engine()
        try:
            if reset:
                Base.metadata.drop_all(engine)
                logger.info("Dropped market schema")
            Base.metadata.create_all(engine)
        except SQLAlchemyError as exc:
            raise SourceUnavailable("Failed to initialise market schema", resource="database") from exc
        logger.info("Market schema ready")

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    # ========== Writes ==========

    def add_sector(self, sector: Sector) -> None:
        with self._lock:
            self._staged.append(sector)

    def add_agent(self, agent: Agent) -> None:
        with self._lock:
            self._staged.append(agent)

    def add_ledger(self, ledger: Ledger) -> None:
        with self._lock:
            self._staged.append((ledger.owner_id, ledger.balance))

    def add_stock_record(self, record: StockRecord) -> None:
        with self._lock:
            self._staged.append((record.id, record.owner_id, record.asset_symbol, record.quantity))

    def commit(self) -> None:
        with self._lock:
            staged, self._staged = self._staged, []
        if not staged:
            return

        try:
            with self._session() as session, session.begin():
                for item in staged:
                    self._apply(session, item)
        except IntegrityError as exc:
            logger.warning("Commit rejected by integrity constraint: %s", exc.orig)
            raise PreconditionFailed(f"Commit rejected by integrity constraint: {exc.orig}") from exc
        except (ArithmeticError, DataError) as exc:
            # Value outside the column range, e.g. an INTEGER above 2**63 - 1.
            logger.warning("Commit rejected value out of range: %s", exc)
            raise InvalidArgument(f"Value out of range for the market store: {exc}") from exc
        except SQLAlchemyError as exc:
            if isinstance(getattr(exc, "orig", None), ArithmeticError):
                raise InvalidArgument(f"Value out of range for the market store: {exc.orig}") from exc
            logger.error("Commit failed: %s", exc)
            raise SourceUnavailable("Market store commit failed", resource="database") from exc

        logger.debug("Committed %d staged writes", len(staged))

    def rollback(self) -> None:
        with self._lock:
            dropped = len(self._staged)
            self._staged = []
        if dropped:
            logger.debug("Rolled back %d staged writes", dropped)

    def _apply(self, session: Session, item: _Staged) -> None:
        if isinstance(item, Sector):
            session.add(
                SectorRow(
                    id=item.id,
                    name=item.name,
                    category=item.category,
                    valuation_grade=item.valuation_grade,
                )
            )
        elif isinstance(item, Agent):
            next_seq = (session.scalar(select(func.max(AgentRow.seq))) or 0) + 1
            session.add(
                AgentRow(
                    id=item.id,
                    seq=next_seq,
                    name=item.name,
                    suffix=item.suffix,
                    created_at=item.created_at,
                    sector_id=item.sector_id,
                    tier=item.tier,
                )
            )
        elif len(item) == 2:
            owner_id, balance = item
            ledger_row = session.get(LedgerRow, owner_id)
            if ledger_row is None:
                session.add(LedgerRow(owner_id=owner_id, balance=balance))
            else:
                ledger_row.balance = balance
        else:
            record_id, owner_id, symbol, quantity = item
            stock_row = session.get(StockRecordRow, record_id)
            if stock_row is None:
                next_seq = (session.scalar(select(func.max(StockRecordRow.seq))) or 0) + 1
                session.add(
                    StockRecordRow(
                        id=record_id,
                        seq=next_seq,
                        owner_id=owner_id,
                        asset_symbol=symbol,
                        quantity=quantity,
                    )
                )
            else:
                stock_row.quantity = quantity
        # Flush per item so later lookups in the same batch see earlier rows.
        session.flush()

    # ========== Reads ==========

    def query_all_sectors(self) -> Sequence[Sector]:
        with self._read() as session:
            rows = session.scalars(select(SectorRow).order_by(SectorRow.name)).all()
            return [_to_sector(row) for row in rows]

    def get_sector(self, *, sector_id: UUID) -> Optional[Sector]:
        with self._read() as session:
            row = session.get(SectorRow, sector_id)
            return _to_sector(row) if row is not None else None

    def get_agent(self, *, agent_id: UUID) -> Optional[Agent]:
        with self._read() as session:
            row = session.get(AgentRow, agent_id)
            return self._hydrate_agent(session, row) if row is not None else None

    def list_agents(self) -> Sequence[Agent]:
        with self._read() as session:
            rows = session.scalars(select(AgentRow).order_by(AgentRow.created_at, AgentRow.seq)).all()
            return [self._hydrate_agent(session, row) for row in rows]

    def get_ledger(self, *, owner_id: UUID) -> Optional[Ledger]:
        with self._read() as session:
            row = session.get(LedgerRow, owner_id)
            return Ledger(row.owner_id, Decimal(row.balance)) if row is not None else None

    def list_stock_records(self, *, owner_id: UUID) -> Sequence[StockRecord]:
        with self._read() as session:
            return _stock_records(session, owner_id)

    @contextmanager
    def _read(self) -> Iterator[Session]:
        try:
            with self._session() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Market store read failed: %s", exc)
            raise SourceUnavailable("Market store is unavailable", resource="database") from exc

    def _hydrate_agent(self, session: Session, row: AgentRow) -> Agent:
        agent = Agent(
            row.name,
            row.suffix,
            row.sector_id,
            agent_id=row.id,
            created_at=_as_utc(row.created_at),
            tier=row.tier,
        )
        ledger_row = session.get(LedgerRow, row.id)
        if ledger_row is not None:
            agent.attach_ledger(Ledger(ledger_row.owner_id, Decimal(ledger_row.balance)))
        for record in _stock_records(session, row.id):
            agent.receive_stock(record)
        return agent


def _to_sector(row: SectorRow) -> Sector:
    return Sector(name=row.name, category=row.category, valuation_grade=row.valuation_grade, id=row.id)


def _stock_records(session: Session, owner_id: UUID) -> list[StockRecord]:
    rows = session.scalars(
        select(StockRecordRow).where(StockRecordRow.owner_id == owner_id).order_by(StockRecordRow.seq)
    ).all()
    return [StockRecord(row.owner_id, row.asset_symbol, row.quantity, record_id=row.id) for row in rows]
