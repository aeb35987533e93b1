"""
SQL store client - serves the store queries from a database via SQLAlchemy.

Used for local development against SQLite and wherever the database can be
reached directly. Answers the same SelectQuery shapes as the PostgREST
client, including the PGRST116 "no rows" code for single-row reads, so the
repository cannot tell the two apart.

Datetimes are stored as naive UTC and returned as ISO-8601 strings with a
UTC offset, matching what PostgREST sends for timestamptz columns.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import DateTime, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from config.database import SessionLocal
from models.entities import Product, StoreLocation, WeeklyShop, WeeklyShopItem
from services.stores.base import (
    NO_ROWS_CODE,
    SQL_CODE,
    RemoteStoreClient,
    SelectQuery,
    StoreError,
    StoreResponse,
    split_relation,
)

logger = logging.getLogger(__name__)

TABLES = {
    "weekly_shops": WeeklyShop,
    "weekly_shop_items": WeeklyShopItem,
    "products": Product,
    "store_locations": StoreLocation,
}

_OPERATORS = {
    "eq": lambda col, v: col == v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
}


def _to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _coerce(entity, column: str, value):
    """Convert a wire value (ISO string) into what the column binds."""
    attr = getattr(entity, column, None)
    if attr is None:
        raise ValueError(f"Unknown column {entity.__tablename__}.{column}")
    if isinstance(attr.type, DateTime) and value is not None:
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        value = _to_utc_naive(value)
    return value


def _serialize_value(value):
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    return value


def to_row(obj, expand: Optional[dict] = None) -> dict:
    """Render an entity (and its expanded relations) as a row dict."""
    row = {
        attr.key: _serialize_value(getattr(obj, attr.key))
        for attr in inspect(obj).mapper.column_attrs
    }
    for key, children in (expand or {}).items():
        alias, _ = split_relation(key)
        related = getattr(obj, alias)
        if related is None:
            row[alias] = None
        elif isinstance(related, list):
            row[alias] = [to_row(r, children) for r in related]
        else:
            row[alias] = to_row(related, children)
    return row


def _load_options(entity, expand: dict, parent=None) -> list:
    """Eager-load options for every path in an expand tree."""
    options = []
    for key, children in expand.items():
        alias, _ = split_relation(key)
        attr = getattr(entity, alias, None)
        if attr is None:
            raise ValueError(f"Unknown relation {entity.__tablename__}.{alias}")
        loader = parent.joinedload(attr) if parent is not None else joinedload(attr)
        target = attr.property.mapper.class_
        options.extend(_load_options(target, children, loader) or [loader])
    return options


class SqlStore(RemoteStoreClient):
    """Store client backed by SQLAlchemy sessions."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory or SessionLocal

    @property
    def backend_name(self) -> str:
        return "SQL"

    def is_configured(self) -> bool:
        return True

    def _entity(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}")

    def _fail(self, db: Session, action: str, table: str, e: SQLAlchemyError) -> StoreResponse:
        db.rollback()
        logger.error(f"SQL {action} {table} failed: {e}")
        return StoreResponse(error=StoreError(code=SQL_CODE, message=str(e)))

    def select(self, query: SelectQuery) -> StoreResponse:
        entity = self._entity(query.table)
        db = self._session_factory()
        try:
            q = db.query(entity).options(*_load_options(entity, query.expand))
            for f in query.filters:
                if f.operator not in _OPERATORS:
                    raise ValueError(f"Unsupported filter operator: {f.operator}")
                value = _coerce(entity, f.column, f.value)
                q = q.filter(_OPERATORS[f.operator](getattr(entity, f.column), value))
            if query.order_by:
                column = getattr(entity, query.order_by)
                q = q.order_by(column.desc() if query.descending else column.asc())
            if query.limit is not None:
                q = q.limit(query.limit)
            records = q.all()

            rows = [to_row(r, query.expand) for r in records]
            if not query.single:
                return StoreResponse(data=rows)
            if len(rows) != 1:
                logger.debug(f"SQL select {query.table}: {len(rows)} rows for single-row read")
                return StoreResponse(error=StoreError(
                    code=NO_ROWS_CODE,
                    message="JSON object requested, multiple (or no) rows returned",
                    details=f"The result contains {len(rows)} rows",
                ))
            return StoreResponse(data=rows[0])
        except SQLAlchemyError as e:
            return self._fail(db, "select", query.table, e)
        finally:
            db.close()

    def insert(self, table: str, row: dict) -> StoreResponse:
        entity = self._entity(table)
        db = self._session_factory()
        try:
            record = entity(**{k: _coerce(entity, k, v) for k, v in row.items()})
            db.add(record)
            db.commit()
            db.refresh(record)
            return StoreResponse(data=to_row(record))
        except SQLAlchemyError as e:
            return self._fail(db, "insert", table, e)
        finally:
            db.close()

    def update(self, table: str, row_id: int, values: dict) -> StoreResponse:
        entity = self._entity(table)
        db = self._session_factory()
        try:
            record = db.query(entity).filter(entity.id == row_id).first()
            if record is None:
                return StoreResponse(error=StoreError(
                    code=NO_ROWS_CODE,
                    message="JSON object requested, multiple (or no) rows returned",
                    details="The result contains 0 rows",
                ))
            for key, value in values.items():
                setattr(record, key, _coerce(entity, key, value))
            db.commit()
            db.refresh(record)
            return StoreResponse(data=to_row(record))
        except SQLAlchemyError as e:
            return self._fail(db, "update", table, e)
        finally:
            db.close()

    def delete(self, table: str, row_id: int) -> StoreResponse:
        entity = self._entity(table)
        db = self._session_factory()
        try:
            db.query(entity).filter(entity.id == row_id).delete()
            db.commit()
            return StoreResponse(data=None)
        except SQLAlchemyError as e:
            return self._fail(db, "delete", table, e)
        finally:
            db.close()
