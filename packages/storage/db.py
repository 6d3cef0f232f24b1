import logging
import uuid
from typing import List, Dict, Any, Optional

from sqlalchemy import (
    Column, Integer, JSON, MetaData, String, Table, and_, case, create_engine, func, select,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from packages.catalog.schemas import ComponentQuery

logger = logging.getLogger(__name__)

metadata = MetaData()

components = Table(
    "components",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String(32), nullable=False, unique=True),
    Column("data", JSON().with_variant(JSONB(), "postgresql"), nullable=False),
)

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

def make_engine(url: str) -> Engine:
    kwargs: Dict[str, Any] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # one shared connection, otherwise every checkout sees an empty database
        if url in _MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)

def _record(component_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": component_id, **data}

class ComponentStore:
    """Document store for components, kept as JSON rows in a single table."""

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None:
            if not url:
                raise ValueError("ComponentStore needs a database url or an engine")
            engine = make_engine(url)
        self.engine = engine

    def init_schema(self) -> None:
        metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _key(component_id: str) -> Optional[str]:
        try:
            return uuid.UUID(component_id).hex
        except (ValueError, TypeError, AttributeError):
            return None

    def is_valid_id(self, component_id: str) -> bool:
        return self._key(component_id) is not None

    def _number_at(self, *path: str):
        """Float value of the JSON number at ``path``; NULL for strings, bools and nulls."""
        data = components.c.data
        value = data[path]
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            is_number = func.jsonb_typeof(value) == "number"
        elif dialect == "sqlite":
            is_number = func.json_type(data, "$." + ".".join(path)).in_(("integer", "real"))
        else:
            return value.as_float()
        # CASE keeps the cast away from non-numeric rows
        return case((is_number, value.as_float()), else_=None)

    def _conditions(self, query: ComponentQuery):
        where = []
        data = components.c.data
        if query.type is not None:
            where.append(data["type"].as_string() == query.type)
        if query.socket is not None:
            where.append(data[("specs", "socket")].as_string() == query.socket)
        if query.memory_type is not None:
            where.append(data[("specs", "memoryType")].as_string() == query.memory_type)
        if query.min_wattage is not None:
            where.append(self._number_at("specs", "wattage") >= query.min_wattage)
        return where

    def find_all(self, query: Optional[ComponentQuery] = None) -> List[Dict[str, Any]]:
        stmt = select(components.c.id, components.c.data).order_by(components.c.seq)
        if query is not None and not query.is_empty():
            stmt = stmt.where(and_(*self._conditions(query)))
        with self.engine.begin() as cx:
            rows = cx.execute(stmt).fetchall()
        return [_record(r.id, r.data) for r in rows]

    def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        key = self.new_id()
        data = dict(doc)
        with self.engine.begin() as cx:
            cx.execute(components.insert().values(id=key, data=data))
        logger.info(f"Inserted component {key} (type={data.get('type')})")
        return _record(key, data)

    def find_by_id_and_update(self, component_id: str,
                              partial: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge ``partial`` into the stored document and return the result.

        Top-level keys overwrite, everything else is kept. Returns None when
        no component has this id.
        """
        key = self._key(component_id)
        if key is None:
            return None
        with self.engine.begin() as cx:
            row = cx.execute(
                select(components.c.data).where(components.c.id == key).with_for_update()
            ).fetchone()
            if row is None:
                return None
            data = dict(row.data)
            data.update(partial)
            cx.execute(components.update().where(components.c.id == key).values(data=data))
        logger.info(f"Updated component {key}: {sorted(partial)}")
        return _record(key, data)

    def find_by_id_and_delete(self, component_id: str) -> Optional[Dict[str, Any]]:
        key = self._key(component_id)
        if key is None:
            return None
        with self.engine.begin() as cx:
            row = cx.execute(
                select(components.c.data).where(components.c.id == key).with_for_update()
            ).fetchone()
            if row is None:
                return None
            cx.execute(components.delete().where(components.c.id == key))
        logger.info(f"Deleted component {key}")
        return _record(key, row.data)
