from contextlib import contextmanager
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional

from sqlalchemy import MetaData, Table, TypeDecorator, select, text
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Connection, Engine
from sqlmodel import SQLModel

from app.core.errors import (
    DatabaseConnectionError,
    DuplicateKeyError,
    PoolExhaustedError,
    QueryError,
    QueryTimeoutError,
)
from app.core.logging import get_logger
from app.models.entity import EntityDescriptor

logger = get_logger(__name__)

Row = Dict[str, Any]

# Driver error codes, keyed by the attribute each DBAPI exposes them on
DUPLICATE_KEY_CODES = {
    "sqlite_errorcode": {1555, 2067},  # SQLITE_CONSTRAINT_PRIMARYKEY / _UNIQUE
    "pgcode": {"23505"},
    "sqlstate": {"23505"},
}
MYSQL_DUPLICATE_KEY = 1062
TIMEOUT_CODES = {
    "sqlite_errorcode": {5},  # SQLITE_BUSY
    "pgcode": {"57014"},
    "sqlstate": {"57014"},
}
MYSQL_TIMEOUTS = {2013, 3024}

# Widest integer any supported driver can bind
MAX_BIGINT = 2 ** 63 - 1

ISO_PARSERS = {
    datetime: datetime.fromisoformat,
    date: date.fromisoformat,
    time: time.fromisoformat,
}


def _matches(orig: BaseException, codes: Mapping[str, set], mysql_codes: set) -> bool:
    for attr, values in codes.items():
        if getattr(orig, attr, None) in values:
            return True
    args = getattr(orig, "args", ())
    return bool(args) and isinstance(args[0], int) and args[0] in mysql_codes


def is_duplicate_key(error: sa_exc.DBAPIError) -> bool:
    return _matches(error.orig, DUPLICATE_KEY_CODES, {MYSQL_DUPLICATE_KEY})


def is_timeout(error: sa_exc.DBAPIError) -> bool:
    return _matches(error.orig, TIMEOUT_CODES, MYSQL_TIMEOUTS)


@contextmanager
def translate_driver_errors():
    """Re-raise SQLAlchemy/driver failures as app.core.errors types."""
    try:
        yield
    except sa_exc.TimeoutError as e:
        raise PoolExhaustedError(str(e)) from e
    except sa_exc.IntegrityError as e:
        if is_duplicate_key(e):
            raise DuplicateKeyError(str(e.orig)) from e
        raise QueryError(str(e.orig)) from e
    except sa_exc.DBAPIError as e:
        if is_timeout(e):
            raise QueryTimeoutError(str(e.orig)) from e
        if e.connection_invalidated or not e.statement:
            raise DatabaseConnectionError(str(e.orig)) from e
        raise QueryError(str(e.orig)) from e
    except sa_exc.SQLAlchemyError as e:
        raise QueryError(str(e)) from e
    except OverflowError as e:
        # sqlite3 raises this unwrapped for integers wider than 64 bits
        raise QueryError(str(e)) from e


class Gateway:
    """The only component that talks to the database.

    Identifiers (tables, columns) always come from ``metadata``; request data
    only ever reaches a statement as bound parameter values.
    """

    def __init__(self, engine: Engine, metadata: Optional[MetaData] = None):
        self.engine = engine
        self.metadata = metadata if metadata is not None else SQLModel.metadata
        self._reflected = MetaData()

    def table(self, name: str) -> Table:
        if name in self.metadata.tables:
            return self.metadata.tables[name]
        if name not in self._reflected.tables:
            with translate_driver_errors():
                Table(name, self._reflected, autoload_with=self.engine)
        return self._reflected.tables[name]

    def column(self, table: Table, name: str):
        if name not in table.c:
            raise QueryError(f"Unknown column {table.name}.{name}")
        return table.c[name]

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        with translate_driver_errors():
            with self.engine.begin() as conn:
                yield conn

    @contextmanager
    def _reading(self, conn: Optional[Connection]) -> Iterator[Connection]:
        if conn is not None:
            with translate_driver_errors():
                yield conn
            return
        with translate_driver_errors():
            with self.engine.connect() as new_conn:
                yield new_conn

    def ping(self):
        with self._reading(None) as conn:
            conn.execute(text("SELECT 1"))

    def python_type(self, table: Table, column: str) -> type:
        col_type = self.column(table, column).type
        if isinstance(col_type, TypeDecorator):
            col_type = col_type.impl_instance
        try:
            return col_type.python_type
        except NotImplementedError:
            return object

    def coerce_id(self, table: Table, column: str, value: Any):
        """Convert a path id to the column's Python type, or None if it can't be."""
        python_type = self.python_type(table, column)
        if not isinstance(value, python_type):
            try:
                value = python_type(value)
            except (TypeError, ValueError):
                return None
        if python_type is int and not -MAX_BIGINT - 1 <= value <= MAX_BIGINT:
            return None
        return value

    def coerce_values(self, table: Table, values: Mapping[str, Any]) -> Row:
        """Parse ISO strings sent for date/time columns; everything else passes through."""
        coerced = dict(values)
        for name, value in values.items():
            if not isinstance(value, str) or name not in table.c:
                continue
            parse = ISO_PARSERS.get(self.python_type(table, name))
            if parse is None:
                continue
            try:
                value = parse(value)
            except ValueError as e:
                raise QueryError(f"Invalid value for {table.name}.{name}: {value!r}") from e
            if isinstance(value, datetime) and value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            coerced[name] = value
        return coerced

    # ---------- reads ----------

    def fetch_all(
        self,
        name: str,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        conn: Optional[Connection] = None,
        for_update: bool = False,
    ) -> List[Row]:
        table = self.table(name)
        query = select(table)
        for column, value in (filters or {}).items():
            query = query.where(self.column(table, column) == value)
        if limit is not None:
            query = query.order_by(*table.primary_key.columns).limit(limit)
        if for_update:
            query = query.with_for_update()
        with self._reading(conn) as c:
            return [dict(row) for row in c.execute(query).mappings()]

    def fetch_by_id(
        self,
        entity: EntityDescriptor,
        entity_id: Any,
        conn: Optional[Connection] = None,
        for_update: bool = False,
    ) -> List[Row]:
        key = self.coerce_id(self.table(entity.name), entity.id_column, entity_id)
        if key is None:
            return []
        return self.fetch_all(
            entity.name, {entity.id_column: key}, conn=conn, for_update=for_update
        )

    # ---------- writes ----------

    def insert(self, entity: EntityDescriptor, values: Mapping[str, Any], conn: Connection) -> Any:
        """Insert one row and return its identifier."""
        table = self.table(entity.name)
        values = self.coerce_values(table, values)
        with translate_driver_errors():
            result = conn.execute(table.insert().values(**values))
        if values.get(entity.id_column) is not None:
            return values[entity.id_column]
        return result.inserted_primary_key[0]

    def create(self, entity: EntityDescriptor, values: Mapping[str, Any]) -> List[Row]:
        self.table(entity.name)
        with self.transaction() as conn:
            new_id = self.insert(entity, values, conn)
            logger.info(f"Inserted {entity.name} {new_id}")
            return self.fetch_by_id(entity, new_id, conn=conn)

    def update(self, entity: EntityDescriptor, entity_id: Any, values: Mapping[str, Any]) -> List[Row]:
        table = self.table(entity.name)
        key = self.coerce_id(table, entity.id_column, entity_id)
        if key is None:
            return []
        values = self.coerce_values(table, values)
        with self.transaction() as conn:
            if values:
                statement = (
                    table.update()
                    .where(self.column(table, entity.id_column) == key)
                    .values(**values)
                )
                conn.execute(statement)
            # The body may have moved the row to a new id
            new_key = values.get(entity.id_column, key)
            return self.fetch_by_id(entity, new_key, conn=conn)

    def delete(self, entity: EntityDescriptor, entity_id: Any) -> int:
        table = self.table(entity.name)
        key = self.coerce_id(table, entity.id_column, entity_id)
        if key is None:
            return 0
        with self.transaction() as conn:
            statement = table.delete().where(self.column(table, entity.id_column) == key)
            return conn.execute(statement).rowcount

    def increment(
        self, entity: EntityDescriptor, entity_id: Any, column: str, amount: Any, conn: Connection
    ) -> int:
        table = self.table(entity.name)
        target = self.column(table, column)
        statement = (
            table.update()
            .where(self.column(table, entity.id_column) == entity_id)
            .values({target: target + amount})
        )
        with translate_driver_errors():
            return conn.execute(statement).rowcount
