"""Database table storage for config values.

Stores each config value as one row of a key/value table using SQLAlchemy
Core. An optional ``filter`` mapping restricts every query to a partition of
the table (for example one tenant) and is written into inserted rows.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import Column, MetaData, String, Table, Text, and_, delete, insert, select, true, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import StorageError
from ..entities.protocols import Scalar

logger = logging.getLogger(__name__)


class DatabaseStorage:
    """Storage contract implementation over a relational table."""

    def __init__(
        self,
        engine: Engine,
        table_name: str = "configs",
        key_column: str = "key",
        value_column: str = "value",
        filter: Optional[Mapping[str, Any]] = None,
        schema: Optional[str] = None
    ):
        self.engine = engine
        self.table_name = table_name
        self.key_column = key_column
        self.value_column = value_column
        self.filter = dict(filter or {})
        self.schema = schema
        self._table: Optional[Table] = None

    @property
    def table(self) -> Table:
        """Table reflected from the database on first use."""
        if self._table is None:
            self._table = Table(
                self.table_name,
                MetaData(),
                schema=self.schema,
                autoload_with=self.engine,
            )
        return self._table

    def create_table(self) -> Table:
        """Create the storage table if it does not exist.

        Filter columns become part of the primary key so each partition has
        its own key space.
        """
        metadata = MetaData()
        columns = [Column(name, String(255), primary_key=True) for name in self.filter]
        columns.append(Column(self.key_column, String(255), primary_key=True))
        columns.append(Column(self.value_column, Text, nullable=True))

        table = Table(self.table_name, metadata, *columns, schema=self.schema)
        try:
            metadata.create_all(self.engine, tables=[table])
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create config table {self.table_name}: {e}")

        self._table = table
        logger.info(f"Config storage table {self.table_name} is ready")
        return table

    def _where(self, key: Optional[str] = None):
        table = self.table
        conditions = [table.c[name] == value for name, value in self.filter.items()]
        if key is not None:
            conditions.append(table.c[self.key_column] == key)
        return and_(true(), *conditions)

    def save(self, values: Mapping[str, Scalar]) -> bool:
        existing = self.get()

        try:
            table = self.table
            with self.engine.begin() as connection:
                for key, value in values.items():
                    if key in existing:
                        if existing[key] == value:
                            continue
                        connection.execute(
                            update(table)
                            .where(self._where(key))
                            .values({self.value_column: value})
                        )
                    else:
                        connection.execute(
                            insert(table).values({
                                **self.filter,
                                self.key_column: key,
                                self.value_column: value,
                            })
                        )
        except SQLAlchemyError as e:
            logger.error(f"Failed to save config values to {self.table_name}: {e}")
            raise StorageError(f"Failed to save configuration values: {e}")

        return True

    def get(self) -> Dict[str, Scalar]:
        try:
            table = self.table
            query = select(table.c[self.key_column], table.c[self.value_column]).where(self._where())
            with self.engine.connect() as connection:
                rows = connection.execute(query).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load configuration values: {e}")

        return {row[0]: row[1] for row in rows}

    def clear(self) -> bool:
        try:
            with self.engine.begin() as connection:
                connection.execute(delete(self.table).where(self._where()))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to clear configuration values: {e}")
        return True

    def clear_value(self, key: str) -> bool:
        try:
            with self.engine.begin() as connection:
                connection.execute(delete(self.table).where(self._where(key)))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to clear configuration value {key}: {e}")
        return True
