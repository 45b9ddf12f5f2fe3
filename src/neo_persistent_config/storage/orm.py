"""ORM storage for config values using SQLAlchemy mapped classes.

Slower than :class:`DatabaseStorage` since every row is loaded as an entity,
but entities go through the ORM unit of work, so mapper events and
validators declared on the model fire on every change.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from sqlalchemy import String, Text, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from ..core.exceptions import StorageError
from ..entities.protocols import Scalar

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the bundled config entry model."""
    pass


class ConfigEntry(Base):
    """Config entry row: one persisted key/value pair."""

    __tablename__ = "configs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), index=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"ConfigEntry(key={self.key!r})"


class OrmStorage:
    """Storage contract implementation over an ORM model."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        model: Type[Any] = ConfigEntry,
        key_attribute: str = "key",
        value_attribute: str = "value",
        filter: Optional[Mapping[str, Any]] = None
    ):
        self.session_factory = session_factory
        self.model = model
        self.key_attribute = key_attribute
        self.value_attribute = value_attribute
        self.filter = dict(filter or {})

    def _query(self, session: Session, key: Optional[str] = None) -> List[Any]:
        criteria = dict(self.filter)
        if key is not None:
            criteria[self.key_attribute] = key
        return list(session.scalars(select(self.model).filter_by(**criteria)))

    def save(self, values: Mapping[str, Scalar]) -> bool:
        try:
            with self.session_factory() as session, session.begin():
                for key, value in values.items():
                    entities = self._query(session, key)
                    if entities:
                        for entity in entities:
                            setattr(entity, self.value_attribute, value)
                    else:
                        session.add(self.model(**{
                            **self.filter,
                            self.key_attribute: key,
                            self.value_attribute: value,
                        }))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save config entities: {e}")
            raise StorageError(f"Failed to save configuration values: {e}")

        return True

    def get(self) -> Dict[str, Scalar]:
        try:
            with self.session_factory() as session:
                return {
                    getattr(entity, self.key_attribute): getattr(entity, self.value_attribute)
                    for entity in self._query(session)
                }
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load configuration values: {e}")

    def clear(self) -> bool:
        return self._delete()

    def clear_value(self, key: str) -> bool:
        return self._delete(key)

    def _delete(self, key: Optional[str] = None) -> bool:
        try:
            with self.session_factory() as session, session.begin():
                for entity in self._query(session, key):
                    session.delete(entity)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to clear configuration values: {e}")
        return True
