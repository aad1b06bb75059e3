from contextlib import asynccontextmanager
from typing import Generic, TypeVar, Optional, List, Sequence, Type, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy import func
from pydantic import BaseModel

from common.core.otel_axiom_exporter import trace_span
from common.db.scoped import get_session

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")
CreateModelType = TypeVar("CreateModelType", bound=BaseModel)


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Base repository with per-operation session management.

    Sessions are acquired from the injected session factory for each
    operation and released immediately, so no connection is held while the
    caller talks to external services.

    Writes that must be safe under concurrent delivery use the dialect's
    native ``INSERT ... ON CONFLICT`` instead of read-then-write:

        repo.upsert(model, conflict_columns=["customer_id"])
        repo.insert_ignore(model, conflict_columns=["checkout_session_id"])
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with get_session(self.session_factory) as session:
            yield session

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        """Convert database entity to domain model."""
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(
        self, entities: Sequence[EntityType]
    ) -> List[DomainModelType]:
        """Convert list of database entities to domain models."""
        return [self._entity_to_domain(entity) for entity in entities]

    def _dialect_insert(self, session: AsyncSession):
        """Build an INSERT that supports ON CONFLICT for the bound dialect."""
        dialect = session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(self.entity_class)
        if dialect == "sqlite":
            return sqlite.insert(self.entity_class)
        raise NotImplementedError(f"ON CONFLICT inserts not supported for {dialect}")

    @trace_span
    async def upsert(
        self, create_model: CreateModelType, conflict_columns: List[str]
    ) -> DomainModelType:
        """
        Insert the row or overwrite every non-key column on conflict.

        All fields of the model are written, including None values, so the
        stored row is a full replacement of the previous one.
        """
        # mode='json' ensures enums are serialized to their values
        data = create_model.model_dump(mode="json")

        async with self._get_session() as session:
            stmt = self._dialect_insert(session).values(**data)
            update_values = {
                column: stmt.excluded[column]
                for column in data
                if column not in conflict_columns
            }
            if hasattr(self.entity_class, "updated_at"):
                update_values["updated_at"] = func.now()

            stmt = stmt.on_conflict_do_update(
                index_elements=conflict_columns, set_=update_values
            ).returning(self.entity_class)

            result = await session.scalars(
                stmt, execution_options={"populate_existing": True}
            )
            return self._entity_to_domain(result.one())

    @trace_span
    async def insert_ignore(
        self, create_model: CreateModelType, conflict_columns: List[str]
    ) -> Optional[DomainModelType]:
        """
        Insert the row unless one with the same conflict key exists.

        Returns the inserted row, or None when the key was already present.
        """
        data = create_model.model_dump(exclude_none=True, mode="json")

        async with self._get_session() as session:
            stmt = (
                self._dialect_insert(session)
                .values(**data)
                .on_conflict_do_nothing(index_elements=conflict_columns)
                .returning(self.entity_class)
            )
            result = await session.scalars(
                stmt, execution_options={"populate_existing": True}
            )
            entity = result.one_or_none()
            return self._entity_to_domain(entity) if entity else None
