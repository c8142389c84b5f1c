from uuid import UUID

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utc_now
from src.domain.entities import User

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class UserRepository(IUserRepository):
    """
    User repository implementation using SQLModel.

    Identities are owned by the token issuer; rows exist so memberships,
    grants and role links have something to reference.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def ensure(self, user_id: UUID) -> None:
        insert = _UPSERT_INSERTS.get(self.session.bind.dialect.name)

        if insert is not None:
            stmt = (
                insert(User)
                .values(id=user_id, is_active=True, created_at=utc_now())
                .on_conflict_do_nothing()
            )
            await self.session.execute(stmt)
            return

        stmt = select(User.id).where(User.id == user_id)
        if (await self.session.execute(stmt)).scalar_one_or_none() is None:
            self.session.add(User(id=user_id))
            await self.session.flush()

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
