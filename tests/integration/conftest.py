from typing import Dict, List, NamedTuple
from uuid import UUID

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.enterprises import (
    CreateEnterpriseUseCase,
    HandleJoinRequestUseCase,
    RequestToJoinUseCase,
)
from src.app.use_cases.permissions import (
    ListPermissionsUseCase,
    SeedDefaultPermissionsUseCase,
)
from src.depends import enable_sqlite_foreign_keys, get_unit_of_work
from src.domain.entities import JoinRequestAction, User


class Team(NamedTuple):
    enterprise_id: UUID
    owner_id: UUID
    member_ids: List[UUID]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest_asyncio.fixture
def create_user(uow):
    """Factory inserting a user and returning its id"""

    async def _create(email: str) -> UUID:
        async with uow:
            user = await uow.users.create(User(email=email))
            user_id = user.id
            await uow.commit()
        return user_id

    return _create


@pytest_asyncio.fixture
def build_team(uow, create_user):
    """Factory creating an enterprise with its owner and approved members"""

    async def _build(name: str = "Acme", members: int = 1) -> Team:
        slug = name.lower().replace(" ", "-")
        owner_id = await create_user(f"owner@{slug}.test")
        created = await CreateEnterpriseUseCase(uow).execute(owner_id, name)
        enterprise_id = created.value.enterprise.id

        member_ids = []
        for index in range(members):
            member_id = await create_user(f"member{index}@{slug}.test")
            request = await RequestToJoinUseCase(uow).execute(member_id, enterprise_id)
            await HandleJoinRequestUseCase(uow).execute(
                owner_id, request.value.id, JoinRequestAction.APPROVE
            )
            member_ids.append(member_id)

        return Team(enterprise_id, owner_id, member_ids)

    return _build


@pytest_asyncio.fixture
async def catalog(uow) -> Dict[str, UUID]:
    """Seeded permission catalog keyed by permission name"""
    await SeedDefaultPermissionsUseCase(uow).execute()
    permissions = await ListPermissionsUseCase(uow).execute()
    return {permission.name: permission.id for permission in permissions.value}


@pytest_asyncio.fixture
def app(db_session):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
