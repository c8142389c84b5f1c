from typing import List

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import EnterpriseSummary


class ListEnterprisesUseCase:
    """Use case for listing active enterprises with their member counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[EnterpriseSummary]]:
        async with self.uow:
            rows = await self.uow.enterprises.list_active_with_member_count()
            return Return.ok(
                [
                    EnterpriseSummary(
                        id=enterprise.id,
                        name=enterprise.name,
                        description=enterprise.description,
                        logo=enterprise.logo,
                        website=enterprise.website,
                        is_active=enterprise.is_active,
                        created_at=enterprise.created_at,
                        member_count=count,
                    )
                    for enterprise, count in rows
                ]
            )
