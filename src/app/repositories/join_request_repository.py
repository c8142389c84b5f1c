from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import JoinRequest


class IJoinRequestRepository(ABC):
    """JoinRequest repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, request_id: UUID) -> Optional[JoinRequest]:
        """Get join request by ID"""
        pass

    @abstractmethod
    async def get_by_user_and_enterprise(
        self, user_id: UUID, enterprise_id: UUID
    ) -> Optional[JoinRequest]:
        """Get the join request of a user for an enterprise"""
        pass

    @abstractmethod
    async def list_pending_by_enterprise(self, enterprise_id: UUID) -> List[JoinRequest]:
        """Pending requests of an enterprise, newest first"""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UUID) -> List[JoinRequest]:
        """All requests made by a user, newest first"""
        pass

    @abstractmethod
    async def create(self, join_request: JoinRequest) -> JoinRequest:
        """Create a new join request"""
        pass

    @abstractmethod
    async def update(self, join_request: JoinRequest) -> JoinRequest:
        """Update existing join request"""
        pass

    @abstractmethod
    async def delete(self, join_request: JoinRequest) -> None:
        """Delete a join request"""
        pass
