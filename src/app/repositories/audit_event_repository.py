from abc import ABC, abstractmethod

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - append-only audit sink"""

    @abstractmethod
    async def record(self, audit_event: AuditEvent) -> AuditEvent:
        """Append an audit event (immutable)"""
        pass
