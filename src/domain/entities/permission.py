"""
Permission Entity

Catalog entry: one (action, resource) pair.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel

from .enums import PermissionAction, ResourceType


def permission_name(action: PermissionAction, resource: ResourceType) -> str:
    return f"{action.value}_{resource.value}"


class Permission(SQLModel, table=True):
    """
    Permission entity - fixed catalog, seeded once as the action x resource cross product.
    """

    __tablename__ = "permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    action: PermissionAction = Field(nullable=False)
    resource: ResourceType = Field(nullable=False)

    name: str = Field(unique=True, max_length=100)
    description: str = Field(default="", max_length=255)

    __table_args__ = (
        Index("uq_permission_action_resource", "action", "resource", unique=True),
    )
