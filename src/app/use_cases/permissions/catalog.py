from typing import List

from src.domain.entities import (
    Permission,
    PermissionAction,
    ResourceType,
    permission_name,
)


def default_catalog() -> List[Permission]:
    """Cross product of every action and resource"""
    return [
        Permission(
            action=action,
            resource=resource,
            name=permission_name(action, resource),
            description=f"Allows {action.value.lower()} on {resource.value.lower()}",
        )
        for resource in ResourceType
        for action in PermissionAction
    ]
