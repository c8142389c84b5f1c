import logging
from uuid import uuid4

import pytest

from src.app.use_cases.roles import (
    AddPermissionToRoleUseCase,
    AssignRoleToUserUseCase,
    CreateRoleUseCase,
    DeleteRoleUseCase,
    RemovePermissionFromRoleUseCase,
    RemoveRoleFromUserUseCase,
    UpdateRoleUseCase,
)
from src.domain.errors import Conflict, Forbidden, NotFound
from tests.utils.factories import (
    make_membership,
    make_permission,
    make_role,
    membership_lookup,
)


@pytest.fixture
def team(mock_uow):
    owner = make_membership(is_owner=True)
    member = make_membership(enterprise_id=owner.enterprise_id)
    outsider = make_membership()
    mock_uow.memberships.get_by_user_id.side_effect = membership_lookup(owner, member, outsider)
    return owner, member, outsider


class TestCreateRole:
    @pytest.mark.asyncio
    async def test_creates_custom_role_with_permissions(self, mock_uow, team):
        owner, _, _ = team
        permission = make_permission()
        mock_uow.roles.get_by_name.return_value = None
        mock_uow.permissions.get_by_ids.return_value = [permission]
        mock_uow.roles.create.side_effect = lambda role: role
        mock_uow.roles.list_permissions.return_value = [permission]

        result = await CreateRoleUseCase(mock_uow).execute(
            owner.user_id, "Viewer", permission_ids=[permission.id, permission.id]
        )

        assert result.value.name == "Viewer"
        assert result.value.is_system is False
        assert result.value.is_custom is True
        assert [p.id for p in result.value.permissions] == [permission.id]
        role_id, linked = mock_uow.roles.add_permissions.call_args.args
        assert linked == [permission.id]

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_by_name.return_value = make_role(owner.enterprise_id)

        result = await CreateRoleUseCase(mock_uow).execute(owner.user_id, "Viewer")

        assert isinstance(result.error, Conflict)

    @pytest.mark.asyncio
    async def test_unknown_permission_is_not_found(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_by_name.return_value = None
        mock_uow.permissions.get_by_ids.return_value = []

        result = await CreateRoleUseCase(mock_uow).execute(
            owner.user_id, "Viewer", permission_ids=[uuid4()]
        )

        assert isinstance(result.error, NotFound)
        mock_uow.roles.create.assert_not_called()


class TestSystemRoles:
    @pytest.mark.asyncio
    async def test_system_role_cannot_be_updated(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(
            owner.enterprise_id, name="Admin", is_system=True
        )

        result = await UpdateRoleUseCase(mock_uow).execute(owner.user_id, uuid4(), name="X")

        assert isinstance(result.error, Forbidden)

    @pytest.mark.asyncio
    async def test_system_role_cannot_be_deleted(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(
            owner.enterprise_id, name="Admin", is_system=True
        )

        result = await DeleteRoleUseCase(mock_uow).execute(owner.user_id, uuid4())

        assert isinstance(result.error, Forbidden)
        mock_uow.roles.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_system_role_permissions_are_locked(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(
            owner.enterprise_id, is_system=True
        )

        add = await AddPermissionToRoleUseCase(mock_uow).execute(owner.user_id, uuid4(), uuid4())
        remove = await RemovePermissionFromRoleUseCase(mock_uow).execute(
            owner.user_id, uuid4(), uuid4()
        )

        assert isinstance(add.error, Forbidden)
        assert isinstance(remove.error, Forbidden)


class TestRolePermissions:
    @pytest.mark.asyncio
    async def test_adding_linked_permission_is_conflict(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(owner.enterprise_id)
        mock_uow.permissions.get_by_id.return_value = make_permission()
        mock_uow.roles.has_permission.return_value = True

        result = await AddPermissionToRoleUseCase(mock_uow).execute(
            owner.user_id, uuid4(), uuid4()
        )

        assert isinstance(result.error, Conflict)

    @pytest.mark.asyncio
    async def test_removing_unlinked_permission_is_not_found(self, mock_uow, team):
        owner, _, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(owner.enterprise_id)
        mock_uow.roles.has_permission.return_value = False

        result = await RemovePermissionFromRoleUseCase(mock_uow).execute(
            owner.user_id, uuid4(), uuid4()
        )

        assert isinstance(result.error, NotFound)
        mock_uow.roles.remove_permission.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_replaces_permission_set(self, mock_uow, team, caplog):
        owner, _, _ = team
        role = make_role(owner.enterprise_id)
        permission = make_permission()
        mock_uow.roles.get_in_enterprise.return_value = role
        mock_uow.permissions.get_by_ids.return_value = [permission]
        mock_uow.roles.update.side_effect = lambda r: r
        mock_uow.roles.list_permissions.return_value = [permission]
        mock_uow.roles.count_users.return_value = 3

        with caplog.at_level(logging.INFO):
            result = await UpdateRoleUseCase(mock_uow).execute(
                owner.user_id, role.id, permission_ids=[permission.id]
            )

        mock_uow.roles.set_permissions.assert_called_once_with(role.id, [permission.id])
        assert result.value.user_count == 3
        assert f"Role {role.id} updated in enterprise {owner.enterprise_id}" in caplog.messages


class TestRoleAssignment:
    @pytest.mark.asyncio
    async def test_assign_role_to_member(self, mock_uow, team):
        owner, member, _ = team
        role = make_role(owner.enterprise_id)
        mock_uow.roles.get_in_enterprise.return_value = role
        mock_uow.roles.user_has_role.return_value = False
        mock_uow.roles.list_user_roles.return_value = [role]
        mock_uow.roles.list_permissions.return_value = []

        result = await AssignRoleToUserUseCase(mock_uow).execute(
            owner.user_id, member.user_id, role.id
        )

        assert result.value.user_id == member.user_id
        assert [r.id for r in result.value.roles] == [role.id]
        mock_uow.roles.assign_to_user.assert_called_once_with(member.user_id, role.id)
        mock_uow.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_assign_role_across_enterprises_is_forbidden(self, mock_uow, team):
        owner, _, outsider = team

        result = await AssignRoleToUserUseCase(mock_uow).execute(
            owner.user_id, outsider.user_id, uuid4()
        )

        assert isinstance(result.error, Forbidden)
        mock_uow.roles.assign_to_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_assign_held_role_is_conflict(self, mock_uow, team):
        owner, member, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(owner.enterprise_id)
        mock_uow.roles.user_has_role.return_value = True

        result = await AssignRoleToUserUseCase(mock_uow).execute(
            owner.user_id, member.user_id, uuid4()
        )

        assert isinstance(result.error, Conflict)

    @pytest.mark.asyncio
    async def test_remove_role_not_held_is_not_found(self, mock_uow, team):
        owner, member, _ = team
        mock_uow.roles.get_in_enterprise.return_value = make_role(owner.enterprise_id)
        mock_uow.roles.user_has_role.return_value = False

        result = await RemoveRoleFromUserUseCase(mock_uow).execute(
            owner.user_id, member.user_id, uuid4()
        )

        assert isinstance(result.error, NotFound)
        assert result.error.code == "ROLE_NOT_ASSIGNED"

    @pytest.mark.asyncio
    async def test_unknown_role_is_not_found(self, mock_uow, team):
        owner, member, _ = team
        mock_uow.roles.get_in_enterprise.return_value = None

        result = await AssignRoleToUserUseCase(mock_uow).execute(
            owner.user_id, member.user_id, uuid4()
        )

        assert isinstance(result.error, NotFound)
