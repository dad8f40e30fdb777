"""User roles. Users without a role record are plain customers."""

from datetime import datetime
from enum import Enum

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shared.listing import LISTING_LIMIT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Role(Enum):
    ADMIN = "admin"
    USER = "user"


@storefront.aggregate
class UserRole:
    user_id: Identifier(required=True, unique=True)
    role: String(choices=Role, default=Role.USER.value)
    updated_at: DateTime(default=datetime.now)

    def change_to(self, role):
        from storefront.identity.events import RoleAssigned

        previous = self.role
        self.role = role
        self.updated_at = datetime.now()
        self.raise_(
            RoleAssigned(
                user_id=self.user_id,
                previous_role=previous,
                role=role,
            )
        )


@storefront.command(part_of="UserRole")
class AssignRole:
    user_id: Identifier(required=True)
    role: String(required=True, choices=Role)


def find_role(user_id) -> UserRole | None:
    return current_domain.repository_for(UserRole)._dao.query.filter(user_id=str(user_id)).all().first


def role_of(user_id) -> str:
    record = find_role(user_id)
    return record.role if record is not None else Role.USER.value


def is_admin(user_id) -> bool:
    return bool(user_id) and role_of(user_id) == Role.ADMIN.value


def roles_by_user() -> dict[str, str]:
    records = current_domain.repository_for(UserRole)._dao.query.limit(LISTING_LIMIT).all().items
    return {str(r.user_id): r.role for r in records}


@storefront.command_handler(part_of=UserRole)
class AssignRoleHandler:
    @handle(AssignRole)
    def assign_role(self, command):
        repo = current_domain.repository_for(UserRole)
        record = find_role(command.user_id)
        if record is None:
            record = UserRole(user_id=str(command.user_id), role=Role.USER.value)

        record.change_to(command.role)
        repo.add(record)
        logger.info("role_assigned", user_id=str(command.user_id), role=command.role)
