"""Domain events for identity records."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="UserRole")
class RoleAssigned:
    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String()
    role: String(required=True)
