"""Back-office user listing: profiles joined with their roles."""

from dataclasses import dataclass
from datetime import datetime

from protean.exceptions import ValidationError

from storefront.identity.profile import all_profiles
from storefront.identity.role import Role, roles_by_user


@dataclass(frozen=True)
class UserSummary:
    user_id: str
    full_name: str | None
    phone: str | None
    avatar_url: str | None
    role: str
    created_at: datetime | None


def list_users(search: str | None = None, role: str | None = None) -> list[UserSummary]:
    """All users with a profile, newest first.

    ``search`` matches the full name (case-insensitive) or the user id;
    ``role`` keeps only users holding that role.
    """
    if role and role not in {r.value for r in Role}:
        raise ValidationError({"role": [f"Role must be one of: {', '.join(r.value for r in Role)}"]})

    roles = roles_by_user()
    users = [
        UserSummary(
            user_id=str(profile.id),
            full_name=profile.full_name,
            phone=profile.phone,
            avatar_url=profile.avatar_url,
            role=roles.get(str(profile.id), Role.USER.value),
            created_at=profile.created_at,
        )
        for profile in all_profiles()
    ]

    term = (search or "").strip().lower()
    if term:
        users = [u for u in users if term in (u.full_name or "").lower() or term in u.user_id.lower()]
    if role:
        users = [u for u in users if u.role == role]

    return sorted(users, key=lambda u: u.created_at or datetime.min, reverse=True)


def count_users() -> int:
    return len(all_profiles())
