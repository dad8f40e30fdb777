"""Customer profiles, one per authenticated user."""

from datetime import datetime

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shared.listing import LISTING_LIMIT


@storefront.aggregate
class Profile:
    """Display details for a user. The profile id is the user id asserted by auth."""

    full_name: String(max_length=255)
    phone: String(max_length=20)
    avatar_url: String(max_length=500)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    def update_details(self, full_name=None, phone=None, avatar_url=None):
        if full_name is not None:
            self.full_name = full_name
        if phone is not None:
            self.phone = phone
        if avatar_url is not None:
            self.avatar_url = avatar_url
        self.updated_at = datetime.now()


@storefront.command(part_of="Profile")
class UpdateProfile:
    user_id: Identifier(required=True)
    full_name: String(max_length=255)
    phone: String(max_length=20)
    avatar_url: String(max_length=500)


def find_profile(user_id) -> Profile | None:
    return current_domain.repository_for(Profile)._dao.query.filter(id=str(user_id)).all().first


def all_profiles() -> list[Profile]:
    return current_domain.repository_for(Profile)._dao.query.limit(LISTING_LIMIT).all().items


@storefront.command_handler(part_of=Profile)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        profile = find_profile(command.user_id)
        if profile is None:
            profile = Profile(id=str(command.user_id))

        profile.update_details(
            full_name=command.full_name,
            phone=command.phone,
            avatar_url=command.avatar_url,
        )
        current_domain.repository_for(Profile).add(profile)
        return str(profile.id)
