"""The storefront's "about us" page content, kept as a single record."""

from datetime import datetime

from protean import handle
from protean.fields import DateTime, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront

ABOUT_FIELDS = ("title", "content", "mission", "vision", "values", "image_url")


@storefront.aggregate
class AboutContent:
    title: String(required=True, max_length=255)
    content: Text()
    mission: Text()
    vision: Text()
    values: Text()
    image_url: String(max_length=500)
    updated_at: DateTime(default=datetime.now)

    def revise(self, **changes):
        for field_name in ABOUT_FIELDS:
            if field_name in changes and changes[field_name] is not None:
                setattr(self, field_name, changes[field_name])
        self.updated_at = datetime.now()


@storefront.command(part_of="AboutContent")
class UpdateAboutContent:
    title: String(max_length=255)
    content: Text()
    mission: Text()
    vision: Text()
    values: Text()
    image_url: String(max_length=500)


def current_about() -> AboutContent | None:
    """Return the single about record, or None before it has been written."""
    return current_domain.repository_for(AboutContent)._dao.query.all().first


@storefront.command_handler(part_of=AboutContent)
class AboutContentHandler:
    @handle(UpdateAboutContent)
    def update_about(self, command):
        repo = current_domain.repository_for(AboutContent)
        changes = {name: getattr(command, name) for name in ABOUT_FIELDS}

        about = current_about()
        if about is None:
            about = AboutContent(
                title=changes["title"] or "Sobre nós",
                **{k: v for k, v in changes.items() if k != "title"},
            )
        else:
            about.revise(**changes)

        repo.add(about)
        return str(about.id)
