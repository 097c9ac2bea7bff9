from typing import Optional
from diet.domain.Profile import Profile
from diet.infra import paths
from diet.infra.json_store import JsonStore
from diet.utilities.text import slugify


class SlugTakenError(ValueError):
    pass


class ProfileRepository:
    def __init__(self, path=None):
        self.store = JsonStore(path or paths.PROFILES_FILE)

    def get(self, owner_id: str) -> Optional[Profile]:
        for row in self.store.load():
            if row.get("id") == owner_id:
                return Profile.from_dict(row)
        return None

    def get_by_slug(self, slug: str) -> Optional[Profile]:
        wanted = slugify(slug)
        if not wanted:
            return None
        for row in self.store.load():
            if row.get("public_slug") == wanted:
                return Profile.from_dict(row)
        return None

    def get_or_create(self, owner_id: str) -> Profile:
        return self.get(owner_id) or Profile(owner_id)

    def save(self, profile: Profile) -> Profile:
        """Insert or replace a profile; the public slug is normalized and must be unique."""
        if profile.public_slug:
            profile.public_slug = slugify(profile.public_slug)
            if not profile.public_slug:
                raise ValueError("Public slug must contain letters or digits")

        def change(rows):
            if profile.public_slug and any(
                    row.get("public_slug") == profile.public_slug and row.get("id") != profile.id for row in rows):
                raise SlugTakenError(f"Slug '{profile.public_slug}' is already in use")
            others = [row for row in rows if row.get("id") != profile.id]
            return others + [profile.to_dict()]
        self.store.update(change)
        return profile
