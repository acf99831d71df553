"""Repository layer: all database access goes through here."""

from db.repositories.profiles import ProfilesRepository, ProfileStore

__all__ = [
    "ProfileStore",
    "ProfilesRepository",
]
