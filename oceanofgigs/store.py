from __future__ import annotations
import threading

from fastapi import Request

from . import models
from .config import Settings
from .relations import RelationshipIndex
from .tables import Table


class MemStore:
    """Every table plus both join indexes, sharing one process-wide lock.

    Nothing here survives a restart.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users: Table[models.User] = Table(models.User, self.lock)
        self.skills: Table[models.Skill] = Table(models.Skill, self.lock)
        self.gigs: Table[models.Gig] = Table(models.Gig, self.lock)
        self.applications: Table[models.Application] = Table(models.Application, self.lock)
        self.saved_items: Table[models.SavedItem] = Table(models.SavedItem, self.lock)
        self.user_skills: RelationshipIndex[models.UserSkill] = RelationshipIndex(
            Table(models.UserSkill, self.lock), "user_id", "skill_id"
        )
        self.gig_skills: RelationshipIndex[models.GigSkill] = RelationshipIndex(
            Table(models.GigSkill, self.lock), "gig_id", "skill_id"
        )

    def counts(self) -> dict[str, int]:
        with self.lock:
            return {
                "users": len(self.users),
                "skills": len(self.skills),
                "gigs": len(self.gigs),
                "applications": len(self.applications),
                "saved_items": len(self.saved_items),
            }


def build_store(settings: Settings) -> MemStore:
    store = MemStore()
    if settings.SEED_DEFAULT_SKILLS:
        for name in settings.DEFAULT_SKILLS:
            store.skills.insert_unless(lambda s, n=name: s.name.lower() == n.lower(), name=name)
    return store


def get_store(request: Request) -> MemStore:
    return request.app.state.store
