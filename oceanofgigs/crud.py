from __future__ import annotations
from typing import Iterable

from . import models, schemas, security
from .relations import RelationshipIndex
from .store import MemStore
from .tables import InsertResult

# Users
def get_user(store: MemStore, user_id: int) -> models.User | None:
    return store.users.get(user_id)

def get_user_by_username(store: MemStore, username: str) -> models.User | None:
    return store.users.find(lambda u: u.username == username)

def create_user(store: MemStore, payload: schemas.UserCreate) -> InsertResult[models.User]:
    fields = payload.model_dump()
    fields["password"] = security.hash_password(payload.password)
    return store.users.insert_unless(lambda u: u.username == payload.username, **fields)

def update_user(store: MemStore, user_id: int, payload: schemas.UserUpdate) -> models.User | None:
    """Merge only the fields present in the request body."""
    fields = payload.model_dump(exclude_unset=True)
    if "password" in fields:
        fields["password"] = security.hash_password(fields["password"])
    return store.users.update(user_id, **fields)

def get_users_by_role(store: MemStore, role: models.UserRole | str) -> list[models.User]:
    return store.users.filter(lambda u: u.role == role)

# Skills
def list_skills(store: MemStore) -> list[models.Skill]:
    return store.skills.list()

def get_skill(store: MemStore, skill_id: int) -> models.Skill | None:
    return store.skills.get(skill_id)

def get_skill_by_name(store: MemStore, name: str) -> models.Skill | None:
    wanted = name.lower()
    return store.skills.find(lambda s: s.name.lower() == wanted)

def create_skill(store: MemStore, payload: schemas.SkillCreate) -> InsertResult[models.Skill]:
    wanted = payload.name.lower()
    return store.skills.insert_unless(lambda s: s.name.lower() == wanted, name=payload.name)

# Skill decoration
def _resolve_skills(store: MemStore, index: RelationshipIndex, owner_id: int) -> list[models.Skill]:
    skills = []
    for link in index.list_by_a(owner_id):
        skill = store.skills.get(link.skill_id)
        # dangling links are skipped
        if skill is not None:
            skills.append(skill)
    return skills

def _ids_with_any_skill(index: RelationshipIndex, skill_ids: Iterable[int]) -> set[int]:
    owners: set[int] = set()
    for skill_id in skill_ids:
        owners.update(getattr(link, index.a_field) for link in index.list_by_b(skill_id))
    return owners

# User skills
def get_user_skills(store: MemStore, user_id: int) -> list[models.UserSkill]:
    return store.user_skills.list_by_a(user_id)

def add_user_skill(store: MemStore, user_id: int, skill_id: int) -> InsertResult[models.UserSkill]:
    return store.user_skills.add(user_id, skill_id)

def remove_user_skill(store: MemStore, user_id: int, skill_id: int) -> bool:
    return store.user_skills.remove(user_id, skill_id)

def get_user_with_skills(store: MemStore, user_id: int) -> models.UserWithSkills | None:
    with store.lock:
        user = store.users.get(user_id)
        if user is None:
            return None
        return models.UserWithSkills(
            **user.model_dump(), skills=_resolve_skills(store, store.user_skills, user_id)
        )

def get_users_with_skills_by_role(store: MemStore, role: models.UserRole | str) -> list[models.UserWithSkills]:
    with store.lock:
        return [get_user_with_skills(store, u.id) for u in get_users_by_role(store, role)]

def get_users_by_skills(
    store: MemStore, skill_ids: list[int], role: models.UserRole | str
) -> list[models.UserWithSkills]:
    """Users of ``role`` holding at least one of ``skill_ids`` (union, not intersection).

    An empty ``skill_ids`` means no skill filter.
    """
    if not skill_ids:
        return get_users_with_skills_by_role(store, role)
    with store.lock:
        matching = _ids_with_any_skill(store.user_skills, skill_ids)
        return [
            get_user_with_skills(store, u.id)
            for u in store.users.list()
            if u.id in matching and u.role == role
        ]

# Gigs
def create_gig(store: MemStore, payload: schemas.GigCreate) -> models.Gig:
    return store.gigs.create(**payload.model_dump())

def get_gig(store: MemStore, gig_id: int) -> models.Gig | None:
    return store.gigs.get(gig_id)

def list_gigs(store: MemStore) -> list[models.Gig]:
    return store.gigs.list()

def get_gigs_by_recruiter(store: MemStore, recruiter_id: int) -> list[models.Gig]:
    return store.gigs.filter(lambda g: g.recruiter_id == recruiter_id)

def get_gig_skills(store: MemStore, gig_id: int) -> list[models.GigSkill]:
    return store.gig_skills.list_by_a(gig_id)

def add_gig_skill(store: MemStore, gig_id: int, skill_id: int) -> InsertResult[models.GigSkill]:
    return store.gig_skills.add(gig_id, skill_id)

def remove_gig_skill(store: MemStore, gig_id: int, skill_id: int) -> bool:
    return store.gig_skills.remove(gig_id, skill_id)

def get_gig_with_skills(store: MemStore, gig_id: int) -> models.GigWithSkills | None:
    with store.lock:
        gig = store.gigs.get(gig_id)
        if gig is None:
            return None
        return models.GigWithSkills(
            **gig.model_dump(), skills=_resolve_skills(store, store.gig_skills, gig_id)
        )

def get_all_gigs_with_skills(store: MemStore) -> list[models.GigWithSkills]:
    with store.lock:
        return [get_gig_with_skills(store, g.id) for g in store.gigs.list()]

def get_gigs_by_skills(store: MemStore, skill_ids: list[int]) -> list[models.GigWithSkills]:
    """Gigs tagged with at least one of ``skill_ids``; all gigs when empty."""
    if not skill_ids:
        return get_all_gigs_with_skills(store)
    with store.lock:
        matching = _ids_with_any_skill(store.gig_skills, skill_ids)
        return [get_gig_with_skills(store, g.id) for g in store.gigs.list() if g.id in matching]

# Applications
def create_application(store: MemStore, payload: schemas.ApplicationCreate) -> InsertResult[models.Application]:
    return store.applications.insert_unless(
        lambda a: a.gig_id == payload.gig_id and a.student_id == payload.student_id,
        **payload.model_dump(),
    )

def get_application(store: MemStore, application_id: int) -> models.Application | None:
    return store.applications.get(application_id)

def list_applications_for_gig(store: MemStore, gig_id: int) -> list[models.Application]:
    return store.applications.filter(lambda a: a.gig_id == gig_id)

def list_applications_for_student(store: MemStore, student_id: int) -> list[models.Application]:
    return store.applications.filter(lambda a: a.student_id == student_id)

def update_application_status(
    store: MemStore, application_id: int, status: models.ApplicationStatus
) -> models.Application | None:
    return store.applications.update(application_id, status=models.ApplicationStatus(status).value)

# Saved items
def save_item(store: MemStore, payload: schemas.SavedItemCreate) -> models.SavedItem:
    return store.saved_items.create(**payload.model_dump())

def remove_saved_item(store: MemStore, saved_item_id: int) -> bool:
    return store.saved_items.delete(saved_item_id)

def list_saved_items(store: MemStore, user_id: int) -> list[models.SavedItem]:
    return store.saved_items.filter(lambda s: s.user_id == user_id)
