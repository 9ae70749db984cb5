# oceanofgigs/api.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
import structlog

from . import crud, models
from .schemas import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationStatusUpdate,
    GigCreate,
    GigOut,
    GigSkillOut,
    GigWithSkillsOut,
    SavedItemCreate,
    SavedItemOut,
    SkillCreate,
    SkillLink,
    SkillOut,
    UserCreate,
    UserOut,
    UserSkillOut,
    UserUpdate,
    UserWithSkillsOut,
)
from .store import MemStore, get_store

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api")


def parse_skill_ids(values: list[str] | None) -> list[int]:
    """Accept ``?skills=1,2`` as well as ``?skills=1&skills=2``; blanks are ignored."""
    ids: list[int] = []
    for value in values or []:
        for token in value.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                ids.append(int(token))
            except ValueError:
                raise RequestValidationError(
                    [
                        {
                            "type": "int_parsing",
                            "loc": ("query", "skills"),
                            "msg": f"Invalid skill id: {token!r}",
                            "input": token,
                        }
                    ]
                )
    return ids


# Users
@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED, tags=["users"])
def create_user(payload: UserCreate, store: MemStore = Depends(get_store)):
    result = crud.create_user(store, payload)
    if not result.inserted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    logger.info("user_created", user_id=result.record.id, role=result.record.role)
    return result.record

@router.get("/users/{user_id}", response_model=UserOut, tags=["users"])
def get_user(user_id: int, store: MemStore = Depends(get_store)):
    user = crud.get_user(store, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.get("/users/{user_id}/skills", response_model=UserWithSkillsOut, tags=["users"])
def get_user_with_skills(user_id: int, store: MemStore = Depends(get_store)):
    user = crud.get_user_with_skills(store, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.patch("/users/{user_id}", response_model=UserOut, tags=["users"])
def update_user(user_id: int, payload: UserUpdate, store: MemStore = Depends(get_store)):
    user = crud.update_user(store, user_id, payload)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("user_updated", user_id=user_id, fields=sorted(payload.model_fields_set))
    return user

# Skills
@router.get("/skills", response_model=list[SkillOut], tags=["skills"])
def list_skills(store: MemStore = Depends(get_store)):
    return crud.list_skills(store)

@router.post("/skills", response_model=SkillOut, status_code=status.HTTP_201_CREATED, tags=["skills"])
def create_skill(payload: SkillCreate, store: MemStore = Depends(get_store)):
    result = crud.create_skill(store, payload)
    if not result.inserted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Skill already exists")
    logger.info("skill_created", skill_id=result.record.id, name=result.record.name)
    return result.record

@router.post(
    "/users/{user_id}/skills",
    response_model=UserSkillOut,
    status_code=status.HTTP_201_CREATED,
    tags=["skills"],
)
def add_user_skill(user_id: int, payload: SkillLink, store: MemStore = Depends(get_store)):
    if not crud.get_user(store, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if not crud.get_skill(store, payload.skill_id):
        raise HTTPException(status_code=404, detail="Skill not found")
    result = crud.add_user_skill(store, user_id, payload.skill_id)
    if not result.inserted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already has this skill")
    return result.record

@router.delete("/users/{user_id}/skills/{skill_id}", status_code=204, tags=["skills"])
def remove_user_skill(user_id: int, skill_id: int, store: MemStore = Depends(get_store)):
    if not crud.remove_user_skill(store, user_id, skill_id):
        raise HTTPException(status_code=404, detail="User skill not found")
    return None

# Gigs
@router.post("/gigs", response_model=GigOut, status_code=status.HTTP_201_CREATED, tags=["gigs"])
def create_gig(payload: GigCreate, store: MemStore = Depends(get_store)):
    recruiter = crud.get_user(store, payload.recruiter_id)
    if not recruiter:
        raise HTTPException(status_code=404, detail="Recruiter not found")
    if recruiter.role != models.UserRole.RECRUITER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only recruiters can post gigs")
    gig = crud.create_gig(store, payload)
    logger.info("gig_created", gig_id=gig.id, recruiter_id=gig.recruiter_id)
    return gig

@router.get("/gigs", response_model=list[GigWithSkillsOut], tags=["gigs"])
def list_gigs(
    skills: list[str] | None = Query(None, description="Skill ids, comma separated or repeated; any match"),
    store: MemStore = Depends(get_store),
):
    return crud.get_gigs_by_skills(store, parse_skill_ids(skills))

@router.get("/gigs/{gig_id}", response_model=GigWithSkillsOut, tags=["gigs"])
def get_gig(gig_id: int, store: MemStore = Depends(get_store)):
    gig = crud.get_gig_with_skills(store, gig_id)
    if not gig:
        raise HTTPException(status_code=404, detail="Gig not found")
    return gig

@router.get("/recruiters/{recruiter_id}/gigs", response_model=list[GigOut], tags=["gigs"])
def list_recruiter_gigs(recruiter_id: int, store: MemStore = Depends(get_store)):
    return crud.get_gigs_by_recruiter(store, recruiter_id)

@router.post(
    "/gigs/{gig_id}/skills",
    response_model=GigSkillOut,
    status_code=status.HTTP_201_CREATED,
    tags=["gigs"],
)
def add_gig_skill(gig_id: int, payload: SkillLink, store: MemStore = Depends(get_store)):
    if not crud.get_gig(store, gig_id):
        raise HTTPException(status_code=404, detail="Gig not found")
    if not crud.get_skill(store, payload.skill_id):
        raise HTTPException(status_code=404, detail="Skill not found")
    result = crud.add_gig_skill(store, gig_id, payload.skill_id)
    if not result.inserted:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Gig already has this skill")
    return result.record

@router.delete("/gigs/{gig_id}/skills/{skill_id}", status_code=204, tags=["gigs"])
def remove_gig_skill(gig_id: int, skill_id: int, store: MemStore = Depends(get_store)):
    if not crud.remove_gig_skill(store, gig_id, skill_id):
        raise HTTPException(status_code=404, detail="Gig skill not found")
    return None

# Applications
@router.post(
    "/applications",
    response_model=ApplicationOut,
    status_code=status.HTTP_201_CREATED,
    tags=["applications"],
)
def apply_to_gig(payload: ApplicationCreate, store: MemStore = Depends(get_store)):
    if not crud.get_gig(store, payload.gig_id):
        raise HTTPException(status_code=404, detail="Gig not found")
    student = crud.get_user(store, payload.student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    if student.role != models.UserRole.STUDENT:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only students can apply to gigs")

    result = crud.create_application(store, payload)
    if not result.inserted:
        logger.info(
            "application_rejected_duplicate",
            gig_id=payload.gig_id,
            student_id=payload.student_id,
        )
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Student already applied to this gig")
    logger.info("application_created", application_id=result.record.id, gig_id=payload.gig_id)
    return result.record

@router.get("/applications/gig/{gig_id}", response_model=list[ApplicationOut], tags=["applications"])
def list_gig_applications(gig_id: int, store: MemStore = Depends(get_store)):
    return crud.list_applications_for_gig(store, gig_id)

@router.get("/applications/student/{student_id}", response_model=list[ApplicationOut], tags=["applications"])
def list_student_applications(student_id: int, store: MemStore = Depends(get_store)):
    return crud.list_applications_for_student(store, student_id)

@router.patch("/applications/{application_id}/status", response_model=ApplicationOut, tags=["applications"])
def update_application_status(
    application_id: int, payload: ApplicationStatusUpdate, store: MemStore = Depends(get_store)
):
    application = crud.update_application_status(store, application_id, payload.status)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    logger.info("application_status_changed", application_id=application_id, status=application.status)
    return application

# Saved items
@router.post("/saved-items", response_model=SavedItemOut, status_code=status.HTTP_201_CREATED, tags=["saved"])
def save_item(payload: SavedItemCreate, store: MemStore = Depends(get_store)):
    if not crud.get_user(store, payload.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if payload.gig_id is not None and not crud.get_gig(store, payload.gig_id):
        raise HTTPException(status_code=404, detail="Gig not found")
    if payload.saved_user_id is not None and not crud.get_user(store, payload.saved_user_id):
        raise HTTPException(status_code=404, detail="Saved user not found")
    return crud.save_item(store, payload)

@router.get("/saved-items/{user_id}", response_model=list[SavedItemOut], tags=["saved"])
def list_saved_items(user_id: int, store: MemStore = Depends(get_store)):
    return crud.list_saved_items(store, user_id)

@router.delete("/saved-items/{saved_item_id}", status_code=204, tags=["saved"])
def delete_saved_item(saved_item_id: int, store: MemStore = Depends(get_store)):
    if not crud.remove_saved_item(store, saved_item_id):
        raise HTTPException(status_code=404, detail="Saved item not found")
    return None

# Search
@router.get("/search/users", response_model=list[UserWithSkillsOut], tags=["search"])
def search_users(
    role: str | None = Query(None),
    skills: list[str] | None = Query(None, description="Skill ids, comma separated or repeated; any match"),
    store: MemStore = Depends(get_store),
):
    if role not in (models.UserRole.STUDENT.value, models.UserRole.RECRUITER.value):
        raise HTTPException(status_code=400, detail="Valid role parameter is required")
    return crud.get_users_by_skills(store, parse_skill_ids(skills), role)
