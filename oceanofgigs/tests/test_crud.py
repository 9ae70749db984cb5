import pytest

from oceanofgigs import crud, models, schemas
from oceanofgigs.security import verify_password
from oceanofgigs.store import MemStore


def _seed_user(store: MemStore, username="alice", role="student") -> models.User:
    payload = schemas.UserCreate(
        username=username,
        password="password123",
        role=role,
        name=username.title(),
        email=f"{username}@example.com",
    )
    return crud.create_user(store, payload).record


def _seed_gig(store: MemStore, recruiter: models.User, title="Gig") -> models.Gig:
    payload = schemas.GigCreate(
        title=title,
        description="Do the thing",
        min_price=50,
        recruiter_id=recruiter.id,
        company_name="Acme",
    )
    return crud.create_gig(store, payload)


def _skill(store: MemStore, name: str) -> models.Skill:
    return crud.create_skill(store, schemas.SkillCreate(name=name)).record


@pytest.fixture()
def recruiter(store):
    return _seed_user(store, "rita", role="recruiter")


def test_create_user_hashes_password(store):
    user = _seed_user(store)
    assert user.password != "password123"
    assert verify_password("password123", user.password)
    assert crud.get_user(store, user.id) == user


def test_create_user_rejects_taken_username(store):
    _seed_user(store)
    again = crud.create_user(
        store,
        schemas.UserCreate(
            username="alice", password="password123", role="recruiter", name="A", email="a@example.com"
        ),
    )
    assert not again.inserted
    assert len(store.users) == 1


def test_update_user_merges_partial_profile(store):
    user = _seed_user(store)
    crud.update_user(store, user.id, schemas.UserUpdate(university="MIT"))
    updated = crud.update_user(store, user.id, schemas.UserUpdate(about="Hi"))

    assert updated.university == "MIT"
    assert updated.about == "Hi"
    assert updated.name == user.name
    assert updated.password == user.password


def test_update_user_rehashes_new_password(store):
    user = _seed_user(store)
    updated = crud.update_user(store, user.id, schemas.UserUpdate(password="brand-new-pass"))
    assert verify_password("brand-new-pass", updated.password)


def test_update_missing_user_returns_none(store):
    assert crud.update_user(store, 999, schemas.UserUpdate(name="Nobody")) is None


def test_skill_lookup_is_case_insensitive(store):
    python = crud.get_skill_by_name(store, "pYtHoN")
    assert python is not None
    assert python.name == "Python"
    assert not crud.create_skill(store, schemas.SkillCreate(name="PYTHON")).inserted


def test_gig_with_skills_keeps_link_order(store, recruiter):
    gig = _seed_gig(store, recruiter)
    react = crud.get_skill_by_name(store, "React")
    css = crud.get_skill_by_name(store, "CSS")
    crud.add_gig_skill(store, gig.id, css.id)
    crud.add_gig_skill(store, gig.id, react.id)

    decorated = crud.get_gig_with_skills(store, gig.id)

    assert [s.name for s in decorated.skills] == ["CSS", "React"]
    assert decorated.title == gig.title
    assert crud.get_gig_with_skills(store, 999) is None


def test_dangling_skill_links_are_dropped(store):
    user = _seed_user(store)
    crud.add_user_skill(store, user.id, 1)
    crud.add_user_skill(store, user.id, 4242)

    decorated = crud.get_user_with_skills(store, user.id)

    assert [s.id for s in decorated.skills] == [1]
    assert len(crud.get_user_skills(store, user.id)) == 2


def test_duplicate_user_skill_keeps_single_entry(store):
    user = _seed_user(store)
    assert crud.add_user_skill(store, user.id, 3).inserted
    assert not crud.add_user_skill(store, user.id, 3).inserted
    assert [us.skill_id for us in crud.get_user_skills(store, user.id)] == [3]


def test_empty_skill_filter_returns_every_gig(store, recruiter):
    first = _seed_gig(store, recruiter, "one")
    _seed_gig(store, recruiter, "two")
    crud.add_gig_skill(store, first.id, 1)

    assert crud.get_gigs_by_skills(store, []) == crud.get_all_gigs_with_skills(store)
    assert len(crud.get_gigs_by_skills(store, [])) == 2


def test_skill_filter_is_a_union_not_an_intersection(store, recruiter):
    rust = _skill(store, "Rust")
    go = _skill(store, "Go")
    only_rust = _seed_gig(store, recruiter, "rust only")
    only_go = _seed_gig(store, recruiter, "go only")
    neither = _seed_gig(store, recruiter, "untagged")
    crud.add_gig_skill(store, only_rust.id, rust.id)
    crud.add_gig_skill(store, only_go.id, go.id)

    found = {g.id for g in crud.get_gigs_by_skills(store, [rust.id, go.id])}

    assert found == {only_rust.id, only_go.id}
    assert neither.id not in found


def test_gig_tagged_with_both_skills_appears_once(store, recruiter):
    gig = _seed_gig(store, recruiter)
    crud.add_gig_skill(store, gig.id, 1)
    crud.add_gig_skill(store, gig.id, 2)
    assert [g.id for g in crud.get_gigs_by_skills(store, [1, 2])] == [gig.id]


def test_unknown_skill_id_matches_nothing(store, recruiter):
    gig = _seed_gig(store, recruiter)
    crud.add_gig_skill(store, gig.id, 1)
    assert crud.get_gigs_by_skills(store, [999]) == []


def test_users_by_skills_post_filters_on_role(store, recruiter):
    student = _seed_user(store, "sam")
    other = _seed_user(store, "sue")
    crud.add_user_skill(store, student.id, 7)
    crud.add_user_skill(store, recruiter.id, 7)
    crud.add_user_skill(store, other.id, 8)

    students = crud.get_users_by_skills(store, [7, 8], models.UserRole.STUDENT)

    assert [u.username for u in students] == ["sam", "sue"]
    assert all(isinstance(u, models.UserWithSkills) for u in students)
    recruiters = crud.get_users_by_skills(store, [7], "recruiter")
    assert [u.id for u in recruiters] == [recruiter.id]


def test_users_by_role_without_skills(store, recruiter):
    student = _seed_user(store, "sam")
    assert [u.id for u in crud.get_users_by_role(store, "student")] == [student.id]
    assert [u.id for u in crud.get_users_by_skills(store, [], "recruiter")] == [recruiter.id]


def test_applications_are_unique_per_gig_and_student(store, recruiter):
    student = _seed_user(store, "sam")
    gig = _seed_gig(store, recruiter)
    payload = schemas.ApplicationCreate(gig_id=gig.id, student_id=student.id)

    first = crud.create_application(store, payload)
    second = crud.create_application(store, payload)

    assert first.inserted and not second.inserted
    assert len(crud.list_applications_for_gig(store, gig.id)) == 1
    assert crud.list_applications_for_student(store, student.id) == [first.record]


def test_update_application_status(store, recruiter):
    student = _seed_user(store, "sam")
    gig = _seed_gig(store, recruiter)
    app_ = crud.create_application(store, schemas.ApplicationCreate(gig_id=gig.id, student_id=student.id)).record

    updated = crud.update_application_status(store, app_.id, models.ApplicationStatus.ACCEPTED)

    assert updated.status == "accepted"
    assert updated.created_at == app_.created_at
    assert crud.update_application_status(store, 999, "rejected") is None


def test_saved_items_round_trip(store, recruiter):
    student = _seed_user(store, "sam")
    gig = _seed_gig(store, recruiter)
    saved = crud.save_item(store, schemas.SavedItemCreate(user_id=recruiter.id, saved_user_id=student.id))
    crud.save_item(store, schemas.SavedItemCreate(user_id=student.id, gig_id=gig.id))

    assert crud.list_saved_items(store, recruiter.id) == [saved]
    assert crud.remove_saved_item(store, saved.id) is True
    assert crud.remove_saved_item(store, saved.id) is False
    assert crud.list_saved_items(store, recruiter.id) == []


def test_plain_lookups(store, recruiter):
    gig = _seed_gig(store, recruiter)
    student = _seed_user(store, "sam")
    crud.add_gig_skill(store, gig.id, 2)
    application = crud.create_application(
        store, schemas.ApplicationCreate(gig_id=gig.id, student_id=student.id)
    ).record

    assert crud.get_user_by_username(store, "sam") == student
    assert crud.get_user_by_username(store, "nobody") is None
    assert crud.list_gigs(store) == [gig]
    assert [gs.skill_id for gs in crud.get_gig_skills(store, gig.id)] == [2]
    assert crud.get_application(store, application.id) == application
    assert crud.get_application(store, 999) is None
    assert crud.remove_gig_skill(store, gig.id, 2) is True
    assert crud.get_gig_skills(store, gig.id) == []
