import pytest
from sqlalchemy.exc import IntegrityError

from app import crud, models, schemas
from app.core.config import settings
from app.crud import crud_post


def make_post(db, title="Hello World", sections=None, **fields):
    payload = schemas.PostCreate(title=title, sections=sections, **fields)
    return crud.create_post(db, payload)


def test_create_post_without_sections(db):
    post = make_post(db, excerpt="Short", author="Ana")

    assert post.id is not None
    assert post.slug == "hello-world"
    assert post.excerpt == "Short"
    assert post.author == "Ana"
    assert post.sections == []
    assert post.created_at is not None
    assert post.updated_at is not None


def test_empty_excerpt_and_author_are_stored_as_null(db):
    post = make_post(db, excerpt="", author="")
    assert post.excerpt is None
    assert post.author is None


def test_sections_are_returned_in_ascending_order(db):
    post = make_post(db, sections=[
        {"type": "text", "content": "a", "order": 1},
        {"type": "code", "content": "b", "order": 0},
    ])

    assert [s.content for s in post.sections] == ["b", "a"]

    db.expire_all()
    reread = crud.get_post(db, post.id)
    assert [s.content for s in reread.sections] == ["b", "a"]


def test_missing_order_defaults_to_list_position(db):
    post = make_post(db, sections=[
        {"type": "text", "content": "first"},
        {"type": "text", "content": "second"},
        {"type": "text", "content": "third"},
    ])
    assert [s.order for s in post.sections] == [0, 1, 2]


def test_metadata_round_trips(db):
    post = make_post(db, sections=[
        {"type": "code", "content": "print(1)", "metadata": {"language": "python"}},
        {"type": "image", "content": "https://example.com/a.png",
         "metadata": {"alt": "A", "size": [640, 480], "nested": {"ok": True}}},
        {"type": "text", "content": "no metadata"},
    ])
    db.expire_all()
    sections = crud.get_post(db, post.id).sections

    assert sections[0].section_metadata == {"language": "python"}
    assert sections[1].section_metadata == {"alt": "A", "size": [640, 480], "nested": {"ok": True}}
    assert sections[2].section_metadata is None


def test_duplicate_titles_get_suffixed_slugs(db):
    slugs = [make_post(db, title="Same Title").slug for _ in range(3)]
    assert slugs == ["same-title", "same-title-1", "same-title-2"]


def test_get_posts_lists_newest_first_without_sections(db):
    first = make_post(db, title="First")
    second = make_post(db, title="Second")

    posts = crud.get_posts(db)
    assert [p.id for p in posts] == [second.id, first.id]


def test_get_post_by_slug(db):
    post = make_post(db, title="Find Me")
    assert crud.get_post_by_slug(db, "find-me").id == post.id
    assert crud.get_post_by_slug(db, "missing") is None


def test_update_with_unchanged_title_keeps_slug(db):
    make_post(db, title="Taken")
    post = make_post(db, title="Taken")
    assert post.slug == "taken-1"

    updated = crud.update_post(db, post.id, schemas.PostUpdate(title="Taken"))
    assert updated.slug == "taken-1"


def test_update_changes_slug_with_title(db):
    post = make_post(db, title="Old Title")
    updated = crud.update_post(db, post.id, schemas.PostUpdate(title="New Title", excerpt="e"))
    assert updated.slug == "new-title"
    assert updated.excerpt == "e"
    assert crud.get_post_by_slug(db, "old-title") is None


def test_update_without_sections_leaves_them_alone(db):
    post = make_post(db, sections=[{"type": "text", "content": "keep"}])
    section_id = post.sections[0].id

    updated = crud.update_post(db, post.id, schemas.PostUpdate(title="Renamed"))
    assert [s.id for s in updated.sections] == [section_id]


def test_update_replaces_all_sections(db):
    post = make_post(db, sections=[
        {"type": "text", "content": "old 1"},
        {"type": "text", "content": "old 2"},
    ])
    old_ids = [s.id for s in post.sections]

    updated = crud.update_post(db, post.id, schemas.PostUpdate(
        title=post.title,
        sections=[{"type": "html", "content": "<p>new</p>"}],
    ))

    assert [s.content for s in updated.sections] == ["<p>new</p>"]
    assert all(s.id not in old_ids for s in updated.sections)
    for old_id in old_ids:
        assert crud.get_section(db, old_id) is None


def test_update_with_empty_section_list_clears_sections(db):
    post = make_post(db, sections=[{"type": "text", "content": "gone"}])
    updated = crud.update_post(db, post.id, schemas.PostUpdate(title=post.title, sections=[]))
    assert updated.sections == []
    assert db.query(models.Section).count() == 0


def test_update_missing_post_returns_none(db):
    assert crud.update_post(db, 999, schemas.PostUpdate(title="x")) is None


def test_delete_post_removes_sections(db):
    post = make_post(db, sections=[
        {"type": "text", "content": "a"},
        {"type": "video", "content": "https://youtu.be/abc"},
    ])
    section_ids = [s.id for s in post.sections]

    assert crud.delete_post(db, post.id) is True
    assert crud.get_post(db, post.id) is None
    for section_id in section_ids:
        assert crud.get_section(db, section_id) is None


def test_delete_missing_post_returns_false(db):
    assert crud.delete_post(db, 12345) is False


def test_update_section_replaces_fields_and_defaults_order(db):
    post = make_post(db, sections=[
        {"type": "text", "title": "Intro", "content": "a", "order": 5, "metadata": {"x": 1}},
    ])
    section_id = post.sections[0].id

    updated = crud.update_section(db, section_id, schemas.SectionUpdate(type="code", content="b"))

    assert updated.type == models.SectionType.code
    assert updated.content == "b"
    assert updated.order == 0
    assert updated.section_metadata is None
    assert updated.title == "Intro"


def test_update_section_sets_title_when_given(db):
    post = make_post(db, sections=[{"type": "text", "title": "Intro", "content": "a"}])
    section_id = post.sections[0].id

    updated = crud.update_section(db, section_id, schemas.SectionUpdate(
        type="text", content="a", title="Renamed", order=3,
    ))
    assert updated.title == "Renamed"
    assert updated.order == 3


def test_update_and_delete_missing_section(db):
    assert crud.update_section(db, 42, schemas.SectionUpdate(type="text", content="x")) is None
    assert crud.delete_section(db, 42) is False


def test_delete_section(db):
    post = make_post(db, sections=[{"type": "text", "content": "a"}, {"type": "text", "content": "b"}])
    first, second = post.sections

    assert crud.delete_section(db, first.id) is True
    db.expire_all()
    assert [s.id for s in crud.get_post(db, post.id).sections] == [second.id]


def test_slug_conflict_on_commit_is_retried(db, monkeypatch):
    make_post(db, title="Race")
    calls = []
    real_resolve = crud_post.resolve_unique_slug

    def stale_resolve(session, title, exclude_post_id=None):
        # First probe misses the row another writer just committed
        calls.append(title)
        if len(calls) == 1:
            return "race"
        return real_resolve(session, title, exclude_post_id=exclude_post_id)

    monkeypatch.setattr(crud_post, "resolve_unique_slug", stale_resolve)

    post = make_post(db, title="Race")
    assert post.slug == "race-1"
    assert len(calls) == 2


def test_slug_conflict_gives_up_after_max_retries(db, monkeypatch):
    make_post(db, title="Race")
    monkeypatch.setattr(crud_post, "resolve_unique_slug", lambda *args, **kwargs: "race")
    monkeypatch.setattr(settings, "SLUG_MAX_RETRIES", 2)

    with pytest.raises(IntegrityError):
        make_post(db, title="Race")
    assert db.query(models.Post).count() == 1


def test_slug_conflict_on_update_is_retried(db, monkeypatch):
    make_post(db, title="Taken")
    post = make_post(db, title="Other", sections=[{"type": "text", "content": "kept"}])
    real_resolve = crud_post.resolve_unique_slug
    stale = iter(["taken"])

    def stale_resolve(session, title, exclude_post_id=None):
        return next(stale, None) or real_resolve(session, title, exclude_post_id=exclude_post_id)

    monkeypatch.setattr(crud_post, "resolve_unique_slug", stale_resolve)

    updated = crud.update_post(db, post.id, schemas.PostUpdate(
        title="Taken",
        sections=[{"type": "code", "content": "new"}],
    ))
    assert updated.slug == "taken-1"
    assert [s.content for s in updated.sections] == ["new"]
