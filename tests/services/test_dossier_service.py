# mypy: ignore-errors
# tests/services/test_dossier_service.py
"""Tests for dossier publishing, moderation, reactions and comments."""

import pytest

from dossier_hub.core.errors import InvalidInputError, NotFoundError
from dossier_hub.schemas.common import MediaRef
from dossier_hub.schemas.dossier import DossierCreate, DossierUpdate
from dossier_hub.schemas.notification import NotificationType


@pytest.fixture()
def dossier(dossier_service):
    return dossier_service.create_dossier(
        DossierCreate(title="Operation Baobab", desc="Field report", author="Omar")
    )


def _types(notification_service, agent) -> list[str]:
    return [n["type"] for n in notification_service.list_visible(agent)]


def test_create_prepends_and_broadcasts(dossier_service, subscribe, events_named) -> None:
    fatou = subscribe("Fatou")
    first = dossier_service.create_dossier(
        DossierCreate(
            title="First",
            desc="d",
            author="Omar",
            media=[MediaRef(url="/uploads/a.mp4", type="video")],
        )
    )
    second = dossier_service.create_dossier(DossierCreate(title="Second", desc="d", author="Fatou"))

    assert [d.id for d in dossier_service.list_dossiers()] == [second.id, first.id]
    assert dossier_service.list_dossiers()[1].media[0].type == "video"
    assert [d["id"] for d in events_named(fatou, "new_dossier")] == [first.id, second.id]


@pytest.mark.parametrize("field", ["title", "desc", "author"])
def test_create_requires_fields(dossier_service, field) -> None:
    data = {"title": "t", "desc": "d", "author": "Omar", field: ""}

    with pytest.raises(InvalidInputError):
        dossier_service.create_dossier(DossierCreate(**data))


def test_create_notifies_friends_once(
    dossier_service, notification_service, befriend, store
) -> None:
    befriend("Omar", "Achraf")

    created = dossier_service.create_dossier(DossierCreate(title="t", desc="d", author="Omar"))

    posts = [
        n
        for n in notification_service.list_visible("Achraf")
        if n["type"] == NotificationType.NEW_POST_FRIEND.value
    ]
    assert len(posts) == 1
    assert posts[0]["recipient"] == "all"
    assert posts[0]["originAuthor"] == "Omar"
    assert posts[0]["dossierId"] == created.id
    assert NotificationType.NEW_POST_FRIEND.value not in _types(notification_service, "Fatou")
    assert NotificationType.NEW_POST_FRIEND.value not in _types(notification_service, "Omar")


def test_update_applies_supplied_fields(dossier_service, dossier, subscribe, events_named) -> None:
    watcher = subscribe("Fatou")

    updated = dossier_service.update_dossier(dossier.id, DossierUpdate(desc="Revised"))

    assert updated.title == "Operation Baobab"
    assert updated.desc == "Revised"
    assert events_named(watcher, "update_dossier")[0]["desc"] == "Revised"


def test_update_unknown_dossier(dossier_service) -> None:
    with pytest.raises(NotFoundError):
        dossier_service.update_dossier(1, DossierUpdate(title="x"))


@pytest.mark.parametrize(
    ("update", "expected"),
    [
        ({"is_hidden": True}, "hid your dossier"),
        ({"image_hidden": True}, "hid the media"),
        ({"title": "Renamed"}, "modified your dossier"),
    ],
)
def test_admin_update_notifies_author(
    dossier_service, notification_service, dossier, update, expected
) -> None:
    dossier_service.update_dossier(
        dossier.id, DossierUpdate(action_performer="Assane Diop", **update)
    )

    admin = [
        n
        for n in notification_service.list_visible("Omar")
        if n["type"] == NotificationType.ADMIN_ACTION.value
    ]
    assert len(admin) == 1
    assert expected in admin[0]["message"]
    assert admin[0]["performer"] == "Assane Diop"


def test_admin_restoring_hidden_dossier(dossier_service, notification_service, dossier) -> None:
    dossier_service.update_dossier(dossier.id, DossierUpdate(is_hidden=True))

    dossier_service.update_dossier(
        dossier.id, DossierUpdate(is_hidden=False, action_performer="Assane Diop")
    )

    messages = [n["message"] for n in notification_service.list_visible("Omar")]
    assert any("restored your dossier" in message for message in messages)


def test_author_update_does_not_notify(dossier_service, notification_service, dossier) -> None:
    dossier_service.update_dossier(dossier.id, DossierUpdate(title="x", action_performer="Omar"))

    assert NotificationType.ADMIN_ACTION.value not in _types(notification_service, "Omar")


def test_delete_dossier(dossier_service, notification_service, dossier, subscribe, events_named):
    watcher = subscribe("Achraf")

    dossier_service.delete_dossier(dossier.id, action_performer="Assane Diop")

    assert dossier_service.list_dossiers() == []
    assert events_named(watcher, "delete_dossier") == [{"id": dossier.id}]
    assert NotificationType.ADMIN_ACTION.value in _types(notification_service, "Omar")
    with pytest.raises(NotFoundError):
        dossier_service.delete_dossier(dossier.id)


def test_like_and_dislike_are_exclusive(
    dossier_service, notification_service, dossier, subscribe, events_named
) -> None:
    watcher = subscribe("Fatou")

    assert dossier_service.toggle_reaction(dossier.id, "Achraf") == {"likes": 1, "dislikes": 0}
    assert dossier_service.toggle_reaction(dossier.id, "Achraf", is_like=False) == {
        "likes": 0,
        "dislikes": 1,
    }
    assert dossier_service.toggle_reaction(dossier.id, "Achraf", is_like=False) == {
        "likes": 0,
        "dislikes": 0,
    }

    updates = events_named(watcher, "update_dossier_likes")
    assert updates[0] == {"dossierId": dossier.id, "likes": ["Achraf"], "dislikes": []}
    assert len(updates) == 3
    types = _types(notification_service, "Omar")
    assert types.count(NotificationType.LIKE_DOSSIER.value) == 1
    assert types.count(NotificationType.DISLIKE_DOSSIER.value) == 1


def test_self_like_does_not_notify(dossier_service, notification_service, dossier) -> None:
    dossier_service.toggle_reaction(dossier.id, "Omar")

    assert NotificationType.LIKE_DOSSIER.value not in _types(notification_service, "Omar")


def test_repost_toggle(dossier_service, notification_service, dossier, subscribe, events_named):
    watcher = subscribe("Fatou")

    assert dossier_service.toggle_repost(dossier.id, "Achraf") == {"reposts": 1}
    assert dossier_service.toggle_repost(dossier.id, "Achraf") == {"reposts": 0}

    assert events_named(watcher, "update_dossier_reposts")[0]["reposts"] == ["Achraf"]
    assert _types(notification_service, "Omar").count(NotificationType.REPOST_DOSSIER.value) == 1


def test_comment_and_reply_notifications(
    dossier_service, notification_service, dossier, subscribe, events_named
) -> None:
    watcher = subscribe("Fatou")

    parent = dossier_service.add_comment(dossier.id, "Nice work", "Achraf")
    reply = dossier_service.add_comment(dossier.id, "Thanks", "Fatou", parent_id=parent.id)

    comments = dossier_service.list_dossiers()[0].comments
    assert [c.id for c in comments] == [parent.id, reply.id]
    assert reply.parent_id == parent.id
    assert [e["comment"]["id"] for e in events_named(watcher, "new_comment")] == [
        parent.id,
        reply.id,
    ]
    assert _types(notification_service, "Omar").count(
        NotificationType.NEW_COMMENT_DOSSIER.value
    ) == 2
    assert NotificationType.REPLY_COMMENT.value in _types(notification_service, "Achraf")


def test_own_comment_does_not_notify(dossier_service, notification_service, dossier) -> None:
    dossier_service.add_comment(dossier.id, "bump", "Omar")

    assert NotificationType.NEW_COMMENT_DOSSIER.value not in _types(notification_service, "Omar")


def test_add_comment_requires_text(dossier_service, dossier) -> None:
    with pytest.raises(InvalidInputError):
        dossier_service.add_comment(dossier.id, "", "Achraf")


def test_edit_comment(dossier_service, notification_service, dossier, subscribe, events_named):
    comment = dossier_service.add_comment(dossier.id, "first", "Achraf")
    watcher = subscribe("Fatou")

    edited = dossier_service.edit_comment(
        dossier.id, comment.id, "second", action_performer="Assane Diop"
    )

    assert edited.text == "second"
    assert edited.modified is True
    assert events_named(watcher, "update_comment")[0]["comment"]["text"] == "second"
    assert NotificationType.EDIT_COMMENT.value in _types(notification_service, "Achraf")


def test_edit_comment_without_modified_tag(dossier_service, notification_service, dossier):
    comment = dossier_service.add_comment(dossier.id, "first", "Achraf")

    edited = dossier_service.edit_comment(
        dossier.id, comment.id, "typo fixed", action_performer="Achraf", no_modified_tag=True
    )

    assert edited.modified is False
    assert NotificationType.EDIT_COMMENT.value not in _types(notification_service, "Achraf")


def test_edit_unknown_comment(dossier_service, dossier) -> None:
    with pytest.raises(NotFoundError, match="Comment not found"):
        dossier_service.edit_comment(dossier.id, 1, "x")


def test_delete_comment_removes_reply_tree(
    dossier_service, notification_service, dossier, subscribe, events_named
) -> None:
    root = dossier_service.add_comment(dossier.id, "root", "Achraf")
    child = dossier_service.add_comment(dossier.id, "child", "Fatou", parent_id=root.id)
    dossier_service.add_comment(dossier.id, "grandchild", "Omar", parent_id=child.id)
    sibling = dossier_service.add_comment(dossier.id, "sibling", "Fatou")
    watcher = subscribe("Fatou")

    dossier_service.delete_comment(dossier.id, root.id, action_performer="Assane Diop")

    assert [c.id for c in dossier_service.list_dossiers()[0].comments] == [sibling.id]
    assert events_named(watcher, "delete_comment") == [
        {"dossierId": dossier.id, "commentId": root.id}
    ]
    assert NotificationType.DELETE_COMMENT.value in _types(notification_service, "Achraf")


def test_comment_like_toggle(dossier_service, notification_service, dossier, subscribe, events_named):
    comment = dossier_service.add_comment(dossier.id, "hello", "Achraf")
    watcher = subscribe("Fatou")

    assert dossier_service.toggle_comment_like(dossier.id, comment.id, "Fatou") == {"likes": 1}
    assert dossier_service.toggle_comment_like(dossier.id, comment.id, "Fatou") == {"likes": 0}
    dossier_service.toggle_comment_like(dossier.id, comment.id, "Achraf")

    likes = events_named(watcher, "update_comment_likes")
    assert likes[0] == {"dossierId": dossier.id, "commentId": comment.id, "likes": ["Fatou"]}
    assert _types(notification_service, "Achraf").count(NotificationType.LIKE_COMMENT.value) == 1


def test_names_resolve_to_stored_spelling(
    dossier_service, notification_service, befriend
) -> None:
    befriend("Omar", "Achraf")

    created = dossier_service.create_dossier(DossierCreate(title="t", desc="d", author="omar"))
    comment = dossier_service.add_comment(created.id, "Noted", "fatou")

    assert created.author == "Omar"
    assert comment.author == "Fatou"
    assert NotificationType.NEW_POST_FRIEND.value in _types(notification_service, "Achraf")
    assert NotificationType.NEW_COMMENT_DOSSIER.value in _types(notification_service, "Omar")


def test_reaction_toggles_across_name_case(dossier_service, dossier) -> None:
    assert dossier_service.toggle_reaction(dossier.id, "Achraf") == {"likes": 1, "dislikes": 0}
    assert dossier_service.toggle_reaction(dossier.id, "achraf") == {"likes": 0, "dislikes": 0}

    dossier_service.toggle_repost(dossier.id, "FATOU")
    assert dossier_service.list_dossiers()[0].reposts == ["Fatou"]


def test_admin_performer_matches_case_insensitively(
    dossier_service, notification_service, dossier
) -> None:
    dossier_service.update_dossier(
        dossier.id, DossierUpdate(is_hidden=True, action_performer="assane diop")
    )

    assert _types(notification_service, "Omar") == [NotificationType.ADMIN_ACTION.value]


def test_unknown_author_is_rejected(dossier_service) -> None:
    with pytest.raises(NotFoundError):
        dossier_service.create_dossier(DossierCreate(title="t", desc="d", author="Nobody"))
