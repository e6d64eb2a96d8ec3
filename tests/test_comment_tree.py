"""Tests for nesting flat comment listings."""

from datetime import UTC, datetime, timedelta

from shiori.schemas.comment import CommentAuthor, CommentWithAuthor
from shiori.services.comment_tree import build_comment_tree

START = datetime(2026, 1, 1, tzinfo=UTC)


def make_comment(comment_id: int, parent_id: int | None = None) -> CommentWithAuthor:
    return CommentWithAuthor(
        id=comment_id,
        parent_id=parent_id,
        user_id="u1",
        content=f"comment {comment_id}",
        created_at=START + timedelta(minutes=comment_id),
        user=CommentAuthor(name="Reader", image=""),
    )


def ids(nodes):
    return [node.id for node in nodes]


def test_empty_input():
    assert build_comment_tree([]) == []


def test_roots_and_replies_keep_order():
    comments = [
        make_comment(1),
        make_comment(2),
        make_comment(3, parent_id=1),
        make_comment(4, parent_id=2),
        make_comment(5, parent_id=1),
    ]

    tree = build_comment_tree(comments)

    assert ids(tree) == [1, 2]
    assert ids(tree[0].replies) == [3, 5]
    assert ids(tree[1].replies) == [4]
    assert tree[0].replies[0].replies == []


def test_author_summary_is_carried_over():
    tree = build_comment_tree([make_comment(1)])
    assert tree[0].user.name == "Reader"
    assert tree[0].content == "comment 1"


def test_input_is_not_mutated():
    comments = [make_comment(1), make_comment(2, parent_id=1)]
    build_comment_tree(comments)
    assert not hasattr(comments[0], "replies")


def test_unknown_parent_becomes_root():
    tree = build_comment_tree([make_comment(1), make_comment(2, parent_id=99)])
    assert ids(tree) == [1, 2]


def test_parent_listed_later_still_resolves():
    tree = build_comment_tree([make_comment(2, parent_id=3), make_comment(3)])
    assert ids(tree) == [3]
    assert ids(tree[0].replies) == [2]


def test_every_comment_appears_exactly_once():
    comments = [
        make_comment(1),
        make_comment(2, parent_id=1),
        make_comment(3, parent_id=42),
        make_comment(4),
        make_comment(5, parent_id=4),
        make_comment(6, parent_id=1),
    ]

    tree = build_comment_tree(comments)

    seen = []

    def walk(nodes):
        for node in nodes:
            seen.append(node.id)
            walk(node.replies)

    walk(tree)
    assert sorted(seen) == [1, 2, 3, 4, 5, 6]
    assert ids(tree) == [1, 3, 4]


def test_depth_is_unbounded_by_default():
    tree = build_comment_tree([make_comment(1), make_comment(2, 1), make_comment(3, 2)])
    assert ids(tree) == [1]
    assert ids(tree[0].replies) == [2]
    assert ids(tree[0].replies[0].replies) == [3]


def test_max_depth_hoists_deep_replies_under_root():
    comments = [
        make_comment(1),
        make_comment(2, parent_id=1),
        make_comment(3, parent_id=2),
        make_comment(4, parent_id=3),
    ]

    tree = build_comment_tree(comments, max_depth=2)

    assert ids(tree) == [1]
    assert ids(tree[0].replies) == [2, 3, 4]
    assert all(reply.replies == [] for reply in tree[0].replies)


def test_max_depth_one_flattens_everything():
    tree = build_comment_tree([make_comment(1), make_comment(2, 1)], max_depth=1)
    assert ids(tree) == [1, 2]


def test_parent_cycle_degrades_to_roots():
    comments = [make_comment(1, parent_id=2), make_comment(2, parent_id=1), make_comment(3, 1)]

    tree = build_comment_tree(comments)

    assert ids(tree) == [1, 2]
    assert ids(tree[0].replies) == [3]


def test_self_parent_is_root():
    tree = build_comment_tree([make_comment(1, parent_id=1)])
    assert ids(tree) == [1]
    assert tree[0].replies == []
