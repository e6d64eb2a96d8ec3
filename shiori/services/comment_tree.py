"""Nest flat comment listings into reply trees."""

from collections.abc import Sequence

from shiori.schemas.comment import CommentNode, CommentWithAuthor


def build_comment_tree(
    comments: Sequence[CommentWithAuthor],
    max_depth: int | None = None,
) -> list[CommentNode]:
    """Build root comments with their replies nested.

    ``comments`` should be in ascending creation order; roots and each
    replies list keep that order. A comment whose parent is not part of the
    input becomes a root rather than being dropped, as does any comment
    caught in a parent cycle.

    Depth is not limited by default. With ``max_depth`` set, a comment that
    would land deeper than ``max_depth`` levels is attached to its deepest
    ancestor that still has room, e.g. ``max_depth=2`` hoists replies to
    replies under their root.
    """
    nodes: dict[int, CommentNode] = {}
    for comment in comments:
        data = comment.model_dump(exclude={"replies"})
        nodes[comment.id] = CommentNode(**data, replies=[])

    parents = {comment.id: _resolve_parent(comment.id, nodes) for comment in comments}

    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent_id = parents[comment.id]
        if parent_id is None:
            roots.append(node)
            continue

        if max_depth is not None:
            parent_id = _limit_depth(parent_id, parents, max_depth)
            if parent_id is None:
                roots.append(node)
                continue

        nodes[parent_id].replies.append(node)

    return roots


def _resolve_parent(comment_id: int, nodes: dict[int, CommentNode]) -> int | None:
    """Parent id if it is known and does not lead back to the comment itself."""
    parent_id = nodes[comment_id].parent_id
    if parent_id is None or parent_id not in nodes:
        return None

    seen = {comment_id}
    current = parent_id
    while current is not None and current in nodes:
        if current in seen:
            return None if current == comment_id else parent_id
        seen.add(current)
        current = nodes[current].parent_id
    return parent_id


def _limit_depth(parent_id: int, parents: dict[int, int | None], max_depth: int) -> int | None:
    """Pick the ancestor to attach under so the child sits at most ``max_depth`` deep."""
    if max_depth <= 1:
        return None

    # chain[0] is the direct parent, chain[-1] its root
    chain = [parent_id]
    while parents[chain[-1]] is not None:
        chain.append(parents[chain[-1]])

    if len(chain) < max_depth:
        return parent_id
    return chain[len(chain) - max_depth + 1]
