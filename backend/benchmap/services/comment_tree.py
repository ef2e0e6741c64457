"""Threaded comment views built from flat, parent-referencing rows.

Comments are stored as a flat list where a reply only holds its parent's
id. The tree is a read-time projection: index every comment, then classify
each one in a single pass as a root or as a reply of an indexed parent.
Nothing here walks parent links, so malformed input (duplicate ids, cycles)
cannot make it loop.
"""
from typing import Any, Dict, List, Mapping, Sequence

CommentDict = Dict[str, Any]


def build_comment_tree(comments: Sequence[Mapping[str, Any]]) -> List[CommentDict]:
    """Nest comments under their parents.

    Args:
        comments: Comments of one bench, oldest first. Each needs "id" and
            an optional "parent_id".

    Returns:
        Root comments in input order. Every node is a copy of its input
        with a "replies" list in attachment order. A comment whose parent
        is not among the inputs, or that names itself as parent, is a root.
    """
    nodes = [{**comment, "replies": []} for comment in comments]

    by_id: Dict[Any, CommentDict] = {}
    for node in nodes:
        by_id.setdefault(node["id"], node)

    roots: List[CommentDict] = []
    for node in nodes:
        parent_id = node.get("parent_id")
        parent = by_id.get(parent_id) if parent_id else None
        if parent is not None and parent is not node:
            parent["replies"].append(node)
        else:
            roots.append(node)
    return roots


def flatten_replies(node: Mapping[str, Any]) -> List[CommentDict]:
    """All descendants of a node as one list, depth-first in attachment order.

    Each descendant appears once even if the input linked comments in a cycle.
    """
    flat: List[CommentDict] = []
    seen = {id(node)}
    stack = list(reversed(node.get("replies", [])))
    while stack:
        child = stack.pop()
        if id(child) in seen:
            continue
        seen.add(id(child))
        flat.append(child)
        stack.extend(reversed(child.get("replies", [])))
    return flat


def count_replies(node: Mapping[str, Any]) -> int:
    """Number of descendants, shown as "Replies (N)"."""
    return len(flatten_replies(node))


def build_threads(comments: Sequence[Mapping[str, Any]]) -> List[CommentDict]:
    """Two-level display view: each root with a flat list of its descendants.

    Returns:
        One dict per root comment with "replies" (descendants without their
        own nesting) and "reply_count".
    """
    threads = []
    for root in build_comment_tree(comments):
        replies = [
            {key: value for key, value in reply.items() if key != "replies"}
            for reply in flatten_replies(root)
        ]
        thread = {key: value for key, value in root.items() if key != "replies"}
        thread["replies"] = replies
        thread["reply_count"] = len(replies)
        threads.append(thread)
    return threads
