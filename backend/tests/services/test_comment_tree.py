"""Tests for the comment tree builder."""
from benchmap.services.comment_tree import (
    build_comment_tree,
    build_threads,
    count_replies,
    flatten_replies,
)


def comment(id, parent_id=None, **extra):
    return {"id": id, "parent_id": parent_id, "body": f"comment {id}", **extra}


class TestBuildCommentTree:
    """Test nesting of flat comments."""

    def test_nested_reply_chain(self):
        roots = build_comment_tree([comment("A"), comment("B", "A"), comment("C", "B")])

        assert [r["id"] for r in roots] == ["A"]
        assert [r["id"] for r in roots[0]["replies"]] == ["B"]
        assert [r["id"] for r in roots[0]["replies"][0]["replies"]] == ["C"]

    def test_missing_parent_becomes_root(self):
        roots = build_comment_tree([comment("A"), comment("B", "gone")])

        assert [r["id"] for r in roots] == ["A", "B"]
        assert roots[1]["parent_id"] == "gone"

    def test_roots_and_replies_keep_input_order(self):
        roots = build_comment_tree([
            comment("A"),
            comment("B"),
            comment("A1", "A"),
            comment("B1", "B"),
            comment("A2", "A"),
        ])

        assert [r["id"] for r in roots] == ["A", "B"]
        assert [r["id"] for r in roots[0]["replies"]] == ["A1", "A2"]
        assert [r["id"] for r in roots[1]["replies"]] == ["B1"]

    def test_reply_listed_before_its_parent_still_attaches(self):
        roots = build_comment_tree([comment("B", "A"), comment("A")])

        assert [r["id"] for r in roots] == ["A"]
        assert [r["id"] for r in roots[0]["replies"]] == ["B"]

    def test_input_is_not_mutated(self):
        flat = [comment("A"), comment("B", "A")]
        build_comment_tree(flat)

        assert "replies" not in flat[0]

    def test_self_parent_is_root(self):
        roots = build_comment_tree([comment("A", "A")])
        assert [r["id"] for r in roots] == ["A"]
        assert roots[0]["replies"] == []

    def test_cycle_terminates(self):
        roots = build_comment_tree([comment("R"), comment("A", "B"), comment("B", "A")])
        assert [r["id"] for r in roots] == ["R"]

    def test_empty(self):
        assert build_comment_tree([]) == []


class TestFlattenReplies:
    """Test flattening descendants for display."""

    def test_depth_first_order(self):
        roots = build_comment_tree([
            comment("A"),
            comment("B", "A"),
            comment("D", "A"),
            comment("C", "B"),
        ])

        assert [r["id"] for r in flatten_replies(roots[0])] == ["B", "C", "D"]
        assert count_replies(roots[0]) == 3

    def test_chain_counts_all_descendants(self):
        roots = build_comment_tree([comment("A"), comment("B", "A"), comment("C", "B")])

        assert [r["id"] for r in flatten_replies(roots[0])] == ["B", "C"]
        assert count_replies(roots[0]) == 2

    def test_no_replies(self):
        roots = build_comment_tree([comment("A")])
        assert flatten_replies(roots[0]) == []
        assert count_replies(roots[0]) == 0

    def test_cyclic_nodes_visited_once(self):
        a = {"id": "A", "replies": []}
        b = {"id": "B", "replies": [a]}
        a["replies"].append(b)

        assert [r["id"] for r in flatten_replies(a)] == ["B"]


def test_build_threads_flattens_under_each_root():
    threads = build_threads([
        comment("A"),
        comment("B", "A"),
        comment("C", "B"),
        comment("X"),
        comment("Y", "missing"),
    ])

    assert [t["id"] for t in threads] == ["A", "X", "Y"]
    assert [r["id"] for r in threads[0]["replies"]] == ["B", "C"]
    assert threads[0]["reply_count"] == 2
    assert all("replies" not in r for r in threads[0]["replies"])
    assert threads[1]["reply_count"] == 0
