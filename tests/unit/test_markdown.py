"""Tests for markdown rendering of entity trees."""

from threads_mcp.core.client import ThreadsClient
from threads_mcp.core.tree.markdown import render_tree_as_markdown


def test_render_full_tree(populated_client: ThreadsClient) -> None:
    md = render_tree_as_markdown(populated_client.get_full_tree())
    lines = md.splitlines()

    assert lines[0] == "- **Project**"
    assert lines[1] == "  > Main project"
    assert lines[2] == "    - **Sub**"
    assert lines[3].startswith("        - [ ] Task2 (paused, cold, i4)")
    assert "- [x] Legacy thread (completed, frozen, i1)" in md


def test_render_with_depth_limit_shows_truncation(populated_client: ThreadsClient) -> None:
    md = render_tree_as_markdown(populated_client.get_full_tree(), max_depth=1)

    assert "**Sub**" in md
    assert "Task1" in md
    # Task2 sits two levels below Project.
    assert "Task2" not in md
    assert "... (1 more child, id=c-sub)" in md


def test_render_no_truncation_for_leaves(populated_client: ThreadsClient) -> None:
    md = render_tree_as_markdown(populated_client.get_full_tree(), max_depth=0)

    assert "... (2 more children, id=c-project)" in md
    assert "id=t-solo" not in md


def test_render_without_descriptions(populated_client: ThreadsClient) -> None:
    md = render_tree_as_markdown(populated_client.get_full_tree(), include_descriptions=False)
    assert ">" not in md


def test_render_empty_forest() -> None:
    assert render_tree_as_markdown([]) == ""
