"""Unit tests for comment forest reconstruction."""

import pytest

from agora.domain.error import (
    MalformedThreadError,
    NoCommentsForPostError,
    NotFoundError,
)
from agora.domain.service import CommentService, CommentTreeService, PostService
from agora.domain.service.comment_tree import build_forest
from agora.domain.value import CommentId, PostId, UserId
from tests.factories import make_row
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


def crumb(*ids: int) -> str:
    return ",".join(f"{i:019d}" for i in ids)


def shape(forest) -> list:
    """Render a forest as nested (id, [children]) tuples."""

    def render(node):
        return (node.id, [render(child) for child in forest.children_of(node)])

    return [render(root) for root in forest.root_nodes()]


class TestBuildForest:
    """Tests for build_forest."""

    def test_siblings_and_nesting(self):
        """A -> [B -> [C], D] is rebuilt from preorder rows."""
        # Arrange
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(2, 1, crumb(1, 2), ancestor_id=1),
            make_row(3, 2, crumb(1, 2, 3), ancestor_id=1),
            make_row(4, 1, crumb(1, 4), ancestor_id=1),
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        assert shape(forest) == [(1, [(2, [(3, [])]), (4, [])])]
        assert len(forest) == 4
        assert [node.depth for node in forest.walk()] == [0, 1, 2, 1]

    def test_multi_level_ascent(self):
        """A row two levels shallower than the previous one attaches correctly."""
        # Arrange: 1 -> 2 -> 3 -> 4, then 5 is a child of 1
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(2, 1, crumb(1, 2), ancestor_id=1),
            make_row(3, 2, crumb(1, 2, 3), ancestor_id=1),
            make_row(4, 3, crumb(1, 2, 3, 4), ancestor_id=1),
            make_row(5, 1, crumb(1, 5), ancestor_id=1),
            make_row(6, 2, crumb(1, 5, 6), ancestor_id=1),
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        assert shape(forest) == [
            (1, [(2, [(3, [(4, [])])]), (5, [(6, [])])]),
        ]

    def test_ascent_back_to_depth_one_after_deep_branch(self):
        """Three-level ascent lands on the right parent."""
        # Arrange
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(2, 1, crumb(1, 2), ancestor_id=1),
            make_row(3, 2, crumb(1, 2, 3), ancestor_id=1),
            make_row(4, 3, crumb(1, 2, 3, 4), ancestor_id=1),
            make_row(5, 4, crumb(1, 2, 3, 4, 5), ancestor_id=1),
            make_row(6, 2, crumb(1, 2, 6), ancestor_id=1),
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        node_two = forest.get(CommentId(2))
        assert [child.id for child in forest.children_of(node_two)] == [3, 6]

    def test_multiple_roots_keep_row_order(self):
        """Each depth-0 row starts a new root."""
        # Arrange
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(3, 1, crumb(1, 3), ancestor_id=1),
            make_row(2, 0, crumb(2)),
            make_row(4, 1, crumb(2, 4), ancestor_id=2),
            make_row(7, 0, crumb(7)),
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        assert shape(forest) == [(1, [(3, [])]), (2, [(4, [])]), (7, [])]

    def test_every_node_appears_once(self):
        """The forest holds exactly the input rows."""
        # Arrange
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(2, 1, crumb(1, 2), ancestor_id=1),
            make_row(3, 1, crumb(1, 3), ancestor_id=1),
            make_row(4, 0, crumb(4)),
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        assert sorted(node.id for node in forest.walk()) == [1, 2, 3, 4]
        assert CommentId(3) in forest
        assert CommentId(99) not in forest

    def test_empty_rows_raise_no_comments(self):
        """No rows means the post has no comments."""
        with pytest.raises(NoCommentsForPostError):
            build_forest([], PostId(1))

    def test_row_without_root_is_malformed(self):
        """A nested row before any top-level row is rejected."""
        with pytest.raises(MalformedThreadError):
            build_forest([make_row(2, 1, crumb(1, 2), ancestor_id=1)])

    def test_depth_jump_is_malformed(self):
        """Descending more than one level at a time is rejected."""
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(3, 2, crumb(1, 2, 3), ancestor_id=1),
        ]

        with pytest.raises(MalformedThreadError, match="jumps"):
            build_forest(rows)

    def test_duplicate_id_is_malformed(self):
        """A comment id appearing twice is rejected."""
        rows = [make_row(1, 0, crumb(1)), make_row(1, 0, crumb(1))]

        with pytest.raises(MalformedThreadError, match="more than once"):
            build_forest(rows)

    def test_children_of_resolves_arena_indices(self):
        """children_of returns the child nodes, not their indices."""
        # Arrange
        rows = [
            make_row(1, 0, crumb(1)),
            make_row(2, 1, crumb(1, 2), ancestor_id=1),
        ]

        # Act
        forest = build_forest(rows)
        [root] = forest.root_nodes()

        # Assert
        assert root.id == 1
        assert [child.id for child in forest.children_of(root)] == [2]
        assert forest.children_of(root)[0].depth == 1


class TestBuildForPost:
    """Tests for CommentTreeService.build_for_post."""

    @pytest.mark.asyncio
    async def test_builds_forest_from_stored_comments(self, unit_env):
        """Replies created through the service come back nested."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        tree_service = await unit_env.get(CommentTreeService)

        post = await post_service.create_post(UserId(1), "alice", "Title", "Body")
        a = await comment_service.create_comment(post.id, UserId(2), "bob", "A")
        b = await comment_service.create_comment(
            post.id, UserId(3), "carol", "B", parent_id=a.id
        )
        c = await comment_service.create_comment(
            post.id, UserId(2), "bob", "C", parent_id=b.id
        )
        d = await comment_service.create_comment(
            post.id, UserId(4), "dave", "D", parent_id=a.id
        )
        e = await comment_service.create_comment(post.id, UserId(5), "erin", "E")

        # Act
        forest = await tree_service.build_for_post(post.id)

        # Assert
        assert shape(forest) == [
            (a.id, [(b.id, [(c.id, [])]), (d.id, [])]),
            (e.id, []),
        ]
        assert forest.get(c.id).depth == 2
        assert forest.get(c.id).likes == 1

    @pytest.mark.asyncio
    async def test_ignores_comments_of_other_posts(self, unit_env):
        """Only the requested post's comments are returned."""
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        tree_service = await unit_env.get(CommentTreeService)

        first = await post_service.create_post(UserId(1), "alice", "First", "Body")
        second = await post_service.create_post(UserId(1), "alice", "Second", "Body")
        mine = await comment_service.create_comment(first.id, UserId(2), "bob", "Hi")
        await comment_service.create_comment(second.id, UserId(2), "bob", "Other")

        # Act
        forest = await tree_service.build_for_post(first.id)

        # Assert
        assert [node.id for node in forest.walk()] == [mine.id]

    @pytest.mark.asyncio
    async def test_post_without_comments_raises_no_comments(self, unit_env):
        """An existing post with no comments is reported distinctly."""
        # Arrange
        post_service = await unit_env.get(PostService)
        tree_service = await unit_env.get(CommentTreeService)
        post = await post_service.create_post(UserId(1), "alice", "Quiet", "Body")

        # Act & Assert
        with pytest.raises(NoCommentsForPostError):
            await tree_service.build_for_post(post.id)

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        """A missing post is not confused with an empty one."""
        tree_service = await unit_env.get(CommentTreeService)

        with pytest.raises(NotFoundError):
            await tree_service.build_for_post(PostId(404))
