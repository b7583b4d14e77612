"""Comment thread models.

A thread is read from the store as flat CommentRow records ordered by
breadcrumb and arranged into a CommentForest by the tree builder.

The forest is an arena: it owns every CommentNode in ``nodes`` and refers to
them by index. ``roots`` lists the top-level comments and each node lists
its children, both in row order.
"""

from collections.abc import Iterator
from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import CommentId, PostId, UserId


class CommentRow(DomainModel):
    """One flattened comment as returned by a subtree query.

    Attributes:
        path_length: Depth below the top-level ancestor of its subtree
        ancestor_id: Top-level ancestor of the edge being read
        descendant_id: The comment itself
        breadcrumb: Comma-joined ancestor ids from root to this comment,
            only used to order rows into a preorder traversal
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: str
    content: str
    likes: int
    created_at: datetime
    updated_at: datetime
    path_length: int = Field(ge=0)
    ancestor_id: CommentId
    descendant_id: CommentId
    breadcrumb: str


class CommentNode(DomainModel):
    """A comment placed in a forest.

    ``children`` holds arena indices, not nodes. The list is appended to
    while the forest is built and is not reassigned.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: str
    content: str
    likes: int
    created_at: datetime
    updated_at: datetime
    depth: int
    children: list[int] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: CommentRow) -> "CommentNode":
        return cls(
            id=row.id,
            post_id=row.post_id,
            author_id=row.author_id,
            author_name=row.author_name,
            content=row.content,
            likes=row.likes,
            created_at=row.created_at,
            updated_at=row.updated_at,
            depth=row.path_length,
        )


class CommentForest:
    """Arena of comment nodes with ordered root indices."""

    def __init__(self) -> None:
        self.nodes: list[CommentNode] = []
        self.roots: list[int] = []
        self._index_by_id: dict[CommentId, int] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self._index_by_id

    def add(self, node: CommentNode) -> int:
        """Store a node in the arena and return its index."""
        index = len(self.nodes)
        self.nodes.append(node)
        self._index_by_id[node.id] = index
        return index

    def attach(self, parent: int, child: int) -> None:
        self.nodes[parent].children.append(child)

    def get(self, comment_id: CommentId) -> CommentNode:
        """Return the node for a comment id.

        Raises:
            KeyError: If the comment is not in the forest
        """
        return self.nodes[self._index_by_id[comment_id]]

    def root_nodes(self) -> list[CommentNode]:
        return [self.nodes[i] for i in self.roots]

    def children_of(self, node: CommentNode) -> list[CommentNode]:
        return [self.nodes[i] for i in node.children]

    def walk(self) -> Iterator[CommentNode]:
        """Yield every node in preorder (root, then its subtree, then next root)."""
        pending = list(reversed(self.roots))
        while pending:
            node = self.nodes[pending.pop()]
            yield node
            pending.extend(reversed(node.children))
