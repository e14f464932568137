"""
In-memory navigation menu tree.

Nodes live in an arena keyed by id; a second index maps each parent id
(None for roots) to its ordered list of child ids. Every operation keeps
three invariants:

- every parent_id points at a node in the arena (or is None)
- no node is its own ancestor
- sibling orders are unique and ascending in the index

The tree does no I/O. The application layer loads rows into it, runs one
operation and writes the resulting nodes back in a single transaction.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .exceptions import CycleError, NotFoundError, ValidationError

MUTABLE_FIELDS = {"title", "url", "page_id", "parent_id", "is_published"}

DELETE_CASCADE = "cascade"
DELETE_REPARENT = "reparent"
DELETE_POLICIES = {DELETE_CASCADE, DELETE_REPARENT}


@dataclass
class MenuNode:
    id: str
    title: str
    url: Optional[str] = None
    page_id: Optional[str] = None
    parent_id: Optional[str] = None
    order: int = 0
    is_published: bool = True


@dataclass
class TreeEntry:
    node: MenuNode
    children: List["TreeEntry"] = field(default_factory=list)


def optional_str(value: Any, field_name: str) -> Optional[str]:
    """Accept a string or None; an empty string counts as unset."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Menu item {field_name} must be a string or null.")
    return value or None


def strict_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"Menu item {field_name} must be a boolean.")
    return value


def assert_menu_target(title: Any, url: Optional[str], page_id: Optional[str]) -> None:
    """
    A node needs a title and links to a url, a page, or nothing at all
    (grouping label). Never both.
    """
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Menu item title is required.")

    if url and page_id:
        raise ValidationError("A menu item links to either a url or a page, not both.")


class MenuTree:
    def __init__(self) -> None:
        self._nodes: Dict[str, MenuNode] = {}
        self._children: Dict[Optional[str], List[str]] = {}

    @classmethod
    def from_nodes(cls, nodes: Iterable[MenuNode]) -> "MenuTree":
        """
        Build a tree from persisted nodes.

        Raises ValidationError for a dangling parent_id and CycleError when
        the stored parent links loop. Duplicate sibling orders are kept and
        broken by id.
        """
        tree = cls()
        for node in nodes:
            tree._nodes[node.id] = node

        for node in tree._nodes.values():
            if node.parent_id is not None and node.parent_id not in tree._nodes:
                raise ValidationError(
                    f"Menu item {node.id} references missing parent {node.parent_id}."
                )

        for node in sorted(tree._nodes.values(), key=lambda n: (n.order, n.id)):
            tree._children.setdefault(node.parent_id, []).append(node.id)

        for node_id in tree._nodes:
            tree.ancestor_ids(node_id)

        return tree

    # ------------------------
    # Queries
    # ------------------------

    def get(self, node_id: str) -> MenuNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise NotFoundError(f"Menu item {node_id} not found.")
        return node

    def nodes(self) -> List[MenuNode]:
        return list(self._nodes.values())

    def children(self, parent_id: Optional[str] = None) -> List[MenuNode]:
        return [self._nodes[child_id] for child_id in self._children.get(parent_id, [])]

    def ancestor_ids(self, node_id: str) -> List[str]:
        """Parent first, root last."""
        ancestors: List[str] = []
        seen = {node_id}
        current = self.get(node_id).parent_id

        while current is not None:
            if current in seen:
                raise CycleError(f"Menu item {node_id} is part of a parent cycle.")
            seen.add(current)
            ancestors.append(current)
            current = self._nodes[current].parent_id

        return ancestors

    def descendant_ids(self, node_id: str) -> List[str]:
        """Depth-first, in display order."""
        result: List[str] = []
        for child_id in self._children.get(node_id, []):
            result.append(child_id)
            result.extend(self.descendant_ids(child_id))
        return result

    def list_tree(self, published_only: bool = False) -> List[TreeEntry]:
        """
        Return the forest with children ordered by `order`.

        With published_only an unpublished node hides its whole subtree.
        """
        return self._subtree(None, published_only)

    def _subtree(self, parent_id: Optional[str], published_only: bool) -> List[TreeEntry]:
        entries = []
        for child_id in self._children.get(parent_id, []):
            node = self._nodes[child_id]
            if published_only and not node.is_published:
                continue
            entries.append(TreeEntry(node=node, children=self._subtree(child_id, published_only)))
        return entries

    # ------------------------
    # Mutations
    # ------------------------

    def create(
        self,
        title: str,
        url: Optional[str] = None,
        page_id: Optional[str] = None,
        parent_id: Optional[str] = None,
        is_published: bool = True,
        node_id: Optional[str] = None,
    ) -> MenuNode:
        url = optional_str(url, "url")
        page_id = optional_str(page_id, "page_id")
        parent_id = optional_str(parent_id, "parent_id")
        is_published = strict_bool(is_published, "is_published")

        assert_menu_target(title, url, page_id)

        if parent_id is not None:
            self.get(parent_id)

        node = MenuNode(
            id=node_id or str(uuid.uuid4()),
            title=title,
            url=url,
            page_id=page_id,
            parent_id=parent_id,
            order=self._next_order(parent_id),
            is_published=is_published,
        )

        if node.id in self._nodes:
            raise ValidationError(f"Menu item {node.id} already exists.")

        self._nodes[node.id] = node
        self._children.setdefault(parent_id, []).append(node.id)
        return node

    def update(self, node_id: str, fields: Mapping[str, Any]) -> MenuNode:
        """
        Partial update. A changed parent_id moves the node with its subtree
        to the end of the new parent's children.
        """
        node = self.get(node_id)

        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown menu item fields: {', '.join(sorted(unknown))}")

        title = fields.get("title", node.title)
        url = optional_str(fields["url"], "url") if "url" in fields else node.url
        page_id = optional_str(fields["page_id"], "page_id") if "page_id" in fields else node.page_id
        is_published = (
            strict_bool(fields["is_published"], "is_published")
            if "is_published" in fields
            else node.is_published
        )

        assert_menu_target(title, url, page_id)

        if "parent_id" in fields:
            self.move(node_id, optional_str(fields["parent_id"], "parent_id"))

        node.title = title
        node.url = url
        node.page_id = page_id
        node.is_published = is_published

        return node

    def move(self, node_id: str, new_parent_id: Optional[str]) -> MenuNode:
        node = self.get(node_id)

        if new_parent_id is not None:
            self.get(new_parent_id)
            if new_parent_id == node_id or new_parent_id in self.descendant_ids(node_id):
                raise CycleError(
                    f"Menu item {new_parent_id} cannot become the parent of its ancestor {node_id}."
                )

        if new_parent_id == node.parent_id:
            return node

        old_parent_id = node.parent_id
        self._children[old_parent_id].remove(node_id)

        node.order = self._next_order(new_parent_id)
        node.parent_id = new_parent_id
        self._children.setdefault(new_parent_id, []).append(node_id)

        self._compact(old_parent_id)
        return node

    def delete(self, node_id: str, policy: str = DELETE_CASCADE) -> List[str]:
        """
        Remove a node and return the ids removed from the tree.

        cascade:  the node and all its descendants go.
        reparent: the node's children take its place under its parent.
        """
        if policy not in DELETE_POLICIES:
            raise ValidationError(f"Unknown delete policy: {policy}")

        node = self.get(node_id)
        siblings = self._children[node.parent_id]
        position = siblings.index(node_id)

        if policy == DELETE_CASCADE:
            removed = [node_id] + self.descendant_ids(node_id)
            siblings.remove(node_id)
        else:
            removed = [node_id]
            orphans = self._children.pop(node_id, [])
            for child_id in orphans:
                self._nodes[child_id].parent_id = node.parent_id
            siblings[position:position + 1] = orphans

        for removed_id in removed:
            del self._nodes[removed_id]
            self._children.pop(removed_id, None)

        self._compact(node.parent_id)
        return removed

    def reorder(self, sibling_ids: List[str]) -> List[MenuNode]:
        """Assign orders 0..n-1 following the position of each id in the list."""
        if not sibling_ids:
            raise ValidationError("Reorder requires at least one menu item id.")

        if not all(isinstance(node_id, str) for node_id in sibling_ids):
            raise ValidationError("Reorder ids must be strings.")

        if len(set(sibling_ids)) != len(sibling_ids):
            raise ValidationError("Reorder list contains duplicate menu item ids.")

        unknown = [node_id for node_id in sibling_ids if node_id not in self._nodes]
        if unknown:
            raise ValidationError(f"Reorder list contains unknown menu items: {', '.join(unknown)}")

        parents = {self._nodes[node_id].parent_id for node_id in sibling_ids}
        if len(parents) != 1:
            raise ValidationError("Reorder list mixes menu items from different parents.")

        parent_id = parents.pop()
        if set(self._children.get(parent_id, [])) != set(sibling_ids):
            raise ValidationError("Reorder list must name every sibling exactly once.")

        self._children[parent_id] = list(sibling_ids)
        self._compact(parent_id)
        return self.children(parent_id)

    def arrange(self, placements: List[Mapping[str, Any]]) -> List[MenuNode]:
        """
        Apply a drag-and-drop result: [{"id", "parent_id", "order"}, ...].

        Every touched sibling list is sorted by the submitted order (siblings
        not in the payload keep their current order and lose ties) and then
        compacted. The whole payload is checked before anything changes.
        """
        if not placements:
            raise ValidationError("Arrange requires at least one placement.")

        submitted: Dict[str, int] = {}
        proposed = {node_id: node.parent_id for node_id, node in self._nodes.items()}

        for placement in placements:
            node_id = placement.get("id")
            order = placement.get("order")
            if not isinstance(node_id, str):
                raise ValidationError("Each placement needs a string id.")
            parent_id = optional_str(placement.get("parent_id"), "parent_id")

            if node_id in submitted:
                raise ValidationError(f"Menu item {node_id} is placed more than once.")
            if not isinstance(order, int) or isinstance(order, bool):
                raise ValidationError(f"Placement order for {node_id} must be an integer.")

            self.get(node_id)
            if parent_id is not None:
                self.get(parent_id)

            submitted[node_id] = order
            proposed[node_id] = parent_id

        for node_id in submitted:
            seen = {node_id}
            current = proposed[node_id]
            while current is not None:
                if current in seen:
                    raise CycleError(f"Placing menu item {node_id} under {proposed[node_id]} creates a cycle.")
                seen.add(current)
                current = proposed[current]

        touched = set()
        for node_id in submitted:
            node = self._nodes[node_id]
            touched.add(node.parent_id)
            self._children[node.parent_id].remove(node_id)

            node.parent_id = proposed[node_id]
            touched.add(node.parent_id)
            self._children.setdefault(node.parent_id, []).append(node_id)

        for parent_id in touched:
            self._children[parent_id].sort(
                key=lambda child_id: (
                    submitted.get(child_id, self._nodes[child_id].order),
                    0 if child_id in submitted else 1,
                )
            )
            self._compact(parent_id)

        return [self._nodes[node_id] for node_id in submitted]

    # ------------------------
    # Helpers
    # ------------------------

    def _next_order(self, parent_id: Optional[str]) -> int:
        siblings = self._children.get(parent_id, [])
        if not siblings:
            return 0
        return max(self._nodes[child_id].order for child_id in siblings) + 1

    def _compact(self, parent_id: Optional[str]) -> None:
        for index, child_id in enumerate(self._children.get(parent_id, [])):
            self._nodes[child_id].order = index
