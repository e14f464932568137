from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from flask import current_app
from spmi.extensions import db
from spmi.models.menu_item import MenuItem
from spmi.models.page import Page
from spmi.domain.exceptions import NotFoundError, ValidationError
from spmi.domain.menu import DELETE_CASCADE, MenuNode, MenuTree, TreeEntry, optional_str
from spmi.utils.audit import log_action
from spmi.utils.transaction import transactional


def _to_node(item: MenuItem) -> MenuNode:
    return MenuNode(
        id=item.id,
        title=item.title,
        url=item.url,
        page_id=item.page_id,
        parent_id=item.parent_id,
        order=item.order,
        is_published=item.is_published,
    )


def load_menu_tree() -> Tuple[MenuTree, Dict[str, MenuItem]]:
    items = MenuItem.query.all()
    tree = MenuTree.from_nodes(_to_node(item) for item in items)
    return tree, {item.id: item for item in items}


def _persist(tree: MenuTree, items: Dict[str, MenuItem], removed_ids: Iterable[str] = ()) -> None:
    """Write the tree back onto its rows. Unchanged columns emit no UPDATE."""
    for node in tree.nodes():
        item = items.get(node.id)
        if item is None:
            item = MenuItem()
            item.id = node.id
            db.session.add(item)

        item.title = node.title
        item.url = node.url
        item.page_id = node.page_id
        item.parent_id = node.parent_id
        item.order = node.order
        item.is_published = node.is_published

    for removed_id in removed_ids:
        db.session.delete(items[removed_id])

    db.session.flush()


def _assert_page_exists(page_id: Any) -> None:
    page_id = optional_str(page_id, "page_id")
    if page_id and db.session.get(Page, page_id) is None:
        raise NotFoundError(f"Page {page_id} not found.")


def list_menu_tree(*, published_only: bool = False) -> List[TreeEntry]:
    tree, _items = load_menu_tree()
    return tree.list_tree(published_only=published_only)


def create_menu_item(*, actor_id: Optional[str], data: Mapping[str, Any]) -> MenuNode:
    """
    Append a new node at the end of its parent's children.

    Edge cases handled:
    - Blank title, or both url and page set
    - Unknown parent or page
    """
    _assert_page_exists(data.get("page_id"))

    with transactional():
        tree, items = load_menu_tree()
        node = tree.create(
            title=data.get("title"),
            url=data.get("url"),
            page_id=data.get("page_id"),
            parent_id=data.get("parent_id"),
            is_published=data.get("is_published", True),
        )
        _persist(tree, items)

        log_action(
            actor_id=actor_id,
            action="menu_item.create",
            entity_type="menu_item",
            entity_id=node.id,
            payload={
                "title": node.title,
                "parent_id": node.parent_id,
                "order": node.order,
            },
        )

    current_app.logger.info("Created menu item %s under %s", node.id, node.parent_id or "root")
    return node


def update_menu_item(*, actor_id: Optional[str], item_id: str, data: Mapping[str, Any]) -> MenuNode:
    """
    Partial update; a new parent_id moves the whole subtree.

    Design rules:
    - No silent no-op updates
    - Reparenting under a descendant raises CycleError
    """
    if not data:
        raise ValidationError("No valid fields provided for update")

    if "page_id" in data:
        _assert_page_exists(data["page_id"])

    with transactional():
        tree, items = load_menu_tree()
        node = tree.update(item_id, data)
        _persist(tree, items)

        log_action(
            actor_id=actor_id,
            action="menu_item.update",
            entity_type="menu_item",
            entity_id=node.id,
            payload={"fields": sorted(data)},
        )

    current_app.logger.info("Updated menu item %s (%s)", node.id, ", ".join(sorted(data)))
    return node


def delete_menu_item(*, actor_id: Optional[str], item_id: str, policy: str = DELETE_CASCADE) -> List[str]:
    with transactional():
        tree, items = load_menu_tree()
        removed_ids = tree.delete(item_id, policy=policy)
        _persist(tree, items, removed_ids)

        log_action(
            actor_id=actor_id,
            action="menu_item.delete",
            entity_type="menu_item",
            entity_id=item_id,
            payload={"policy": policy, "removed": removed_ids},
        )

    current_app.logger.info("Deleted menu item %s (%s, %d removed)", item_id, policy, len(removed_ids))
    return removed_ids


def reorder_menu_items(*, actor_id: Optional[str], ids: List[str]) -> List[MenuNode]:
    with transactional():
        tree, items = load_menu_tree()
        siblings = tree.reorder(ids)
        _persist(tree, items)

        log_action(
            actor_id=actor_id,
            action="menu_item.reorder",
            entity_type="menu_item",
            entity_id=siblings[0].parent_id,
            payload={"ids": list(ids)},
        )

    current_app.logger.info("Reordered %d menu item(s) under %s", len(siblings), siblings[0].parent_id or "root")
    return siblings


def arrange_menu_items(*, actor_id: Optional[str], placements: List[Mapping[str, Any]]) -> List[MenuNode]:
    with transactional():
        tree, items = load_menu_tree()
        placed = tree.arrange(placements)
        _persist(tree, items)

        log_action(
            actor_id=actor_id,
            action="menu_item.arrange",
            entity_type="menu_item",
            entity_id=None,
            payload={"count": len(placed)},
        )

    current_app.logger.info("Arranged %d menu item(s)", len(placed))
    return placed
