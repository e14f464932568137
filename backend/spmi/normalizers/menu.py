from typing import Any, Dict, List
from spmi.domain.menu import MenuNode, TreeEntry


def normalize_menu_node(node: MenuNode) -> Dict[str, Any]:
    return {
        "id": node.id,
        "title": node.title,
        "url": node.url,
        "page_id": node.page_id,
        "parent_id": node.parent_id,
        "order": node.order,
        "is_published": node.is_published,
    }


def normalize_menu_tree(entries: List[TreeEntry]) -> List[Dict[str, Any]]:
    return [
        {
            **normalize_menu_node(entry.node),
            "children": normalize_menu_tree(entry.children),
        }
        for entry in entries
    ]
