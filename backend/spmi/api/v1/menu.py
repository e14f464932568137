# spmi/api/v1/menu.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from spmi.application import menu as menu_service
from spmi.domain.exceptions import ValidationError
from spmi.domain.menu import DELETE_CASCADE
from spmi.normalizers.menu import normalize_menu_node, normalize_menu_tree
from spmi.utils.decorators import roles_required
from . import v1_bp


# ------------------------
# Public navigation
# ------------------------

@v1_bp.route("/menu", methods=["GET"])
def public_menu():
    tree = menu_service.list_menu_tree(published_only=True)
    return jsonify(normalize_menu_tree(tree))


# ------------------------
# Management
# ------------------------

@v1_bp.route("/menu-items", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_menu_items():
    tree = menu_service.list_menu_tree(published_only=False)
    return jsonify(normalize_menu_tree(tree))


@v1_bp.route("/menu-items", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_menu_item():
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict):
        raise ValidationError("Payload must be a JSON object")

    node = menu_service.create_menu_item(actor_id=get_jwt_identity(), data=data)

    return jsonify(normalize_menu_node(node)), 201


@v1_bp.route("/menu-items/<item_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def update_menu_item(item_id):
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict):
        raise ValidationError("Payload must be a JSON object")

    node = menu_service.update_menu_item(actor_id=get_jwt_identity(), item_id=item_id, data=data)

    return jsonify(normalize_menu_node(node)), 200


@v1_bp.route("/menu-items/<item_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_menu_item(item_id):
    policy = request.args.get("policy", DELETE_CASCADE)

    removed = menu_service.delete_menu_item(actor_id=get_jwt_identity(), item_id=item_id, policy=policy)

    return jsonify({"message": "Menu item deleted successfully", "removed": removed}), 200


@v1_bp.route("/menu-items/reorder", methods=["POST"])
@jwt_required()
@roles_required("admin")
def reorder_menu_items():
    data = request.get_json(silent=True) or {}
    ids = data.get("ids")

    if not isinstance(ids, list) or not all(isinstance(item_id, str) for item_id in ids):
        raise ValidationError("Payload must be {\"ids\": [<menu item id>, ...]}")

    siblings = menu_service.reorder_menu_items(actor_id=get_jwt_identity(), ids=ids)

    return jsonify([normalize_menu_node(node) for node in siblings]), 200


@v1_bp.route("/menu-items/arrange", methods=["POST"])
@jwt_required()
@roles_required("admin")
def arrange_menu_items():
    data = request.get_json(silent=True) or {}
    items = data.get("items")

    if not isinstance(items, list) or not all(
        isinstance(item, dict) and isinstance(item.get("id"), str) for item in items
    ):
        raise ValidationError("Payload must be {\"items\": [{\"id\", \"parent_id\", \"order\"}, ...]}")

    menu_service.arrange_menu_items(actor_id=get_jwt_identity(), placements=items)
    tree = menu_service.list_menu_tree(published_only=False)

    return jsonify(normalize_menu_tree(tree)), 200
