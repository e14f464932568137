# spmi/api/v1/content.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from spmi.application import content as content_service
from spmi.domain.content import validate
from spmi.normalizers.content import normalize_document, normalize_violations
from spmi.utils.decorators import roles_required
from . import v1_bp

# owner in: pages | landing-pages | home-sections


@v1_bp.route("/<owner>/<owner_id>/content", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_content(owner, owner_id):
    document = content_service.load_document(owner=owner, owner_id=owner_id)
    return jsonify(normalize_document(owner, owner_id, document))


@v1_bp.route("/<owner>/<owner_id>/content", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def replace_content(owner, owner_id):
    document = request.get_json(silent=True)

    content_service.replace_document(
        owner=owner,
        owner_id=owner_id,
        document=document,
        actor_id=get_jwt_identity(),
    )

    return jsonify(normalize_document(owner, owner_id, document)), 200


@v1_bp.route("/content/validate", methods=["POST"])
@jwt_required()
@roles_required("admin")
def validate_content():
    violations = validate(request.get_json(silent=True))

    return jsonify({
        "valid": not violations,
        "violations": normalize_violations(violations),
    }), 200
