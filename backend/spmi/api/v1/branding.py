from flask import request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from spmi.application.branding import get_brand_settings, update_brand_settings
from spmi.domain.exceptions import ValidationError
from spmi.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/branding", methods=["GET"])
def get_branding():
    return jsonify(get_brand_settings().to_dict())


@v1_bp.route("/branding", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def update_branding():
    data = request.get_json(silent=True) or {}

    if not isinstance(data, dict):
        raise ValidationError("Payload must be a JSON object")

    brand = update_brand_settings(
        actor_id=get_jwt_identity(),
        name=data.get("name"),
        logo_url=data.get("logo_url"),
    )

    return jsonify(brand.to_dict()), 200
