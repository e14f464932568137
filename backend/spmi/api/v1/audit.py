from flask import request, jsonify
from flask_jwt_extended import jwt_required
from spmi.models.audit_log import AuditLog
from spmi.normalizers.audit import normalize_audit_log
from spmi.normalizers.pagination import normalize_pagination
from spmi.utils.decorators import roles_required
from spmi.utils.pagination import paginate_cursor
from . import v1_bp


@v1_bp.route("/audit-logs", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_audit_logs():
    limit = request.args.get("limit", 20, type=int)
    cursor = request.args.get("cursor")

    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(query, model=AuditLog, limit=limit, cursor=cursor)

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=meta)), 200
