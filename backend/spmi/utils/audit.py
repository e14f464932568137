from typing import Optional
from spmi.extensions import db
from spmi.models.audit_log import AuditLog

SYSTEM_ACTOR = "system"


def log_action(
    *,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """Stage an audit row in the current session; the caller's transaction commits it."""
    log = AuditLog()

    log.actor_id = actor_id or SYSTEM_ACTOR
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
