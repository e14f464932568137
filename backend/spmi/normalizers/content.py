from typing import Any, Dict, List
from spmi.domain.content import SchemaViolation


def normalize_violations(violations: List[SchemaViolation]) -> List[Dict[str, Any]]:
    return [violation.to_dict() for violation in violations]


def normalize_document(owner: str, owner_id: str, document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "owner": owner,
        "owner_id": owner_id,
        "document": document,
    }
