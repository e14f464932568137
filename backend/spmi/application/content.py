from typing import Any, Dict, Iterable, List, Optional, Tuple
from flask import current_app
from spmi.application.content_store import CONTENT_STORES, get_store
from spmi.domain.content import migrate_gallery_column_count, validate
from spmi.domain.exceptions import ValidationError
from spmi.utils.audit import SYSTEM_ACTOR, log_action
from spmi.utils.transaction import transactional


def load_document(*, owner_id: str, owner: str = "pages") -> Dict[str, Any]:
    return get_store(owner).load(owner_id)


def replace_document(
    *,
    owner_id: str,
    document: Any,
    owner: str = "pages",
    actor_id: Optional[str] = SYSTEM_ACTOR,
) -> Dict[str, Any]:
    """
    Validate a whole content document, then store it in one commit.

    Nothing is written when any violation is found; the raised
    ValidationError carries all of them.
    """
    store = get_store(owner)

    violations = validate(document)
    if violations:
        raise ValidationError(
            f"Content document has {len(violations)} violation(s).",
            violations,
        )

    with transactional():
        store.save(owner_id, document)

        log_action(
            actor_id=actor_id,
            action="content.replace",
            entity_type=store.entity_type,
            entity_id=owner_id,
            payload={"rows": len(document["rows"])},
        )

    current_app.logger.info("Replaced content of %s %s", store.entity_type, owner_id)
    return document


def fix_gallery_columns(
    *,
    owners: Optional[Iterable[str]] = None,
    dry_run: bool = False,
    actor_id: Optional[str] = SYSTEM_ACTOR,
) -> List[Tuple[str, str]]:
    """
    Run the gallery column-count repair over every stored document.

    Returns (owner, owner_id) for each document that needed a change.
    Safe to re-run: repaired documents are reported once.
    """
    selected = list(owners) if owners else list(CONTENT_STORES)
    fixed: List[Tuple[str, str]] = []

    with transactional():
        for owner in selected:
            store = get_store(owner)

            for owner_id, document in store.iter_documents():
                if document is None:
                    continue

                migrated, changed = migrate_gallery_column_count(document)
                if not changed:
                    continue

                fixed.append((owner, owner_id))
                if not dry_run:
                    store.save(owner_id, migrated)

        if fixed and not dry_run:
            log_action(
                actor_id=actor_id,
                action="content.fix_gallery_columns",
                entity_type="content",
                entity_id=None,
                payload={"fixed": [f"{owner}:{owner_id}" for owner, owner_id in fixed]},
            )

    current_app.logger.info(
        "Gallery column repair %s %d document(s)", "found" if dry_run else "fixed", len(fixed)
    )
    return fixed
