import copy
from typing import Any, Dict, Iterator, Optional, Tuple
from spmi.extensions import db
from spmi.models.home_section import HomeSection
from spmi.models.landing_page import LandingPage
from spmi.models.page import Page
from spmi.domain.content import empty_document
from spmi.domain.exceptions import NotFoundError


class ContentStore:
    """
    Load/save boundary for content documents stored in one JSON column.

    Documents are copied on the way in and out so callers never mutate
    the ORM-tracked value in place.
    """

    def __init__(self, model, entity_type: str, field: str = "content"):
        self.model = model
        self.entity_type = entity_type
        self.field = field

    def _get_owner(self, owner_id: str):
        owner = db.session.get(self.model, owner_id)
        if owner is None:
            raise NotFoundError(f"{self.entity_type} {owner_id} not found.")
        return owner

    def load(self, owner_id: str) -> Dict[str, Any]:
        document = getattr(self._get_owner(owner_id), self.field)
        if document is None:
            return empty_document()
        return copy.deepcopy(document)

    def save(self, owner_id: str, document: Dict[str, Any]) -> None:
        owner = self._get_owner(owner_id)
        setattr(owner, self.field, copy.deepcopy(document))
        db.session.flush()

    def iter_documents(self) -> Iterator[Tuple[str, Optional[Dict[str, Any]]]]:
        owners = self.model.query.order_by(self.model.created_at.asc(), self.model.id.asc()).all()
        for owner in owners:
            yield owner.id, copy.deepcopy(getattr(owner, self.field))


CONTENT_STORES: Dict[str, ContentStore] = {
    "pages": ContentStore(Page, "page"),
    "landing-pages": ContentStore(LandingPage, "landing_page"),
    "home-sections": ContentStore(HomeSection, "home_section"),
}


def get_store(owner: str) -> ContentStore:
    store = CONTENT_STORES.get(owner)
    if store is None:
        raise NotFoundError(f"Unknown content owner: {owner}")
    return store
