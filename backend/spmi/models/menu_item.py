from spmi.extensions import db
from .base import BaseModel


class MenuItem(BaseModel):
    __tablename__ = "menu_items"

    title = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(255), nullable=True)
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True)
    # Tree integrity is enforced by MenuTree, not by the database.
    parent_id = db.Column(db.String(36), nullable=True, index=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    is_published = db.Column(db.Boolean, nullable=False, default=True)

    page = db.relationship("Page")

    __table_args__ = (
        db.Index("idx_menu_item_parent_order", "parent_id", "order"),
    )
