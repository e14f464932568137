from spmi.extensions import db
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    layout_type = db.Column(db.String(50), nullable=False, default="default")
    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    order = db.Column(db.Integer, nullable=False, default=0)

    # Content document: {"rows": [...]}
    content = db.Column(db.JSON, nullable=True)
