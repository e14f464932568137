from spmi.extensions import db
from .base import BaseModel


class HomeSection(BaseModel):
    __tablename__ = "home_sections"

    order = db.Column(db.Integer, nullable=False, default=0)
    layout_type = db.Column(db.String(50), nullable=False, default="full-width")  # full-width, 2-equal, 3-equal, ...
    section_type = db.Column(db.String(20), nullable=False, default="plain")  # plain, card
    background_color = db.Column(db.String(50), nullable=True)
    background_config = db.Column(db.JSON, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Content document: {"rows": [...]}
    content = db.Column(db.JSON, nullable=True)
