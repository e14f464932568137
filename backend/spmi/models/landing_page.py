from spmi.extensions import db
from .base import BaseModel


class LandingPage(BaseModel):
    __tablename__ = "landing_pages"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    published = db.Column(db.Boolean, nullable=False, default=False)
    global_styles = db.Column(db.JSON, default=dict)

    # Content document: {"rows": [...]}
    content = db.Column(db.JSON, nullable=True)
