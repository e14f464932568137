from spmi.extensions import db
from .base import BaseModel


class BrandSetting(BaseModel):
    __tablename__ = "brand_settings"

    name = db.Column(db.String(255), nullable=False)
    logo_url = db.Column(db.String(2048), nullable=True)

    def to_dict(self):
        return {
            "name": self.name,
            "logo_url": self.logo_url,
        }
