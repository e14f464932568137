from typing import Optional
from flask import current_app
from spmi.extensions import db
from spmi.models.brand_setting import BrandSetting
from spmi.domain.exceptions import ValidationError
from spmi.utils.audit import log_action
from spmi.utils.transaction import transactional


def get_brand_settings() -> BrandSetting:
    """
    First-or-create: the single settings row is created lazily on first
    read with the configured default name.
    """
    brand = BrandSetting.query.order_by(BrandSetting.created_at.asc()).first()
    if brand is not None:
        return brand

    with transactional():
        brand = BrandSetting()
        brand.name = current_app.config["DEFAULT_BRAND_NAME"]
        db.session.add(brand)

    current_app.logger.info("Initialised brand settings with default name %r", brand.name)
    return brand


def update_brand_settings(*, actor_id: Optional[str], name: str, logo_url: Optional[str]) -> BrandSetting:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Brand name is required.")

    if logo_url is not None and not isinstance(logo_url, str):
        raise ValidationError("Brand logo_url must be a string or null.")

    brand = get_brand_settings()

    with transactional():
        brand.name = name
        brand.logo_url = logo_url or None

        log_action(
            actor_id=actor_id,
            action="branding.update",
            entity_type="brand_setting",
            entity_id=brand.id,
            payload={"name": name},
        )

    current_app.logger.info("Updated brand settings %s", brand.id)
    return brand
