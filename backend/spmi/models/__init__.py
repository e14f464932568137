from .audit_log import AuditLog
from .brand_setting import BrandSetting
from .home_section import HomeSection
from .landing_page import LandingPage
from .menu_item import MenuItem
from .page import Page

__all__ = [
    "AuditLog",
    "BrandSetting",
    "HomeSection",
    "LandingPage",
    "MenuItem",
    "Page",
]
