from .document import SchemaViolation, empty_document, iter_columns, iter_elements, validate
from .elements import ELEMENT_KINDS
from .migrations import migrate_gallery_column_count

__all__ = [
    "ELEMENT_KINDS",
    "SchemaViolation",
    "empty_document",
    "iter_columns",
    "iter_elements",
    "migrate_gallery_column_count",
    "validate",
]
