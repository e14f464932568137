"""
Repairs for content documents written by older builder versions.

Each repair returns a fresh document plus a `changed` flag and never raises
on data that is already correct, so it can be re-run over a stored corpus.
"""
import copy
import re
from typing import Any, Tuple

from .document import iter_elements

GALLERY_COLUMN_FIELD = "galleryColumns"

_INTEGER_STRING = re.compile(r"\s*([+-]?[0-9]+)(?:\.0*)?\s*")


def migrate_gallery_column_count(document: Any) -> Tuple[Any, bool]:
    """
    Coerce numeric-string `galleryColumns` on gallery elements to int.

    Only that field of gallery elements is touched. Whole-number decimals
    such as "3.0" count as integers; any other string is left alone for
    `validate` to report.
    """
    migrated = copy.deepcopy(document)
    changed = False

    for _path, element in iter_elements(migrated):
        if element.get("type") != "gallery":
            continue

        value = element.get(GALLERY_COLUMN_FIELD)
        match = _INTEGER_STRING.fullmatch(value) if isinstance(value, str) else None
        if match:
            element[GALLERY_COLUMN_FIELD] = int(match.group(1))
            changed = True

    return migrated, changed
