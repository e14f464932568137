from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Tuple

from pydantic import ValidationError as PydanticValidationError

from .elements import ELEMENT_KINDS, element_adapter

MIN_COLUMN_WIDTH = 1
MAX_COLUMN_WIDTH = 12

_EXPECTED_TYPES = {
    "missing": "required",
    "string_type": "string",
    "int_type": "integer",
    "bool_type": "boolean",
    "list_type": "array",
    "model_type": "object",
    "model_attributes_type": "object",
    "dict_type": "object",
}


@dataclass(frozen=True)
class SchemaViolation:
    path: str
    field: str
    expected_type: str
    actual_value: Any

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def empty_document() -> Dict[str, Any]:
    return {"rows": []}


def _join(*parts: Any) -> str:
    return ".".join(str(part) for part in parts if part != "")


def iter_columns(document: Any) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """
    Yield (path, column) for every column of the document.

    Order: rows as stored, each column followed by its nested columns as
    stored. Malformed parts are skipped; `validate` reports them.
    """
    if not isinstance(document, dict) or not isinstance(document.get("rows"), list):
        return

    for row_index, row in enumerate(document["rows"]):
        if not isinstance(row, dict) or not isinstance(row.get("columns"), list):
            continue

        for column_index, column in enumerate(row["columns"]):
            if not isinstance(column, dict):
                continue
            column_path = _join("rows", row_index, "columns", column_index)
            yield column_path, column

            nested_columns = column.get("columns")
            if not isinstance(nested_columns, list):
                continue
            for nested_index, nested in enumerate(nested_columns):
                if isinstance(nested, dict):
                    yield _join(column_path, "columns", nested_index), nested


def iter_elements(document: Any) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """Yield (path, element) in stored order: a column's direct elements come before its nested columns'."""
    for column_path, column in iter_columns(document):
        elements = column.get("elements")
        if not isinstance(elements, list):
            continue
        for element_index, element in enumerate(elements):
            if isinstance(element, dict):
                yield _join(column_path, "elements", element_index), element


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


def validate(document: Any) -> List[SchemaViolation]:
    """
    Walk the whole document and return every violation found.

    An empty list means the document can be persisted.
    """
    if not isinstance(document, dict):
        return [SchemaViolation("", "", "object", document)]

    rows = document.get("rows")
    if not isinstance(rows, list):
        return [SchemaViolation("", "rows", "array", rows)]

    violations: List[SchemaViolation] = []

    for row_index, row in enumerate(rows):
        row_path = _join("rows", row_index)

        if not isinstance(row, dict):
            violations.append(SchemaViolation(row_path, "", "object", row))
            continue

        columns = row.get("columns")
        if not isinstance(columns, list):
            violations.append(SchemaViolation(row_path, "columns", "array", columns))
            continue

        for column_index, column in enumerate(columns):
            _validate_column(column, _join(row_path, "columns", column_index), nested=False, violations=violations)

    return violations


def _validate_column(column: Any, path: str, *, nested: bool, violations: List[SchemaViolation]) -> None:
    if not isinstance(column, dict):
        violations.append(SchemaViolation(path, "", "object", column))
        return

    if "width" in column:
        width = column["width"]
        if (
            not isinstance(width, int)
            or isinstance(width, bool)
            or not MIN_COLUMN_WIDTH <= width <= MAX_COLUMN_WIDTH
        ):
            violations.append(
                SchemaViolation(path, "width", f"integer {MIN_COLUMN_WIDTH}-{MAX_COLUMN_WIDTH}", width)
            )

    if "elements" in column:
        elements = column["elements"]
        if not isinstance(elements, list):
            violations.append(SchemaViolation(path, "elements", "array", elements))
        else:
            for element_index, element in enumerate(elements):
                _validate_element(element, _join(path, "elements", element_index), violations)

    if "columns" in column:
        nested_columns = column["columns"]
        if nested:
            # Only one level of nested columns is supported.
            violations.append(SchemaViolation(path, "columns", "absent", nested_columns))
        elif not isinstance(nested_columns, list):
            violations.append(SchemaViolation(path, "columns", "array", nested_columns))
        else:
            for nested_index, nested_column in enumerate(nested_columns):
                _validate_column(nested_column, _join(path, "columns", nested_index), nested=True, violations=violations)


def _validate_element(element: Any, path: str, violations: List[SchemaViolation]) -> None:
    if not isinstance(element, dict):
        violations.append(SchemaViolation(path, "", "object", element))
        return

    kind = element.get("type")
    if kind not in ELEMENT_KINDS:
        violations.append(
            SchemaViolation(path, "type", f"one of {', '.join(ELEMENT_KINDS)}", kind)
        )
        return

    try:
        element_adapter.validate_python(element)
    except PydanticValidationError as exc:
        for error in exc.errors():
            loc = list(error["loc"])
            if loc and loc[0] == kind:
                loc = loc[1:]

            violations.append(
                SchemaViolation(
                    path,
                    _join(*loc),
                    _expected_type(error),
                    None if error["type"] == "missing" else error.get("input"),
                )
            )


def _expected_type(error: Dict[str, Any]) -> str:
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type == "greater_than_equal":
        return f"integer >= {ctx.get('ge')}"
    if error_type == "less_than_equal":
        return f"integer <= {ctx.get('le')}"
    if error_type == "literal_error":
        return f"one of {ctx.get('expected')}"

    return _EXPECTED_TYPES.get(error_type, error_type)
