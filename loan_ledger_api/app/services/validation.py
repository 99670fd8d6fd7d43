"""
Turn pydantic validation errors into field -> reasons mappings.

The API reports rejected input as ``{"field": ["reason", ...]}`` with
readable sentences (``"The amount field is required."``) rather than
pydantic's raw error list.  ``validate_payload`` runs a schema against
a raw mapping and returns either the parsed model or that mapping.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError


M = TypeVar("M", bound=BaseModel)

FieldErrors = Dict[str, List[str]]

_NUMBER_ERRORS = {"float_type", "float_parsing", "finite_number", "decimal_type", "decimal_parsing"}
_INTEGER_ERRORS = {"int_type", "int_parsing", "int_from_float", "int_parsing_size"}


def field_label(field: str) -> str:
    return field.replace("_", " ")


def _bound(value: Any) -> Any:
    # pydantic reports bounds of float fields as floats (0.0); show 0.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def describe_error(field: str, error: Mapping[str, Any], reference_fields: Iterable[str] = ()) -> str:
    """Render one pydantic error entry as a sentence about ``field``."""
    label = field_label(field)
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f"The {label} field is required."
    if field in reference_fields:
        return f"The selected {label} is invalid."
    if kind in _NUMBER_ERRORS:
        return f"The {label} field must be a number."
    if kind in _INTEGER_ERRORS:
        return f"The {label} field must be an integer."
    if kind == "greater_than_equal":
        return f"The {label} field must be at least {_bound(ctx.get('ge'))}."
    if kind == "less_than_equal":
        return f"The {label} field must not be greater than {_bound(ctx.get('le'))}."
    if kind == "string_type":
        return f"The {label} field must be a string."
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"The {label} field is required."
        return f"The {label} field must be at least {ctx.get('min_length')} characters."
    if kind == "string_too_long":
        return f"The {label} field must not be greater than {ctx.get('max_length')} characters."
    if kind == "string_pattern_mismatch":
        return f"The {label} field must be a valid {label} address."
    return f"The {label} field is invalid."


def translate_errors(exc: ValidationError, reference_fields: Iterable[str] = ()) -> FieldErrors:
    """Group the errors of ``exc`` by top-level field name."""
    reference_fields = set(reference_fields)
    errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc") or ("payload",)
        field = str(loc[0])
        message = describe_error(field, error, reference_fields)
        reasons = errors.setdefault(field, [])
        if message not in reasons:
            reasons.append(message)
    return errors


def validate_payload(
    schema: Type[M],
    payload: Mapping[str, Any],
    reference_fields: Iterable[str] = (),
) -> Tuple[Optional[M], FieldErrors]:
    """Validate ``payload`` against ``schema``.

    Returns ``(model, {})`` on success and ``(None, errors)`` otherwise.
    Fields listed in ``reference_fields`` point at other records, so a
    malformed value there is reported as an invalid selection.
    """
    try:
        return schema.model_validate(dict(payload)), {}
    except ValidationError as exc:
        return None, translate_errors(exc, reference_fields)
