"""
LabRecords Backend — Declarative Field Rules
=============================================

What:  Per-resource validation expressed as data: a tuple of FieldRule
       entries evaluated against every incoming write.
Why:   Request bodies arrive as plain JSON objects. Evaluating them against
       an explicit rule table (instead of letting the framework reject them
       with its own 422 format) lets every violation be collected and
       reported in the 400 envelope as one human-readable message per field.
How:   validate_payload() casts each known field to its kind, normalizes it
       (trim / lowercase), fills defaults on create, then checks required,
       length, range, pattern and choice rules in table order.

Create vs. update:
    create (partial=False): every rule applies; absent optional fields get
                            their default.
    update (partial=True):  only fields present in the body are checked;
                            sending a required field as null or "" is a
                            violation, omitting it is not.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Pattern, Sequence, Tuple

from pydantic import ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError

# Sentinel for "key not in payload" / "value rejected"; None is a real value
_MISSING = object()


class _CastError(Exception):
    pass


@dataclass(frozen=True)
class FieldRule:
    """
    One field of a resource's write contract.

    `name` is the wire (JSON) name, `attribute` the ORM attribute it maps to.
    Each constraint has a matching message; messages may use `{value}`.
    """

    name: str
    kind: str = "string"  # string | integer | boolean | datetime
    attribute: Optional[str] = None
    required: bool = False
    required_message: Optional[str] = None
    default: Any = None
    trim: bool = False
    lowercase: bool = False
    max_length: Optional[int] = None
    max_length_message: Optional[str] = None
    minimum: Optional[int] = None
    minimum_message: Optional[str] = None
    maximum: Optional[int] = None
    maximum_message: Optional[str] = None
    pattern: Optional[Pattern[str]] = None
    pattern_message: Optional[str] = None
    choices: Optional[Tuple[str, ...]] = None
    choices_message: Optional[str] = None
    type_message: Optional[str] = None

    @property
    def target(self) -> str:
        return self.attribute or self.name

    def default_value(self) -> Any:
        return self.default() if callable(self.default) else self.default


# ── Casting ───────────────────────────────────────────────────────────────
# pydantic's lax mode does the coercion: numeric strings to int, "true"/"false"
# to bool, ISO-8601 (date-only and `Z` allowed) to datetime, numbers to text.

_ADAPTERS: Dict[str, TypeAdapter] = {
    "string": TypeAdapter(str, config=ConfigDict(coerce_numbers_to_str=True)),
    "integer": TypeAdapter(int),
    "boolean": TypeAdapter(bool),
    "datetime": TypeAdapter(datetime),
}


def _cast(kind: str, value: Any) -> Any:
    # Only boolean fields accept JSON true/false
    if isinstance(value, bool) and kind != "boolean":
        raise _CastError
    try:
        result = _ADAPTERS[kind].validate_python(value)
    except PydanticValidationError:
        raise _CastError

    if kind == "datetime":
        if result.tzinfo is None:
            result = result.replace(tzinfo=timezone.utc)
        try:
            result = result.astimezone(timezone.utc)
        except OverflowError:
            # e.g. 0001-01-01T00:00:00+01:00 has no UTC equivalent
            raise _CastError
    return result


_TYPE_NAMES = {
    "string": "un texto",
    "integer": "un número entero",
    "boolean": "un valor booleano",
    "datetime": "una fecha válida",
}


def _type_message(rule: FieldRule, value: Any) -> str:
    if rule.type_message:
        return rule.type_message.format(value=value)
    return f"El campo '{rule.name}' debe ser {_TYPE_NAMES[rule.kind]}"


def _required_message(rule: FieldRule) -> str:
    return rule.required_message or f"El campo '{rule.name}' es obligatorio"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


# ── Evaluation ────────────────────────────────────────────────────────────

def _check_field(rule: FieldRule, raw: Any, errors: List[str]) -> Any:
    """Cast, normalize and check one supplied value; returns _MISSING on failure."""
    try:
        value = _cast(rule.kind, raw)
    except _CastError:
        errors.append(_type_message(rule, raw))
        return _MISSING

    if isinstance(value, str):
        if rule.trim:
            value = value.strip()
        if rule.lowercase:
            value = value.lower()
        if rule.required and value == "":
            errors.append(_required_message(rule))
            return _MISSING

    failed = False
    if rule.max_length is not None and len(value) > rule.max_length:
        errors.append(
            (rule.max_length_message or "El campo '{name}' supera {max} caracteres").format(
                name=rule.name, max=rule.max_length, value=value
            )
        )
        failed = True
    if rule.minimum is not None and value < rule.minimum:
        errors.append(
            (rule.minimum_message or "El campo '{name}' debe ser al menos {min}").format(
                name=rule.name, min=rule.minimum, value=value
            )
        )
        failed = True
    if rule.maximum is not None and value > rule.maximum:
        errors.append(
            (rule.maximum_message or "El campo '{name}' no puede ser mayor a {max}").format(
                name=rule.name, max=rule.maximum, value=value
            )
        )
        failed = True
    if rule.pattern is not None and value != "" and not rule.pattern.match(value):
        errors.append(
            (rule.pattern_message or "El campo '{name}' no tiene un formato válido").format(
                name=rule.name, value=value
            )
        )
        failed = True
    if rule.choices is not None and value not in rule.choices:
        errors.append(
            (rule.choices_message or "'{value}' no es un valor válido para '{name}'").format(
                name=rule.name, value=value, choices=", ".join(rule.choices)
            )
        )
        failed = True

    return _MISSING if failed else value


def validate_payload(
    rules: Sequence[FieldRule],
    payload: Dict[str, Any],
    partial: bool = False,
) -> Dict[str, Any]:
    """
    Validate a request body against a rule table.

    Args:
        rules:   The resource's FieldRule tuple (evaluation order = message order)
        payload: Decoded JSON object from the request
        partial: True for updates (only supplied fields are checked)

    Returns:
        Mapping of ORM attribute name → cleaned value, ready to assign.
        Unknown keys and system-managed keys are dropped.

    Raises:
        ValidationError: with one message per violated rule
    """
    if not isinstance(payload, dict):
        raise ValidationError(details=["El cuerpo de la petición debe ser un objeto JSON"])

    errors: List[str] = []
    cleaned: Dict[str, Any] = {}

    for rule in rules:
        raw = payload.get(rule.name, _MISSING)

        if raw is _MISSING:
            if partial:
                continue
            if rule.required:
                errors.append(_required_message(rule))
                continue
            default = rule.default_value()
            if default is not None:
                cleaned[rule.target] = default
            continue

        if _is_blank(raw):
            if rule.required:
                errors.append(_required_message(rule))
                continue
            # Explicit null (or "" on a non-text field) clears an optional
            # field back to its default
            if raw is None or rule.kind != "string":
                cleaned[rule.target] = rule.default_value()
                continue

        value = _check_field(rule, raw, errors)
        if value is not _MISSING:
            cleaned[rule.target] = value

    if errors:
        raise ValidationError(details=errors)
    return cleaned
