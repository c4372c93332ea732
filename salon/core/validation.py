"""
Explicit validation results, independent of the storage layer.

Request schemas reject malformed bodies; these helpers turn those rejections
(and hand-written checks such as the login payload check) into one typed
result that the error handlers render as a 400 response.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence


@dataclass(frozen=True)
class FieldError:
    """A single problem with one input field."""
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of validating one payload: valid, or a list of field errors."""
    errors: List[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))

    def to_list(self) -> List[Dict[str, str]]:
        return [error.to_dict() for error in self.errors]


def validate_required(data: Mapping[str, Any], fields: Iterable[str]) -> ValidationResult:
    """
    Check that each named field is present and not blank.

    Args:
        data: Raw payload
        fields: Names of the required fields

    Returns:
        ValidationResult: One error per missing or blank field
    """
    result = ValidationResult()
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            result.add(name, f"{name} is required")
    return result


def from_pydantic_errors(errors: Sequence[Mapping[str, Any]]) -> ValidationResult:
    """
    Convert a pydantic/FastAPI error list into a ValidationResult.

    The leading location segment ("body", "query", "path") is dropped so the
    field name matches what the client sent.
    """
    result = ValidationResult()
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        result.add(".".join(loc) or "body", error.get("msg", "Invalid value"))
    return result
