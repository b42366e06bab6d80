from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Union

from pydantic import ValidationError

from api.schemas.species import SpeciesForm, SpeciesUpdate


@dataclass(frozen=True)
class ValidationSuccess:
    values: SpeciesUpdate
    ok: Literal[True] = True


@dataclass(frozen=True)
class ValidationFailure:
    errors: Dict[str, str] = field(default_factory=dict)
    ok: Literal[False] = False


ValidationResult = Union[ValidationSuccess, ValidationFailure]


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    """First message per field, keyed by field name."""
    out: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("__root__",)
        name = str(loc[0])
        msg = err["msg"]
        # pydantic prefixes custom ValueErrors
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, ") :]
        out.setdefault(name, msg)
    return out


def validate_species_form(form: SpeciesForm) -> ValidationResult:
    try:
        values = SpeciesUpdate.model_validate(form.model_dump())
    except ValidationError as e:
        return ValidationFailure(errors=_field_errors(e))
    return ValidationSuccess(values=values)
