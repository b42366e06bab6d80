# api/schemas/species.py
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from db.sqltypes import Kingdom

_URL = TypeAdapter(AnyUrl)

# species.total_population is a BIGINT
MAX_POPULATION = 2**63 - 1


def _blank_to_none(value: Any) -> Any:
    """Trim text; empty or whitespace-only input becomes None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class SpeciesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    species_id: int
    scientific_name: str
    common_name: Optional[str] = None
    kingdom: Kingdom
    total_population: Optional[int] = None
    image: Optional[str] = None
    description: Optional[str] = None
    author: str


class SpeciesForm(BaseModel):
    """Working copy of the editable fields, exactly as typed."""

    model_config = ConfigDict(coerce_numbers_to_str=True)
    scientific_name: Optional[str] = None
    common_name: Optional[str] = None
    kingdom: Optional[str] = None
    total_population: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_species(cls, sp: SpeciesOut) -> "SpeciesForm":
        return cls(
            scientific_name=sp.scientific_name,
            common_name=sp.common_name,
            kingdom=sp.kingdom.value,
            total_population=(
                str(sp.total_population) if sp.total_population is not None else None
            ),
            image=sp.image,
            description=sp.description,
        )


class SpeciesUpdate(BaseModel):
    """Validated, normalized values ready for the store."""

    scientific_name: str = Field(min_length=1)
    common_name: Optional[str] = None
    kingdom: Kingdom
    total_population: Optional[int] = Field(default=None, ge=1, le=MAX_POPULATION)
    image: Optional[str] = None
    description: Optional[str] = None

    @field_validator("scientific_name", mode="before")
    @classmethod
    def _trim(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator(
        "common_name", "total_population", "image", "description", mode="before"
    )
    @classmethod
    def _optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("total_population", mode="before")
    @classmethod
    def _integral(cls, v: Any) -> Any:
        # number inputs may send "1e3" or "20.0"
        if not isinstance(v, str):
            return v
        try:
            d = Decimal(v)
        except InvalidOperation:
            return v
        # adjusted() caps the exponent before int() expands it
        if d.is_finite() and d.adjusted() < 20 and d == d.to_integral_value():
            return int(d)
        return v

    @field_validator("image")
    @classmethod
    def _url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            _URL.validate_python(v)
        except ValidationError:
            raise ValueError("Invalid url") from None
        # keep what the user typed; AnyUrl would add trailing slashes
        return v

    def to_values(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class ValidationOut(BaseModel):
    valid: bool
    errors: Dict[str, str] = {}
    values: Optional[SpeciesUpdate] = None


class NotificationOut(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class SpeciesSummary(BaseModel):
    image: Optional[str] = None
    scientific_name: str
    common_name: Optional[str] = None
    description: str


class SpeciesDialog(BaseModel):
    title: str
    description: str
    image: Optional[str] = None
    kingdom: str
    total_population: str
    show_edit: bool
    form: Optional[SpeciesForm] = None
    kingdom_choice: Optional[str] = None
    kingdom_options: List[str] = []
    errors: Dict[str, str] = {}


class CardView(BaseModel):
    species_id: int
    mode: Literal["closed", "viewing", "editing"]
    summary: SpeciesSummary
    dialog: Optional[SpeciesDialog] = None


class SubmitResultOut(BaseModel):
    status: Literal["saved", "failed", "invalid"]
    mode: Literal["closed", "viewing", "editing"]
    errors: Dict[str, str] = {}
    notifications: List[NotificationOut] = []
    species: Optional[SpeciesOut] = None
