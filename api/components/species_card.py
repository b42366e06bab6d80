"""
Species card: a list-item summary that opens a details dialog, with inline
editing for the record's author.

The card moves between three states::

    CLOSED --open()--> VIEWING --start_editing()--> EDITING
       ^                  |                            |
       +----dismiss()-----+------dismiss()/submit()----+

``submit()`` only closes the dialog when the store accepts the update; a
store error leaves the card in EDITING with the working copy intact.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Literal, Optional

from api.components.display import (
    EDIT_DESCRIPTION,
    EDIT_TITLE,
    NO_DESCRIPTION,
    dialog_title,
    format_population,
    summary_description,
)
from api.schemas.species import (
    CardView,
    SpeciesDialog,
    SpeciesForm,
    SpeciesOut,
    SpeciesSummary,
)
from api.services.notifications import Notification, Notifier
from api.services.validation import ValidationFailure, validate_species_form
from db.services.species_store import SpeciesStore
from db.sqltypes import KINGDOMS, Kingdom

logger = logging.getLogger(__name__)

DEFAULT_KINGDOM = Kingdom.Animalia.value

SAVED = Notification("Species updated!", "Changes saved successfully.")
FAILED_TITLE = "Something went wrong."


class CardMode(str, enum.Enum):
    CLOSED = "closed"
    VIEWING = "viewing"
    EDITING = "editing"


class InvalidTransition(ValueError):
    def __init__(self, action: str, mode: CardMode):
        super().__init__(f"cannot {action} while {mode.value}")
        self.action = action
        self.mode = mode


class EditNotPermitted(PermissionError):
    pass


@dataclass
class SubmitOutcome:
    status: Literal["saved", "failed", "invalid"]
    errors: Dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None


class SpeciesCard:
    def __init__(
        self,
        species: SpeciesOut,
        session_id: Optional[str],
        store: SpeciesStore,
        refresh: Callable[[], None],
        notify: Notifier,
    ):
        self.species = species
        self.session_id = session_id
        self.store = store
        self.refresh = refresh
        self.notify = notify
        self.mode = CardMode.CLOSED
        self.form = SpeciesForm.from_species(species)
        self.errors: Dict[str, str] = {}

    @property
    def can_edit(self) -> bool:
        # Advisory only; the store does its own authorization
        return self.session_id is not None and self.species.author == self.session_id

    def sync(self, species: SpeciesOut) -> None:
        """Take a fresh snapshot from the host after a refresh."""
        if species.species_id != self.species.species_id:
            raise ValueError(
                f"card for species {self.species.species_id} got {species.species_id}"
            )
        self.species = species
        if self.mode is not CardMode.EDITING:
            self._reset_form()

    def _reset_form(self) -> None:
        self.form = SpeciesForm.from_species(self.species)
        self.errors = {}

    # transitions

    def open(self) -> None:
        self.mode = CardMode.VIEWING
        self._reset_form()

    def start_editing(self) -> None:
        if self.mode is not CardMode.VIEWING:
            raise InvalidTransition("edit", self.mode)
        if not self.can_edit:
            raise EditNotPermitted(
                f"session is not the author of species {self.species.species_id}"
            )
        self.mode = CardMode.EDITING

    def dismiss(self) -> None:
        if self.mode is CardMode.CLOSED:
            raise InvalidTransition("dismiss", self.mode)
        self.mode = CardMode.CLOSED
        self._reset_form()

    def set_field(self, name: str, value: Optional[str]) -> Dict[str, str]:
        if self.mode is not CardMode.EDITING:
            raise InvalidTransition("edit fields", self.mode)
        if name not in SpeciesForm.model_fields:
            raise KeyError(name)
        self.form = self.form.model_copy(update={name: value})
        self.validate()
        return self.errors

    def fill(self, form: SpeciesForm) -> Dict[str, str]:
        """Replace the whole working copy, e.g. from a submitted HTML form."""
        if self.mode is not CardMode.EDITING:
            raise InvalidTransition("edit fields", self.mode)
        self.form = form
        self.validate()
        return self.errors

    def validate(self) -> Dict[str, str]:
        result = validate_species_form(self.form)
        self.errors = result.errors if isinstance(result, ValidationFailure) else {}
        return self.errors

    def submit(self) -> SubmitOutcome:
        if self.mode is not CardMode.EDITING:
            raise InvalidTransition("submit", self.mode)

        result = validate_species_form(self.form)
        if isinstance(result, ValidationFailure):
            self.errors = result.errors
            return SubmitOutcome(status="invalid", errors=result.errors)
        self.errors = {}

        res = self.store.update_species(
            self.species.species_id, result.values.to_values()
        )
        if not res.ok:
            self.notify(
                Notification(FAILED_TITLE, res.error.message, variant="destructive")
            )
            return SubmitOutcome(status="failed", message=res.error.message)

        self.mode = CardMode.CLOSED
        self.refresh()
        self.notify(SAVED)
        logger.debug("species %s saved from card", self.species.species_id)
        return SubmitOutcome(status="saved")

    # rendering

    def view(self) -> CardView:
        sp = self.species
        summary = SpeciesSummary(
            image=sp.image,
            scientific_name=sp.scientific_name,
            common_name=sp.common_name,
            description=summary_description(sp.description),
        )
        dialog = None
        if self.mode is not CardMode.CLOSED:
            editing = self.mode is CardMode.EDITING
            dialog = SpeciesDialog(
                title=(
                    EDIT_TITLE
                    if editing
                    else dialog_title(sp.scientific_name, sp.common_name)
                ),
                description=(
                    EDIT_DESCRIPTION if editing else sp.description or NO_DESCRIPTION
                ),
                image=None if editing else sp.image,
                kingdom=sp.kingdom.value,
                total_population=format_population(sp.total_population),
                show_edit=self.can_edit and not editing,
                form=self.form if editing else None,
                kingdom_choice=(
                    (self.form.kingdom or DEFAULT_KINGDOM) if editing else None
                ),
                kingdom_options=list(KINGDOMS) if editing else [],
                errors=self.errors if editing else {},
            )
        return CardView(
            species_id=sp.species_id,
            mode=self.mode.value,
            summary=summary,
            dialog=dialog,
        )
