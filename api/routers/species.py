# api/routers/species.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from api.components.species_card import (
    CardMode,
    EditNotPermitted,
    InvalidTransition,
    SpeciesCard,
)
from api.deps import get_db, get_session_id
from api.schemas.species import (
    CardView,
    SpeciesForm,
    SpeciesOut,
    SubmitResultOut,
    ValidationOut,
)
from api.services.notifications import NotificationLog, Notifier
from api.services.validation import ValidationSuccess, validate_species_form
from db.models import Species
from db.services.species_store import SqlSpeciesStore

router = APIRouter(prefix="/species", tags=["species"])


def get_species_or_404(db: Session, species_id: int) -> Species:
    sp = db.get(Species, species_id)
    if sp is None:
        raise HTTPException(status_code=404, detail=f"Species {species_id} not found")
    return sp


def build_card(
    db: Session, row: Species, session_id: Optional[str], notify: Notifier
) -> SpeciesCard:
    """Card wired to the SQL store; refresh reloads the row from the database."""

    def refresh() -> None:
        db.refresh(row)
        card.sync(SpeciesOut.model_validate(row))

    card = SpeciesCard(
        SpeciesOut.model_validate(row),
        session_id,
        store=SqlSpeciesStore(db),
        refresh=refresh,
        notify=notify,
    )
    return card


def enter_mode(card: SpeciesCard, mode: CardMode) -> None:
    if mode is CardMode.CLOSED:
        return
    card.open()
    if mode is CardMode.EDITING:
        try:
            card.start_editing()
        except EditNotPermitted as e:
            raise HTTPException(status_code=403, detail=str(e))
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=str(e))


def list_species_rows(db: Session) -> List[Species]:
    return list(
        db.execute(select(Species).order_by(Species.scientific_name.asc())).scalars()
    )


@router.get("", response_model=list[SpeciesOut])
def list_species(db: Session = Depends(get_db)):
    return [SpeciesOut.model_validate(sp) for sp in list_species_rows(db)]


@router.get("/{species_id}", response_model=SpeciesOut)
def get_species(species_id: int, db: Session = Depends(get_db)):
    return SpeciesOut.model_validate(get_species_or_404(db, species_id))


@router.get("/{species_id}/card", response_model=CardView)
def get_card(
    species_id: int,
    mode: CardMode = Query(CardMode.VIEWING, description="closed, viewing or editing"),
    db: Session = Depends(get_db),
    session_id: Optional[str] = Depends(get_session_id),
):
    row = get_species_or_404(db, species_id)
    card = build_card(db, row, session_id, NotificationLog())
    enter_mode(card, mode)
    return card.view()


@router.post("/{species_id}/validate", response_model=ValidationOut)
def validate_species(species_id: int, form: SpeciesForm, db: Session = Depends(get_db)):
    """Live validation of a working copy; nothing is written."""
    get_species_or_404(db, species_id)
    result = validate_species_form(form)
    if isinstance(result, ValidationSuccess):
        return ValidationOut(valid=True, values=result.values)
    return ValidationOut(valid=False, errors=result.errors)


@router.put("/{species_id}", response_model=SubmitResultOut)
def update_species(
    species_id: int,
    form: SpeciesForm,
    db: Session = Depends(get_db),
    session_id: Optional[str] = Depends(get_session_id),
):
    row = get_species_or_404(db, species_id)
    log = NotificationLog()
    card = build_card(db, row, session_id, log)
    enter_mode(card, CardMode.EDITING)
    card.fill(form)
    outcome = card.submit()

    body = SubmitResultOut(
        status=outcome.status,
        mode=card.mode.value,
        errors=outcome.errors,
        notifications=log.to_out(),
        species=card.species,
    )
    if outcome.status == "invalid":
        raise HTTPException(status_code=422, detail=body.model_dump(mode="json"))
    if outcome.status == "failed":
        raise HTTPException(status_code=400, detail=body.model_dump(mode="json"))
    return body
