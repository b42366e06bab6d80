# api/routers/views.py
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from api.components.species_card import CardMode
from api.deps import get_db, get_session_id
from api.routers.species import (
    build_card,
    enter_mode,
    get_species_or_404,
    list_species_rows,
)
from api.schemas.species import SpeciesForm
from api.services.notifications import NotificationLog

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["views"])


@router.get("/species", response_class=HTMLResponse)
def species_page(
    request: Request,
    db: Session = Depends(get_db),
    session_id: Optional[str] = Depends(get_session_id),
):
    cards = [
        build_card(db, row, session_id, NotificationLog()).view()
        for row in list_species_rows(db)
    ]
    return templates.TemplateResponse(
        request, "species_list.html", {"cards": cards, "notifications": []}
    )


@router.get("/species/{species_id}/card", response_class=HTMLResponse)
def species_card(
    request: Request,
    species_id: int,
    mode: CardMode = CardMode.VIEWING,
    db: Session = Depends(get_db),
    session_id: Optional[str] = Depends(get_session_id),
):
    row = get_species_or_404(db, species_id)
    card = build_card(db, row, session_id, NotificationLog())
    enter_mode(card, mode)
    return templates.TemplateResponse(
        request, "species_card.html", {"card": card.view(), "notifications": []}
    )


@router.post("/species/{species_id}/card", response_class=HTMLResponse)
def submit_species_card(
    request: Request,
    species_id: int,
    scientific_name: Optional[str] = Form(None),
    common_name: Optional[str] = Form(None),
    kingdom: Optional[str] = Form(None),
    total_population: Optional[str] = Form(None),
    image: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    session_id: Optional[str] = Depends(get_session_id),
):
    row = get_species_or_404(db, species_id)
    log = NotificationLog()
    card = build_card(db, row, session_id, log)
    enter_mode(card, CardMode.EDITING)
    card.fill(
        SpeciesForm(
            scientific_name=scientific_name,
            common_name=common_name,
            kingdom=kingdom,
            total_population=total_population,
            image=image,
            description=description,
        )
    )
    outcome = card.submit()
    status_code = {"saved": 200, "failed": 400, "invalid": 422}[outcome.status]
    return templates.TemplateResponse(
        request,
        "species_card.html",
        {"card": card.view(), "notifications": log.to_out()},
        status_code=status_code,
    )
