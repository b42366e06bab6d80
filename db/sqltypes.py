import enum

from sqlalchemy import Enum


class Kingdom(str, enum.Enum):
    Animalia = "Animalia"
    Plantae = "Plantae"
    Fungi = "Fungi"
    Protista = "Protista"
    Archaea = "Archaea"
    Bacteria = "Bacteria"


KINGDOMS = tuple(k.value for k in Kingdom)

# Stored as the plain labels; the card compares and renders them as text.
KingdomType = Enum(*KINGDOMS, name="kingdom", create_constraint=True)
