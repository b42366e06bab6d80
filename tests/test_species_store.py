import pytest

from db.models import Species
from db.services.species_store import SqlSpeciesStore
from tests.factories import OTHER, make_species


def test_update_writes_editable_fields(db_session):
    sp = make_species(db_session)
    db_session.commit()

    res = SqlSpeciesStore(db_session).update_species(
        sp.species_id, {"common_name": "African lion", "total_population": 25000}
    )
    assert res.ok
    assert res.error is None
    db_session.refresh(sp)
    assert sp.common_name == "African lion"
    assert sp.total_population == 25000


def test_update_refuses_non_editable_fields(db_session):
    sp = make_species(db_session)
    db_session.commit()

    with pytest.raises(ValueError, match="author"):
        SqlSpeciesStore(db_session).update_species(sp.species_id, {"author": OTHER})
    db_session.refresh(sp)
    assert sp.author != OTHER


def test_out_of_range_integer_becomes_store_error(db_session):
    sp = make_species(db_session)
    db_session.commit()

    res = SqlSpeciesStore(db_session).update_species(
        sp.species_id, {"total_population": 10**20}
    )
    assert not res.ok
    assert res.error.message

    stored = db_session.get(Species, sp.species_id)
    db_session.refresh(stored)
    assert stored.total_population == 20000
