# tests/routes/test_species_views.py
from tests.factories import AUTHOR, OTHER, make_species


def test_species_page_lists_cards(client, db_session):
    make_species(db_session, scientific_name="Ursus arctos", common_name="Brown bear")
    make_species(db_session)
    db_session.commit()

    r = client.get("/species")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    assert r.text.index("Panthera leo") < r.text.index("Ursus arctos")
    assert "Learn More" in r.text
    assert 'role="dialog"' not in r.text


def test_root_redirects_to_species_page(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code in (302, 307)
    assert r.headers["location"] == "/species"


def test_card_page_shows_edit_only_to_author(client, db_session):
    sp = make_species(db_session)
    db_session.commit()

    r = client.get(f"/species/{sp.species_id}/card", headers={"X-Session-Id": AUTHOR})
    assert ">Edit</a>" in r.text
    assert "Lion (Panthera leo)" in r.text
    assert "20,000" in r.text

    r = client.get(f"/species/{sp.species_id}/card", headers={"X-Session-Id": OTHER})
    assert ">Edit</a>" not in r.text


def test_card_page_escapes_record_text(client, db_session):
    sp = make_species(db_session, common_name="<script>alert(1)</script>")
    db_session.commit()

    r = client.get(f"/species/{sp.species_id}/card")
    assert "<script>alert(1)</script>" not in r.text
    assert "&lt;script&gt;" in r.text


def test_form_submit_saves_and_closes(client, db_session):
    sp = make_species(db_session)
    db_session.commit()

    r = client.post(
        f"/species/{sp.species_id}/card",
        data={
            "scientific_name": "Panthera leo",
            "common_name": "",
            "kingdom": "Animalia",
            "total_population": "",
            "image": "",
            "description": "Updated.",
        },
        headers={"X-Session-Id": AUTHOR},
    )
    assert r.status_code == 200
    assert "Species updated!" in r.text
    assert 'data-mode="closed"' in r.text
    assert "Updated...." in r.text


def test_form_submit_with_errors_stays_in_edit_mode(client, db_session):
    sp = make_species(db_session)
    db_session.commit()

    r = client.post(
        f"/species/{sp.species_id}/card",
        data={
            "scientific_name": "Panthera leo",
            "kingdom": "Animalia",
            "total_population": "0",
            "image": "lion.jpg",
        },
        headers={"X-Session-Id": AUTHOR},
    )
    assert r.status_code == 422
    assert 'data-mode="editing"' in r.text
    assert 'data-field="total_population"' in r.text
    assert 'data-field="image"' in r.text
    assert 'value="0"' in r.text
