# tests/test_pricing.py
from cloakroom.pricing.models import CURRENT_ID, PricingSetting


def test_defaults_when_never_configured(client):
    r = client.get("/pricing/")
    assert r.status_code == 200
    data = r.json()
    assert data["hourly"] == {"BOLSA": 5, "MOCHILA": 8, "MALETA": 12}
    assert data["min_hours"] == 1
    assert data["rounding"] == "CEIL"
    assert data["updated_at"] is None


def test_update_and_read_back(client, clock):
    r = client.put("/pricing/", json={"hourly": {"bolsa": 3, "MALETA": 10.5}, "min_hours": 2, "rounding": "ROUND"})
    assert r.status_code == 200
    assert r.json()["hourly"] == {"BOLSA": 3, "MOCHILA": 8, "MALETA": 10.5}

    data = client.get("/pricing/").json()
    assert data["hourly"] == {"BOLSA": 3, "MOCHILA": 8, "MALETA": 10.5}
    assert data["min_hours"] == 2
    assert data["rounding"] == "ROUND"
    assert data["updated_at"] is not None


def test_partial_update_keeps_other_fields(client):
    client.put("/pricing/", json={"hourly": {"MALETA": 15}, "min_hours": 2, "rounding": "FLOOR"})

    r = client.put("/pricing/", json={"min_hours": 3})
    assert r.status_code == 200
    data = r.json()
    assert data["hourly"] == {"BOLSA": 5, "MOCHILA": 8, "MALETA": 15}
    assert data["min_hours"] == 3
    assert data["rounding"] == "FLOOR"

    data = client.put("/pricing/", json={"hourly": {"BOLSA": 0}}).json()
    assert data["hourly"] == {"BOLSA": 0, "MOCHILA": 8, "MALETA": 15}
    assert data["min_hours"] == 3


def test_update_rejects_bad_values(client):
    assert client.put("/pricing/", json={"hourly": {"MOCHILA": -1}}).status_code == 422
    assert client.put("/pricing/", json={"hourly": {"MOCHILA": 1}, "min_hours": -1}).status_code == 422
    assert client.put("/pricing/", json={"hourly": {"MOCHILA": 1}, "rounding": "UP"}).status_code == 422
    assert client.get("/pricing/").json()["hourly"]["MOCHILA"] == 8


def test_quote(client):
    r = client.post("/pricing/quote", json={"item_type": "MOCHILA", "quantity": 1, "minutes_elapsed": 95})
    assert r.status_code == 200
    assert r.json() == {"rate": 8, "hours_billed": 2, "total": 16, "warnings": []}


def test_quote_with_missing_rate_warns(client, db):
    # a stored rate table written before MALETA was priced
    db.add(PricingSetting(id=CURRENT_ID, hourly={"BOLSA": 5}, min_hours=1, rounding="CEIL"))
    db.commit()

    r = client.post("/pricing/quote", json={"item_type": "MALETA", "quantity": 1, "minutes_elapsed": 30})
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 0
    assert data["warnings"]
