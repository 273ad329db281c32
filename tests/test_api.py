from fastapi.testclient import TestClient

from peakstay.api import app

client = TestClient(app)

LONAVALA_ID = "00000000-0000-0000-0000-000000000002"
KARJAT_ID = "00000000-0000-0000-0000-000000000003"


def test_health_endpoint():
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "storage": "local"}


def test_listings_endpoint():
    resp = client.get("/api/listings")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["total"] == len(payload["items"]) == 4
    counts = [item["rating_count"] for item in payload["items"]]
    assert counts == sorted(counts, reverse=True)


def test_listings_filters_and_sort():
    resp = client.get("/api/listings", params={"location": "maharashtra", "sort": "price-low", "guests": 10})
    assert resp.status_code == 200
    assert [item["id"] for item in resp.json()["items"]] == [KARJAT_ID, LONAVALA_ID]
    resp = client.get("/api/listings", params={"max_price": 15000})
    assert [item["location"] for item in resp.json()["items"]] == ["Diveagar, Konkan"]


def test_featured_and_locations():
    featured = client.get("/api/listings/featured").json()
    assert featured and all(item["is_featured"] for item in featured)
    locations = client.get("/api/locations").json()
    assert "Anjuna" in locations and "Khopoli" in locations


def test_listing_detail_includes_similar():
    resp = client.get(f"/api/listings/{LONAVALA_ID}")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["listing"]["id"] == LONAVALA_ID
    assert payload["similar"][0]["id"] == KARJAT_ID
    assert LONAVALA_ID not in [item["id"] for item in payload["similar"]]
    similar = client.get(f"/api/listings/{LONAVALA_ID}/similar", params={"limit": 1}).json()
    assert [item["id"] for item in similar] == [KARJAT_ID]


def test_unknown_listing_is_404():
    assert client.get("/api/listings/nope").status_code == 404


def test_listing_admin_lifecycle():
    draft = {"name": "Hilltop Haven", "location": "Khopoli, Maharashtra", "price_per_night": 15000, "bedrooms": 3}
    created = client.post("/api/listings", json=draft)
    assert created.status_code == 201
    listing_id = created.json()["id"]
    ids = [item["id"] for item in client.get("/api/listings").json()["items"]]
    assert ids.count(listing_id) == 1

    updated = client.put(f"/api/listings/{listing_id}", json={**draft, "price_per_night": 16000})
    assert updated.json()["price_per_night"] == 16000

    assert client.delete(f"/api/listings/{listing_id}").status_code == 204
    assert client.get(f"/api/listings/{listing_id}").status_code == 404

    restored = client.post("/api/admin/seed").json()
    assert restored["total"] == 4


def test_inquiry_creates_lead():
    resp = client.post(f"/api/listings/{KARJAT_ID}/inquiries", json={"check_in": "2025-03-01", "check_out": "2025-03-03"})
    assert resp.status_code == 201
    payload = resp.json()
    assert payload["nights"] == 2
    assert payload["lead"]["status"] == "new"
    assert payload["whatsapp_url"].startswith("https://wa.me/")

    lead_id = payload["lead"]["id"]
    patched = client.patch(f"/api/leads/{lead_id}", json={"status": "contacted"})
    assert patched.json()["status"] == "contacted"
    assert client.patch(f"/api/leads/{lead_id}", json={"status": "archived"}).status_code == 422

    summary = client.get("/api/leads/summary").json()
    assert summary["total"] == 1 and summary["by_status"]["contacted"] == 1
    assert client.delete(f"/api/leads/{lead_id}").status_code == 204
    assert client.get("/api/leads").json() == []


def test_reviews_endpoints():
    assert len(client.get("/api/reviews").json()) == 5
    assert client.post("/api/reviews", json={"name": "Meera", "content": "  "}).status_code == 400
    created = client.post("/api/reviews", json={"name": "Meera", "content": "Lovely pool", "rating": 4})
    assert created.status_code == 201
    review_id = created.json()["id"]
    assert client.delete(f"/api/reviews/{review_id}").status_code == 204
    assert client.delete(f"/api/reviews/{review_id}").status_code == 404


def test_services_endpoints():
    created = client.post("/api/services", json={"title": "Bonfire Night", "icon": "fa-fire"}).json()
    renamed = client.put(f"/api/services/{created['id']}", json={"title": "Bonfire & BBQ", "icon": "fa-fire"})
    assert renamed.json()["title"] == "Bonfire & BBQ"
    titles = [service["title"] for service in client.get("/api/services").json()]
    assert titles[:3] == ["Private Chef", "Chauffeur Service", "Spa & Wellness"]
    assert "Bonfire & BBQ" in titles
    assert client.delete(f"/api/services/{created['id']}").status_code == 204


def test_settings_endpoints():
    assert client.get("/api/settings").json()["active_theme"] == "NEW_YEAR"
    updated = client.put("/api/settings", json={"active_theme": "DIWALI"}).json()
    assert updated["active_theme"] == "DIWALI"
    assert updated["promo_text"].startswith("CELEBRATING 2025")


def test_diagnostics_endpoint():
    results = client.get("/api/diagnostics").json()
    assert [r["id"] for r in results] == ["storage_client", "db_listings", "db_settings"]
    assert results[0]["status"] == "offline"
    assert results[1]["status"] == "degraded"
