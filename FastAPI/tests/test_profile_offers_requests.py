from datetime import date, datetime, timezone

from conftest import auth_headers, make_user

from app.repos.user_repo import list_candidates_paginated
from app.schemas.job_request import age_on

COMPANY = "hr@acme.example"
PERSON = "amina@example.com"


def _company(client, email=COMPANY, name="ACME"):
    return client.post(
        "/api/profile",
        json={"userType": "company", "companyDetails": {"companyName": name, "contacts": [{"email": "hr@acme.example"}]}},
        headers=auth_headers(email),
    ).json()


def _offer_body(titles=("Dev",)):
    return {"companyName": "ACME", "positions": [{"title": t} for t in titles]}


def test_profile_provisioned_then_completed(live_client):
    first = live_client.get("/api/profile", headers=auth_headers(PERSON))
    assert first.status_code == 200
    assert first.json()["email"] == PERSON
    assert first.json()["isProfileComplete"] is False

    resp = live_client.post(
        "/api/profile",
        json={"userType": "individual", "firstName": "Amina", "birthDate": "1999-05-01"},
        headers=auth_headers(PERSON),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == first.json()["id"]
    assert body["userType"] == "individual"
    assert body["isProfileComplete"] is True
    assert body["birthDate"] == "1999-05-01"


def test_company_profile_requires_details(live_client):
    resp = live_client.post("/api/profile", json={"userType": "company"}, headers=auth_headers(COMPANY))
    assert resp.status_code == 422
    resp = live_client.post("/api/profile", json={"userType": "admin"}, headers=auth_headers(COMPANY))
    assert resp.status_code == 422


def test_profile_requires_token(live_client):
    assert live_client.get("/api/profile").status_code == 401


def test_offer_crud_and_ownership(live_client):
    company = _company(live_client)
    _company(live_client, email="jobs@globex.example", name="Globex")

    created = live_client.post("/api/job-offers", json=_offer_body(("Dev", "QA")), headers=auth_headers(COMPANY))
    assert created.status_code == 201
    offer_id = created.json()["offerId"]

    fetched = live_client.get(f"/api/job-offers/{offer_id}").json()
    assert fetched["userId"] == company["id"]
    assert [p["title"] for p in fetched["positions"]] == ["Dev", "QA"]

    assert [o["id"] for o in live_client.get("/api/job-offers", params={"userId": company["id"]}).json()] == [offer_id]
    assert live_client.get("/api/job-offers", params={"userId": "0" * 24}).json() == []

    foreign = live_client.patch(
        f"/api/job-offers/{offer_id}", json={"description": "x"}, headers=auth_headers("jobs@globex.example")
    )
    assert foreign.status_code == 404

    updated = live_client.patch(
        f"/api/job-offers/{offer_id}", json={"description": "Backend team"}, headers=auth_headers(COMPANY)
    )
    assert updated.status_code == 200
    assert updated.json()["description"] == "Backend team"

    assert live_client.delete(f"/api/job-offers/{offer_id}", headers=auth_headers("jobs@globex.example")).status_code == 404
    assert live_client.delete(f"/api/job-offers/{offer_id}", headers=auth_headers(COMPANY)).status_code == 200
    assert live_client.get(f"/api/job-offers/{offer_id}").status_code == 404


def test_offer_validation(live_client):
    _company(live_client)
    headers = auth_headers(COMPANY)
    assert live_client.post("/api/job-offers", json=_offer_body(()), headers=headers).status_code == 422
    assert live_client.post("/api/job-offers", json=_offer_body(("Dev", "Dev")), headers=headers).status_code == 422


def test_individual_cannot_post_offer(live_client):
    live_client.post("/api/profile", json={"userType": "individual"}, headers=auth_headers(PERSON))
    assert live_client.post("/api/job-offers", json=_offer_body(), headers=auth_headers(PERSON)).status_code == 403


def test_offer_education_details_are_filled(live_client):
    _company(live_client)
    body = {
        "companyName": "ACME",
        "positions": [{"title": "Dev", "education": {"level": "universitaire", "years": "3"}}],
    }
    offer_id = live_client.post("/api/job-offers", json=body, headers=auth_headers(COMPANY)).json()["offerId"]
    offer = live_client.get(f"/api/job-offers/{offer_id}").json()
    assert offer["positions"][0]["education"]["details"] == "3ème année universitaire"


def test_public_offers_pagination(live_client):
    _company(live_client)
    for i in range(3):
        live_client.post("/api/job-offers", json=_offer_body((f"Role {i}",)), headers=auth_headers(COMPANY))

    page = live_client.get("/api/users/offers", params={"page": 2, "limit": 2}).json()
    assert len(page["offers"]) == 1
    assert page["pagination"] == {"total": 3, "page": 2, "limit": 2, "pages": 2}

    assert live_client.get("/api/users/offers", params={"page": 0}).status_code == 422


def test_public_user_profile(live_client):
    company = _company(live_client)
    resp = live_client.get(f"/api/users/{company['id']}")
    assert resp.status_code == 200
    assert resp.json()["companyDetails"]["companyName"] == "ACME"
    assert "email" not in resp.json()
    assert live_client.get("/api/users/" + "0" * 24).status_code == 404


def test_job_request_lifecycle(live_client):
    headers = auth_headers(PERSON)
    resp = live_client.post(
        "/api/request-job",
        json={"firstName": "Amina", "birthDate": "2000-01-15", "images": ["https://cdn.example/cv.png"]},
        headers=headers,
    )
    assert resp.status_code == 201
    request_id = resp.json()["requestId"]

    [item] = live_client.get("/api/request-job", headers=headers).json()
    assert item["age"] == age_on(date(2000, 1, 15))
    assert item["hasExperience"] is False

    other = auth_headers("someone@example.com")
    assert live_client.patch(f"/api/request-job/{request_id}", json={"phone": "1"}, headers=other).status_code == 404
    patched = live_client.patch(f"/api/request-job/{request_id}", json={"phone": "0555"}, headers=headers)
    assert patched.json()["phone"] == "0555"
    assert patched.json()["firstName"] == "Amina"

    assert live_client.delete(f"/api/request-job/{request_id}", headers=other).status_code == 404
    assert live_client.delete(f"/api/request-job/{request_id}", headers=headers).status_code == 200
    assert live_client.get("/api/request-job", headers=headers).json() == []


def test_job_request_needs_images(live_client):
    resp = live_client.post("/api/request-job", json={"firstName": "Amina", "images": []}, headers=auth_headers(PERSON))
    assert resp.status_code == 422


def test_account_delete_removes_offers_and_tombstones_applications(live_client):
    company = _company(live_client)
    live_client.post("/api/profile", json={"userType": "individual", "firstName": "Amina"}, headers=auth_headers(PERSON))
    offer_id = live_client.post("/api/job-offers", json=_offer_body(), headers=auth_headers(COMPANY)).json()["offerId"]
    application_id = live_client.post(
        f"/api/jobs/apply/{offer_id}", json={"positionTitles": ["Dev"]}, headers=auth_headers(PERSON)
    ).json()["applicationId"]
    live_client.post(
        "/api/request-job", json={"images": ["https://cdn.example/a.png"]}, headers=auth_headers(COMPANY)
    )

    assert live_client.delete("/api/profile", headers=auth_headers(COMPANY)).status_code == 200

    assert live_client.get(f"/api/users/{company['id']}").status_code == 404
    assert live_client.get(f"/api/job-offers/{offer_id}").status_code == 404
    resp = live_client.get(f"/api/jobs/my-applications/{application_id}", headers=auth_headers(PERSON))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Job offer no longer available"


def test_age_on_before_and_after_birthday():
    assert age_on(date(2000, 6, 15), today=date(2026, 6, 14)) == 25
    assert age_on(date(2000, 6, 15), today=date(2026, 6, 15)) == 26
    assert age_on(None) is None


def _individual(client, email, first_name, birth_date=None):
    body = {"userType": "individual", "firstName": first_name}
    if birth_date:
        body["birthDate"] = birth_date
    return client.post("/api/profile", json=body, headers=auth_headers(email)).json()


def test_candidates_lists_completed_individuals_only(live_client):
    _company(live_client)
    amina = _individual(live_client, PERSON, "Amina", "2000-01-15")
    _individual(live_client, "karim@example.com", "Karim")
    # Provisioned but never set up
    live_client.get("/api/profile", headers=auth_headers("ghost@example.com"))

    resp = live_client.get("/api/candidates")
    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"] == {"total": 2, "page": 1, "limit": 12, "pages": 1}
    by_id = {c["id"]: c for c in body["candidates"]}
    assert {c["firstName"] for c in body["candidates"]} == {"Amina", "Karim"}
    assert by_id[amina["id"]]["stats"] == {"age": age_on(date(2000, 1, 15))}
    assert "email" not in by_id[amina["id"]]


def test_candidates_pagination(live_client):
    for i in range(3):
        _individual(live_client, f"c{i}@example.com", f"C{i}")

    page = live_client.get("/api/candidates", params={"page": 2, "limit": 2}).json()
    assert len(page["candidates"]) == 1
    assert page["pagination"] == {"total": 3, "page": 2, "limit": 2, "pages": 2}
    assert live_client.get("/api/candidates", params={"limit": 0}).status_code == 422


def test_candidates_most_recently_updated_first(db_session):
    older = make_user(db_session, "old@example.com", "individual", updated_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    newer = make_user(db_session, "new@example.com", "individual", updated_at=datetime(2026, 6, 1, tzinfo=timezone.utc))
    make_user(db_session, "hr@acme.example", "company", company_details={"companyName": "ACME"})

    items, total = list_candidates_paginated(db_session, limit=10)
    assert total == 2
    assert [u.id for u in items] == [newer.id, older.id]


def test_public_job_requests_of_individual(live_client):
    amina = _individual(live_client, PERSON, "Amina")
    live_client.post("/api/request-job", json={"images": ["https://cdn.example/a.png"], "phone": "0555"}, headers=auth_headers(PERSON))

    resp = live_client.get(f"/api/users/{amina['id']}/job-requests")
    assert resp.status_code == 200
    body = resp.json()
    assert body["profile"]["id"] == amina["id"]
    assert body["profile"]["firstName"] == "Amina"
    assert [r["phone"] for r in body["requests"]] == ["0555"]


def test_public_job_requests_rejects_non_individual(live_client):
    company = _company(live_client)
    resp = live_client.get(f"/api/users/{company['id']}/job-requests")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User is not an individual"
    assert live_client.get("/api/users/" + "0" * 24 + "/job-requests").status_code == 404
