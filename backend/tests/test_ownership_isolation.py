from __future__ import annotations


def _create_company(client, name: str = "Acme"):
    res = client.post("/companies/", json={"name": name})
    assert res.status_code == 201
    return res.json()


def _create_application(client, company_id: int):
    res = client.post(
        "/applications/",
        json={"position": "Engineer", "company_id": company_id, "date_applied": "2023-10-01", "status": "Applied"},
    )
    assert res.status_code == 201
    return res.json()


def test_user_cannot_access_other_users_application_or_company(users, client_for):
    user_a, user_b = users

    with client_for(user_a) as c_a:
        company = _create_company(c_a)
        application = _create_application(c_a, company["id"])

    with client_for(user_b) as c_b:
        missing = c_b.get("/applications/987654")
        foreign = c_b.get(f"/applications/{application['id']}")
        # Same status and same body as a nonexistent id.
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

        assert c_b.patch(f"/applications/{application['id']}", json={"position": "Malicious Update"}).status_code == 404
        assert c_b.delete(f"/applications/{application['id']}").status_code == 404
        assert c_b.get(f"/applications/{application['id']}/activity").status_code == 404

        assert c_b.get(f"/companies/{company['id']}").status_code == 404
        assert c_b.patch(f"/companies/{company['id']}", json={"name": "Hijacked"}).status_code == 404
        assert c_b.delete(f"/companies/{company['id']}").status_code == 404

    with client_for(user_a) as c_a2:
        res = c_a2.get(f"/applications/{application['id']}")
        assert res.status_code == 200
        assert res.json()["position"] == "Engineer"
        assert c_a2.get(f"/companies/{company['id']}").json()["name"] == "Acme"


def test_user_list_only_returns_their_rows(users, client_for):
    user_a, user_b = users

    with client_for(user_a) as c_a:
        company = _create_company(c_a)
        _create_application(c_a, company["id"])
        _create_application(c_a, company["id"])

    with client_for(user_b) as c_b:
        company_b = _create_company(c_b, "Globex")
        _create_application(c_b, company_b["id"])

    with client_for(user_a) as c_a2:
        assert len(c_a2.get("/applications/").json()) == 2
        assert [c["name"] for c in c_a2.get("/companies/").json()] == ["Acme"]
        assert c_a2.get("/applications/metrics").json()["counts"]["total"] == 2

    with client_for(user_b) as c_b2:
        assert len(c_b2.get("/applications/").json()) == 1
        assert c_b2.get("/applications/metrics").json()["counts"]["total"] == 1
