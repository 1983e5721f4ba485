"""
Tests for profiles, finances, types and scenarios endpoints
"""
import pytest


def test_profiles_list_and_create(client, register):
    headers, _ = register()
    assert client.get("/api/v1/profiles", headers=headers).json() == []

    response = client.post(
        "/api/v1/profiles", json={"familyName": "Levi family", "monthlyGoal": "15000,5"}, headers=headers,
    )
    assert response.status_code == 201
    profile = response.json()
    assert profile["familyName"] == "Levi family"
    assert profile["monthlyGoal"] == 15000.5
    assert profile["key"].startswith("profile_")

    listed = client.get("/api/v1/profiles", headers=headers).json()
    assert [p["id"] for p in listed] == [profile["id"]]


def test_finances_without_profile_is_not_found(client, register):
    headers, _ = register()
    response = client.get("/api/v1/finances", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"message": "Family profile not found."}


def test_income_crud_round_trip(client, auth_headers):
    created = client.post(
        "/api/v1/finances/incomes",
        json={"name": "Job", "monthlyIls": 12000, "typeLabel": "Salary"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    income = created.json()
    assert income["type"] == "Salary"
    assert income["typeId"]

    patched = client.patch(
        f"/api/v1/finances/incomes/{income['id']}", json={"monthlyIls": "13000"}, headers=auth_headers,
    )
    assert patched.status_code == 200
    assert patched.json()["monthlyIls"] == 13000
    assert patched.json()["name"] == "Job"

    summary = client.get("/api/v1/finances", headers=auth_headers).json()
    assert summary["totals"]["monthlyIncome"] == 13000
    assert [i["id"] for i in summary["incomes"]] == [income["id"]]

    deleted = client.delete(f"/api/v1/finances/incomes/{income['id']}", headers=auth_headers)
    assert deleted.status_code == 204
    again = client.patch(f"/api/v1/finances/incomes/{income['id']}", json={"name": "x"}, headers=auth_headers)
    assert again.status_code == 404


def test_summary_totals_and_types(client, auth_headers):
    client.post("/api/v1/finances/incomes", json={"name": "A", "monthlyIls": 20000.5}, headers=auth_headers)
    client.post("/api/v1/finances/expenses", json={"name": "Rent", "monthlyIls": 5000.1, "typeLabel": "Housing"},
                headers=auth_headers)
    client.post(
        "/api/v1/finances/investments",
        json={"name": "Pension", "accountType": "Pension fund", "currentValueIls": 300000},
        headers=auth_headers,
    )

    summary = client.get("/api/v1/finances", headers=auth_headers).json()
    totals = summary["totals"]
    assert totals["netMonthly"] == totals["monthlyIncome"] - totals["monthlyExpenses"]
    assert totals["investmentsTotal"] == 300000
    assert summary["familyName"] == "Cohen family"
    assert [t["label"] for t in summary["incomeTypes"]] == ["Salary"]
    assert [t["label"] for t in summary["expenseTypes"]] == ["Housing"]
    assert summary["investments"][0]["provider"] is None


@pytest.fixture
def intruder_headers(client, register):
    headers, _ = register(email="intruder@example.com")
    client.post("/api/v1/profiles", json={"familyName": "Intruders"}, headers=headers)
    return headers


OWNED_RECORDS = [
    ("incomes", {"name": "Job", "monthlyIls": 100}, {"name": "Mine"}, "name"),
    ("investments", {"name": "Pension", "accountType": "Stocks", "currentValueIls": 100}, {"name": "Mine"}, "name"),
    ("expenses", {"name": "Rent", "monthlyIls": 100, "typeLabel": "Housing"}, {"name": "Mine"}, "name"),
    ("income-types", {"label": "Bonus"}, {"label": "Mine"}, "label"),
    ("expense-types", {"label": "Car"}, {"label": "Mine"}, "label"),
]


@pytest.mark.parametrize("collection,payload,patch,field", OWNED_RECORDS)
def test_other_user_gets_not_found(client, auth_headers, intruder_headers, collection, payload, patch, field):
    created = client.post(f"/api/v1/finances/{collection}", json=payload, headers=auth_headers)
    assert created.status_code == 201, created.text
    record = created.json()
    url = f"/api/v1/finances/{collection}/{record['id']}"

    assert client.patch(url, json=patch, headers=intruder_headers).status_code == 404
    assert client.delete(url, headers=intruder_headers).status_code == 404

    # Still there and unchanged for the owner
    renamed = client.patch(url, json={field: record[field]}, headers=auth_headers)
    assert renamed.status_code == 200
    assert renamed.json()[field] == payload[field]


def test_other_users_profile_is_not_found(client, auth_headers, intruder_headers):
    own_profile_id = client.get("/api/v1/profiles", headers=auth_headers).json()[0]["id"]
    for path in ("/api/v1/finances", "/api/v1/finances/income-types", "/api/v1/scenarios"):
        response = client.get(f"{path}?profileId={own_profile_id}", headers=intruder_headers)
        assert response.status_code == 404, path


def test_records_cannot_use_other_users_types(client, auth_headers, intruder_headers):
    expense_type = client.post(
        "/api/v1/finances/expense-types", json={"label": "Car"}, headers=auth_headers,
    ).json()
    income_type = client.post(
        "/api/v1/finances/income-types", json={"label": "Bonus"}, headers=auth_headers,
    ).json()

    response = client.post(
        "/api/v1/finances/expenses",
        json={"name": "Fuel", "monthlyIls": 100, "typeId": expense_type["id"]},
        headers=intruder_headers,
    )
    assert response.status_code == 404
    response = client.post(
        "/api/v1/finances/incomes",
        json={"name": "Gift", "monthlyIls": 100, "typeId": income_type["id"]},
        headers=intruder_headers,
    )
    assert response.status_code == 404
    assert client.get("/api/v1/finances", headers=intruder_headers).json()["expenses"] == []


def test_other_users_scenario_is_not_found(client, auth_headers, intruder_headers):
    scenario = client.post("/api/v1/scenarios", json={
        "label": "Plan A", "totalCostIls": 1, "equityIls": 1, "mortgageIls": 0, "monthlyPayIls": 1,
    }, headers=auth_headers).json()
    assert client.delete(f"/api/v1/scenarios/{scenario['id']}", headers=intruder_headers).status_code == 404
    assert [s["id"] for s in client.get("/api/v1/scenarios", headers=auth_headers).json()] == [scenario["id"]]


@pytest.mark.parametrize("amount", ["abc", "NaN", True, 10 ** 400, 1e300, "1e400"])
def test_invalid_number_is_bad_request(client, auth_headers, amount):
    response = client.post(
        "/api/v1/finances/incomes", json={"name": "Job", "monthlyIls": amount}, headers=auth_headers,
    )
    assert response.status_code == 400
    assert "monthlyIls" in response.json()["message"]


def test_missing_required_field_is_bad_request(client, auth_headers):
    response = client.post("/api/v1/finances/expenses", json={"name": "Rent", "monthlyIls": 100},
                           headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "name, monthlyIls and typeId/typeLabel are required."}


def test_expense_type_in_use_and_income_type_delete(client, auth_headers):
    expense = client.post(
        "/api/v1/finances/expenses", json={"name": "Rent", "monthlyIls": 4000, "typeLabel": "Housing"},
        headers=auth_headers,
    ).json()
    response = client.delete(f"/api/v1/finances/expense-types/{expense['typeId']}", headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Expense type is in use."}

    income = client.post(
        "/api/v1/finances/incomes", json={"name": "Gig", "monthlyIls": 900, "type": "Freelance"},
        headers=auth_headers,
    ).json()
    response = client.delete(f"/api/v1/finances/income-types/{income['typeId']}", headers=auth_headers)
    assert response.status_code == 204

    summary = client.get("/api/v1/finances", headers=auth_headers).json()
    assert summary["incomes"][0]["typeId"] is None
    assert summary["incomes"][0]["type"] is None


def test_type_create_rename_conflict(client, auth_headers):
    created = client.post("/api/v1/finances/income-types", json={"label": "Bonus"}, headers=auth_headers)
    assert created.status_code == 201
    assert client.post(
        "/api/v1/finances/income-types", json={"label": "bonus"}, headers=auth_headers,
    ).status_code == 409

    renamed = client.patch(
        f"/api/v1/finances/income-types/{created.json()['id']}", json={"label": "Annual bonus"}, headers=auth_headers,
    )
    assert renamed.status_code == 200
    labels = [t["label"] for t in client.get("/api/v1/finances/income-types", headers=auth_headers).json()]
    assert labels == ["Annual bonus"]


def test_scenarios(client, auth_headers):
    payload = {
        "label": "Plan A", "totalCostIls": 4000000, "equityIls": 2000000,
        "mortgageIls": 2000000, "monthlyPayIls": 9000,
    }
    created = client.post("/api/v1/scenarios", json=payload, headers=auth_headers)
    assert created.status_code == 201
    scenario = created.json()

    listed = client.get("/api/v1/scenarios", headers=auth_headers).json()
    assert [s["id"] for s in listed] == [scenario["id"]]
    assert listed[0]["monthlyPayIls"] == 9000

    assert client.delete(f"/api/v1/scenarios/{scenario['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/v1/scenarios/{scenario['id']}", headers=auth_headers).status_code == 404
