"""
Tests for the public build catalog endpoints
"""


def test_build_catalog_flow_without_token(client):
    house = client.post("/api/v1/build/types", json={"label": "Villa", "description": "Detached"})
    assert house.status_code == 201
    house_type = house.json()
    assert house_type["key"] == "villa"

    first = client.post("/api/v1/build/items", json={
        "houseTypeId": house_type["id"], "stage": "Frame", "name": "Walls", "amountIls": 200, "order": 2,
    })
    second = client.post("/api/v1/build/items", json={
        "houseTypeId": house_type["id"], "stage": "Frame", "name": "Foundations", "amountIls": "150", "order": 1,
    })
    assert first.status_code == 201 and second.status_code == 201

    catalog = client.get("/api/v1/build").json()
    assert len(catalog) == 1
    assert catalog[0]["total"] == 350
    assert [i["name"] for i in catalog[0]["items"]] == ["Foundations", "Walls"]
    assert catalog[0]["items"][0]["houseTypeId"] == house_type["id"]

    patched = client.patch(f"/api/v1/build/items/{first.json()['id']}", json={"amountIls": 250})
    assert patched.status_code == 200
    assert patched.json()["amountIls"] == 250
    assert patched.json()["order"] == 2

    assert client.delete(f"/api/v1/build/items/{second.json()['id']}").status_code == 204
    assert client.get("/api/v1/build").json()[0]["total"] == 250


def test_build_item_errors(client):
    response = client.post("/api/v1/build/items", json={"stage": "Frame", "name": "Walls", "amountIls": 1})
    assert response.status_code == 400

    response = client.post("/api/v1/build/items", json={
        "houseTypeId": "missing", "stage": "Frame", "name": "Walls", "amountIls": 1,
    })
    assert response.status_code == 404

    assert client.delete("/api/v1/build/items/missing").status_code == 404


def test_duplicate_house_type(client):
    client.post("/api/v1/build/types", json={"label": "Villa"})
    response = client.post("/api/v1/build/types", json={"label": "VILLA"})
    assert response.status_code == 409
    assert response.json() == {"message": "House type already exists."}


def test_out_of_range_numbers_are_bad_request(client):
    house_type = client.post("/api/v1/build/types", json={"label": "Villa"}).json()
    base = {"houseTypeId": house_type["id"], "stage": "Frame", "name": "Walls", "amountIls": 100}

    for field, value in [("order", 1e300), ("order", 1.7), ("order", 2 ** 31), ("amountIls", 10 ** 400),
                         ("percentHint", 12345)]:
        response = client.post("/api/v1/build/items", json={**base, field: value})
        assert response.status_code == 400, (field, value, response.text)
        assert field in response.json()["message"]

    item = client.post("/api/v1/build/items", json={**base, "order": "3"}).json()
    assert item["order"] == 3
    response = client.patch(f"/api/v1/build/items/{item['id']}", json={"order": 1e300})
    assert response.status_code == 400
    assert client.get("/api/v1/build").json()[0]["items"][0]["order"] == 3
