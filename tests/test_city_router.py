async def test_get_city(api, seeded):
    resp = await api.get("/api/Cities/1")

    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "name": "Tokyo", "lat": 35.6897, "lon": 139.6922, "countryId": 1}


async def test_get_missing_city_is_404(api, seeded):
    resp = await api.get("/api/Cities/2000")

    assert resp.status_code == 404


async def test_get_cities_envelope(api, seeded):
    resp = await api.get("/api/Cities", params={"pageIndex": 0, "pageSize": 2, "sortColumn": "name"})

    assert resp.status_code == 200
    body = resp.json()
    assert [c["name"] for c in body["data"]] == ["Osaka", "Rome"]
    assert body["data"][0]["countryName"] == "Japan"
    assert body["totalCount"] == 3
    assert body["totalPages"] == 2
    assert body["pageIndex"] == 0
    assert body["pageSize"] == 2
    assert body["sortColumn"] == "name"
    assert body["sortDirection"] == "asc"


async def test_get_cities_filter_by_country_name(api, seeded):
    resp = await api.get(
        "/api/Cities",
        params={"pageSize": 10, "filterColumn": "countryName", "filterQuery": "Ita"},
    )

    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()["data"]] == ["Rome"]


async def test_get_cities_bad_sort_column_is_400(api, seeded):
    resp = await api.get("/api/Cities", params={"sortColumn": "password"})

    assert resp.status_code == 400


async def test_get_cities_bad_sort_direction_is_400(api, seeded):
    resp = await api.get("/api/Cities", params={"sortColumn": "name", "sortDirection": "up"})

    assert resp.status_code == 400


async def test_get_cities_negative_page_is_422(api, seeded):
    resp = await api.get("/api/Cities", params={"pageIndex": -1})

    assert resp.status_code == 422


async def test_create_city(api, seeded):
    resp = await api.post(
        "/api/Cities",
        json={"name": "Kyoto", "lat": 35.0111, "lon": 135.7669, "countryId": 1},
    )

    assert resp.status_code == 201
    created = resp.json()
    assert created["id"] > 3
    assert created["name"] == "Kyoto"
    assert created["lat"] == 35.0111
    assert (await api.get(f"/api/Cities/{created['id']}")).status_code == 200


async def test_create_city_too_many_decimals_is_422(api, seeded):
    resp = await api.post(
        "/api/Cities",
        json={"name": "Kyoto", "lat": 35.01115, "lon": 135.7669, "countryId": 1},
    )

    assert resp.status_code == 422


async def test_create_city_unknown_country_is_400(api, seeded):
    resp = await api.post(
        "/api/Cities",
        json={"name": "Atlantis", "lat": 0, "lon": 0, "countryId": 99},
    )

    assert resp.status_code == 400


async def test_update_city(api, seeded):
    resp = await api.put(
        "/api/Cities/3",
        json={"id": 3, "name": "Osaka", "lat": 34.7, "lon": 135.5, "countryId": 1},
    )

    assert resp.status_code == 200
    assert resp.json()["lat"] == 34.7


async def test_update_city_id_mismatch_is_400(api, seeded):
    resp = await api.put(
        "/api/Cities/3",
        json={"id": 1, "name": "Osaka", "lat": 34.7, "lon": 135.5, "countryId": 1},
    )

    assert resp.status_code == 400


async def test_update_missing_city_is_404(api, seeded):
    resp = await api.put(
        "/api/Cities/404",
        json={"name": "Nowhere", "lat": 0, "lon": 0, "countryId": 1},
    )

    assert resp.status_code == 404


async def test_delete_city(api, seeded):
    resp = await api.delete("/api/Cities/2")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Rome"
    assert (await api.delete("/api/Cities/2")).status_code == 404


async def test_is_dupe_city(api, seeded):
    async def is_dupe(body):
        resp = await api.post("/api/Cities/IsDupeCity", json=body)
        assert resp.status_code == 200
        return resp.json()

    assert await is_dupe({"id": 0, "name": "Tokyo", "lat": 1, "lon": 1, "countryId": 1}) is True
    assert await is_dupe({"id": 1, "name": "Tokyo", "lat": 1, "lon": 1, "countryId": 1}) is False
    assert await is_dupe({"id": 0, "name": "Kyoto", "lat": 1, "lon": 1, "countryId": 1}) is False
