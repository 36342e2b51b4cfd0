"""Asset endpoint tests."""

from conftest import auth_headers, make_token

ALICE = "auth0|alice"
BOB = "auth0|bob"


def _jpeg(name="pic.jpg", size=16):
    return ("pictures", (name, b"\xff\xd8" + b"0" * size, "image/jpeg"))


def _create(client, user_uuid, price=100, discount=0, subject=ALICE):
    response = client.post(
        f"/v1/assets/create/{user_uuid}",
        headers=auth_headers(subject),
        json={
            "price": price,
            "discount": discount,
            "lang": [{"language": "en", "title": "Rock", "desc": "A grey rock"}],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_token_is_required(client):
    assert client.get("/v1/assets/get").status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get("/v1/assets/get", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_token_signed_with_other_key_is_rejected(client):
    from jose import jwt

    token = jwt.encode({"sub": ALICE}, "someone-else", algorithm="HS256")
    response = client.get("/v1/assets/get", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_create_and_get(client, make_user):
    alice = make_user(ALICE)

    created = _create(client, alice.uuid, price=250, discount=10)
    assert created["price"] == 250
    assert created["discount"] == 10
    assert created["pictures"] == []
    assert created["translations"][0]["title"] == "Rock"
    assert "createdAt" in created

    response = client.get(f"/v1/assets/{created['uuid']}", headers=auth_headers(ALICE))
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["uuid"] == alice.uuid
    assert data["translations"][0]["language"] == "en"


def test_create_for_unknown_owner(client):
    response = client.post(
        "/v1/assets/create/missing",
        headers=auth_headers(ALICE),
        json={"price": 1, "lang": [{"language": "en", "title": "x", "desc": "y"}]},
    )
    assert response.status_code == 404


def test_create_rejects_negative_price(client, make_user):
    alice = make_user(ALICE)
    response = client.post(
        f"/v1/assets/create/{alice.uuid}",
        headers=auth_headers(ALICE),
        json={"price": -1, "lang": [{"language": "en", "title": "x", "desc": "y"}]},
    )
    assert response.status_code == 422


def test_get_missing_asset(client):
    response = client.get("/v1/assets/missing", headers=auth_headers(ALICE))
    assert response.status_code == 404


def test_query_returns_list_without_pagination(client, make_user, make_asset):
    alice = make_user(ALICE)
    for price in (50, 100, 150):
        make_asset(alice, price=price)

    response = client.get(
        "/v1/assets/get",
        params={"minPrice": 60, "maxPrice": 120, "unknownField": "x"},
        headers=auth_headers(ALICE),
    )
    assert response.status_code == 200
    data = response.json()
    assert isinstance(data, list)
    assert [a["price"] for a in data] == [100]


def test_query_discount_flag(client, make_user, make_asset):
    alice = make_user(ALICE)
    make_asset(alice, price=100, discount=0)

    only_discounted = client.get("/v1/assets/get", params={"discount": "true"}, headers=auth_headers(ALICE))
    no_filter = client.get("/v1/assets/get", params={"discount": "false"}, headers=auth_headers(ALICE))

    assert only_discounted.json() == []
    assert len(no_filter.json()) == 1


def test_query_page_envelope(client, make_user, make_asset):
    alice = make_user(ALICE)
    for i in range(25):
        make_asset(alice, price=i)

    response = client.get(
        "/v1/assets/get",
        params={"page": 3, "take": 10, "userUuid": alice.uuid},
        headers=auth_headers(ALICE),
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data["data"]) == 5
    assert data["meta"] == {
        "page": 3,
        "pageSize": 10,
        "itemCount": 25,
        "pageCount": 3,
        "hasPreviousPage": True,
        "hasNextPage": False,
    }


def test_query_order_by_desc(client, make_user, make_asset):
    alice = make_user(ALICE)
    for price in (20, 10, 30):
        make_asset(alice, price=price)

    response = client.get(
        "/v1/assets/get",
        params={"orderBy": "price", "order": "DESC", "take": 10},
        headers=auth_headers(ALICE),
    )
    assert [a["price"] for a in response.json()["data"]] == [30, 20, 10]


def test_query_validation(client):
    headers = auth_headers(ALICE)
    assert client.get("/v1/assets/get", params={"page": 0}, headers=headers).status_code == 422
    assert client.get("/v1/assets/get", params={"orderBy": "colour"}, headers=headers).status_code == 422
    assert client.get("/v1/assets/get", params={"minPrice": -5}, headers=headers).status_code == 422


def test_set_pictures_replaces_list(client, storage, make_user, make_asset):
    alice = make_user(ALICE)
    asset = make_asset(alice, pictures=["old"])

    response = client.post(
        f"/v1/assets/{asset.uuid}/setPictures",
        headers=auth_headers(ALICE),
        files=[_jpeg("a.jpg"), _jpeg("b.jpg")],
    )
    assert response.status_code == 200, response.text
    assert response.json()["pictures"] == [
        f"test-bucket.storage.test/{asset.uuid}+a.jpg",
        f"test-bucket.storage.test/{asset.uuid}+b.jpg",
    ]
    assert set(storage.objects) == {f"{asset.uuid}+a.jpg", f"{asset.uuid}+b.jpg"}


def test_set_pictures_rejects_non_jpeg(client, storage, make_user, make_asset):
    asset = make_asset(make_user(ALICE))

    response = client.post(
        f"/v1/assets/{asset.uuid}/setPictures",
        headers=auth_headers(ALICE),
        files=[("pictures", ("a.png", b"\x89PNG", "image/png"))],
    )
    assert response.status_code == 422
    assert storage.uploads == []


def test_set_pictures_rejects_oversized(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE))

    response = client.post(
        f"/v1/assets/{asset.uuid}/setPictures",
        headers=auth_headers(ALICE),
        files=[_jpeg("big.jpg", size=2 * 1000 * 1000)],
    )
    assert response.status_code == 422


def test_set_pictures_unknown_asset(client):
    response = client.post(
        "/v1/assets/missing/setPictures",
        headers=auth_headers(ALICE),
        files=[_jpeg()],
    )
    assert response.status_code == 404


def test_set_file(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE))

    response = client.post(
        f"/v1/assets/{asset.uuid}/setFile",
        headers=auth_headers(ALICE),
        files={"file": ("model.zip", b"PK", "application/zip")},
    )
    assert response.status_code == 200
    assert response.json()["file"] == f"test-bucket.storage.test/file:{asset.uuid}_model.zip"


def test_add_and_remove_picture(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE), pictures=["test-bucket.storage.test/first"])

    added = client.post(
        f"/v1/assets/{asset.uuid}/pictures",
        headers=auth_headers(ALICE),
        files=[_jpeg("a.jpg")],
    )
    assert added.status_code == 200, added.text
    assert added.json()["pictures"] == [
        "test-bucket.storage.test/first",
        f"test-bucket.storage.test/{asset.uuid}+a.jpg",
    ]

    removed = client.delete(f"/v1/assets/{asset.uuid}/pictures/first", headers=auth_headers(ALICE))
    assert removed.status_code == 200
    assert removed.json()["pictures"] == [f"test-bucket.storage.test/{asset.uuid}+a.jpg"]

    no_op = client.delete(f"/v1/assets/{asset.uuid}/pictures/unknown", headers=auth_headers(ALICE))
    assert no_op.status_code == 200
    assert no_op.json()["pictures"] == removed.json()["pictures"]


def test_add_pictures_not_owner(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE))
    make_user(BOB)

    response = client.post(
        f"/v1/assets/{asset.uuid}/pictures",
        headers=auth_headers(BOB),
        files=[_jpeg()],
    )
    assert response.status_code == 403


def test_delete_asset(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE))

    response = client.delete(f"/v1/assets/{asset.uuid}", headers=auth_headers(ALICE))
    assert response.status_code == 200
    assert response.json() == 1

    assert client.get(f"/v1/assets/{asset.uuid}", headers=auth_headers(ALICE)).status_code == 404


def test_delete_asset_of_another_user(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE))
    make_user(BOB)

    response = client.delete(f"/v1/assets/{asset.uuid}", headers=auth_headers(BOB))
    assert response.status_code == 403
    assert client.get(f"/v1/assets/{asset.uuid}", headers=auth_headers(BOB)).status_code == 200


def test_caller_without_account(client, make_user, make_asset):
    asset = make_asset(make_user(ALICE))

    response = client.delete(
        f"/v1/assets/{asset.uuid}",
        headers={"Authorization": f"Bearer {make_token('auth0|stranger')}"},
    )
    assert response.status_code == 404


def test_set_pictures_failed_upload_keeps_list_and_discards(client, storage, make_user, make_asset):
    asset = make_asset(make_user(ALICE), pictures=["old"])
    storage.fail_on_upload = 2

    response = client.post(
        f"/v1/assets/{asset.uuid}/setPictures",
        headers=auth_headers(ALICE),
        files=[_jpeg("a.jpg"), _jpeg("b.jpg"), _jpeg("c.jpg")],
    )
    assert response.status_code == 502
    assert storage.uploads == [f"{asset.uuid}+a.jpg", f"{asset.uuid}+b.jpg"]
    assert storage.objects == {}

    response = client.get(f"/v1/assets/{asset.uuid}", headers=auth_headers(ALICE))
    assert response.json()["pictures"] == ["old"]


def test_owner_is_shown_without_identity_subject(client, make_user, make_asset):
    alice = make_user(ALICE)
    asset = make_asset(alice)

    owner = client.get(f"/v1/assets/{asset.uuid}", headers=auth_headers(BOB)).json()["user"]
    assert owner["uuid"] == alice.uuid
    assert "auth0Sub" not in owner

    listed = client.get("/v1/assets/get", headers=auth_headers(BOB)).json()
    assert all("auth0Sub" not in item["user"] for item in listed)
