from conftest import make_profile


def test_list_profiles_by_name(client, headers, other_user):
    make_profile("zed@example.com", "Zed")
    response = client.get("/api/profiles", headers=headers)
    assert response.status_code == 200
    names = [p["full_name"] for p in response.json()["data"]]
    assert names == sorted(names)
    assert len(names) == 3


def test_search_profiles_case_insensitive(client, headers, other_user):
    response = client.get("/api/profiles", params={"q": "BRUNO"}, headers=headers)
    data = response.json()["data"]
    assert [p["email"] for p in data] == ["bruno@example.com"]

    by_email = client.get("/api/profiles", params={"q": "example.com"}, headers=headers).json()["data"]
    assert len(by_email) == 2


def test_search_profiles_limit(client, headers):
    for i in range(12):
        make_profile(f"member{i}@example.com", f"Member {i}")
    data = client.get("/api/profiles", params={"q": "member"}, headers=headers).json()["data"]
    assert len(data) == 10


def test_get_profile(client, headers, other_user):
    response = client.get(f"/api/profiles/{other_user.id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["initials"] == "BD"


def test_get_profile_not_found(client, headers):
    response = client.get("/api/profiles/00000000-0000-0000-0000-000000000000", headers=headers)
    assert response.status_code == 404


def test_update_own_profile(client, headers, user):
    response = client.put(
        f"/api/profiles/{user.id}",
        headers=headers,
        json={"full_name": "Ana Maria", "phone": "+34 600 000 000"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["full_name"] == "Ana Maria"
    assert data["phone"] == "+34 600 000 000"


def test_cannot_update_someone_else(client, headers, other_user):
    response = client.put(f"/api/profiles/{other_user.id}", headers=headers, json={"full_name": "Hacked"})
    assert response.status_code == 403
