VALID_USER_PAYLOAD = {
    "email": "new_user@example.com",
    "password": "strongpassword",
    "first_name": "Ivan",
    "last_name": "Ivanov",
}


def get_user_payload(**overrides):
    data = VALID_USER_PAYLOAD.copy()
    data.update(overrides)
    return data


def create_user(client, **overrides):
    return client.post("/api/v1/users", json=get_user_payload(**overrides))


def assert_user_data(response_data: dict, expected_user):
    assert response_data["id"] == expected_user.id
    assert response_data["email"] == expected_user.email
    assert response_data["first_name"] == expected_user.first_name
    assert response_data["last_name"] == expected_user.last_name
    assert "hashed_password" not in response_data
    assert "password" not in response_data
