from decimal import Decimal


def _create_expense(client, headers, **overrides):
    body = {"amount": 12.5, "description": "Lunch", "date": "2026-03-14", "category_id": None}
    body.update(overrides)
    response = client.post("/api/expenses", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _create_category(client, headers, name="Food"):
    response = client.post("/api/expenses/categories", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_echoes_body_with_id(client, register):
    _, headers = register()
    created = _create_expense(client, headers)
    assert isinstance(created["id"], int)
    assert created["description"] == "Lunch"
    assert created["date"] == "2026-03-14"
    assert created["category_id"] is None
    assert Decimal(created["amount"]) == Decimal("12.50")


def test_round_trip_keeps_amount_and_category_name(client, register):
    user_id, headers = register()
    category = _create_category(client, headers, "Groceries")
    _create_expense(client, headers, amount="45.10", category_id=category["id"])

    [expense] = client.get("/api/expenses", headers=headers).json()
    assert expense["amount"] == "45.10"
    assert expense["category_id"] == category["id"]
    assert expense["category_name"] == "Groceries"
    assert expense["user_id"] == user_id


def test_uncategorized_expense_has_null_category_name(client, register):
    _, headers = register()
    _create_expense(client, headers)
    [expense] = client.get("/api/expenses", headers=headers).json()
    assert expense["category_name"] is None


def test_amount_is_rounded_to_two_places(client, register):
    _, headers = register()
    _create_expense(client, headers, amount="10.005")
    [expense] = client.get("/api/expenses", headers=headers).json()
    assert expense["amount"] == "10.01"


def test_list_is_ordered_by_date_descending(client, register):
    _, headers = register()
    _create_expense(client, headers, date="2026-01-01", description="old")
    _create_expense(client, headers, date="2026-05-01", description="new")
    _create_expense(client, headers, date="2026-03-01", description="mid")

    descriptions = [e["description"] for e in client.get("/api/expenses", headers=headers).json()]
    assert descriptions == ["new", "mid", "old"]


def test_list_only_returns_callers_expenses(client, register):
    _, alice = register("alice")
    _, bob = register("bob")
    _create_expense(client, alice, description="alice's")

    assert client.get("/api/expenses", headers=bob).json() == []
    assert len(client.get("/api/expenses", headers=alice).json()) == 1


def test_missing_amount_is_a_validation_error(client, register):
    _, headers = register()
    response = client.post("/api/expenses", json={"date": "2026-03-14"}, headers=headers)
    assert response.status_code == 400
    assert "amount" in response.json()["error"]


def test_unknown_category_id_is_rejected_by_the_foreign_key(client, register):
    _, headers = register()
    response = client.post(
        "/api/expenses",
        json={"amount": 5, "date": "2026-03-14", "category_id": 9999},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]


def test_another_users_category_id_is_accepted(client, register):
    _, alice = register("alice")
    _, bob = register("bob")
    category = _create_category(client, alice, "Alice only")

    _create_expense(client, bob, category_id=category["id"])
    [expense] = client.get("/api/expenses", headers=bob).json()
    assert expense["category_id"] == category["id"]


def test_update_replaces_all_fields(client, register):
    _, headers = register()
    category = _create_category(client, headers)
    created = _create_expense(client, headers, category_id=category["id"])

    response = client.put(
        f"/api/expenses/{created['id']}",
        json={"amount": "99.99", "description": None, "date": "2026-04-01", "category_id": None},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Expense updated successfully"}

    [expense] = client.get("/api/expenses", headers=headers).json()
    assert expense["amount"] == "99.99"
    assert expense["description"] is None
    assert expense["date"] == "2026-04-01"
    assert expense["category_id"] is None


def test_update_of_another_users_expense_is_a_silent_no_op(client, register):
    _, alice = register("alice")
    _, bob = register("bob")
    created = _create_expense(client, alice, amount="20.00")

    response = client.put(
        f"/api/expenses/{created['id']}",
        json={"amount": "1.00", "description": "hijacked", "date": "2020-01-01", "category_id": None},
        headers=bob,
    )
    assert response.status_code == 200

    [expense] = client.get("/api/expenses", headers=alice).json()
    assert expense["amount"] == "20.00"
    assert expense["description"] == "Lunch"


def test_delete_of_another_users_expense_is_a_silent_no_op(client, register):
    _, alice = register("alice")
    _, bob = register("bob")
    created = _create_expense(client, alice)

    response = client.delete(f"/api/expenses/{created['id']}", headers=bob)
    assert response.status_code == 200
    assert len(client.get("/api/expenses", headers=alice).json()) == 1


def test_delete_own_expense(client, register):
    _, headers = register()
    created = _create_expense(client, headers)

    response = client.delete(f"/api/expenses/{created['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Expense deleted successfully"}
    assert client.get("/api/expenses", headers=headers).json() == []


def test_update_of_missing_expense_is_not_an_error(client, register):
    _, headers = register()
    response = client.put(
        "/api/expenses/424242",
        json={"amount": 1, "description": "x", "date": "2026-01-01", "category_id": None},
        headers=headers,
    )
    assert response.status_code == 200


def test_huge_amount_is_a_validation_error(client, register):
    _, headers = register()
    response = client.post("/api/expenses", json={"amount": "1e30", "date": "2026-01-01"}, headers=headers)
    assert response.status_code == 400
    assert "amount" in response.json()["error"]


def test_amount_above_column_range_is_rejected_on_create_and_update(client, register):
    _, headers = register()
    response = client.post("/api/expenses", json={"amount": "100000000.00", "date": "2026-01-01"}, headers=headers)
    assert response.status_code == 400

    created = _create_expense(client, headers, amount="99999999.99")
    response = client.put(
        f"/api/expenses/{created['id']}",
        json={"amount": "1e30", "description": None, "date": "2026-01-01", "category_id": None},
        headers=headers,
    )
    assert response.status_code == 400

    [expense] = client.get("/api/expenses", headers=headers).json()
    assert expense["amount"] == "99999999.99"
