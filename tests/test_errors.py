from sqlalchemy.exc import OperationalError

from app.routers.deps import get_expense_store


class _BrokenExpenseStore:
    def list_for_user(self, user_id):
        raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))


def test_database_failure_is_a_500_with_error_body(client, register):
    _, headers = register()
    client.app.dependency_overrides[get_expense_store] = lambda: _BrokenExpenseStore()
    try:
        response = client.get("/api/expenses", headers=headers)
    finally:
        client.app.dependency_overrides.clear()

    assert response.status_code == 500
    assert "server closed the connection" in response.json()["error"]


def test_unknown_route_uses_the_error_body(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
