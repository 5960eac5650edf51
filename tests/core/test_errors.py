"""Error Hierarchy: status codes and response envelopes."""

from catalog.core.errors import (
    CatalogError,
    DatabaseError,
    ErrorCategory,
    InvalidInputError,
    PlayerNotFoundError,
    ResourceNotFoundError,
)


def test_invalid_input_is_400_with_fields():
    err = InvalidInputError("Invalid player", ["name", "experience"])
    assert err.http_status == 400
    assert err.category == ErrorCategory.VALIDATION
    body = err.to_response()["error"]
    assert body["code"] == "INVALID_INPUT"
    assert body["fields"] == ["name", "experience"]


def test_player_not_found_is_404():
    err = PlayerNotFoundError(42)
    assert isinstance(err, ResourceNotFoundError)
    assert err.http_status == 404
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Player '42' not found"
    assert body["context"]["player_id"] == 42


def test_database_error_is_503_critical():
    err = DatabaseError("Connection or operational error", "execute")
    assert err.http_status == 503
    assert err.to_response()["error"]["severity"] == "critical"
    assert "execute" in err.message


def test_all_errors_share_base():
    for err in (
        InvalidInputError("x"), PlayerNotFoundError(1), DatabaseError("x", "y"),
    ):
        assert isinstance(err, CatalogError)
