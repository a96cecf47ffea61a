"""Tests for domain exception payloads."""

from shiptrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    StoreUnavailableException,
    UserAlreadyExistsException,
    ValidationException,
)


def test_not_found_payload() -> None:
    exc = ResourceNotFoundException("order", "o1")
    assert exc.to_dict() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "Order not found",
        "details": {"resource_type": "order", "resource_id": "o1"},
    }


def test_authorization_with_role() -> None:
    exc = AuthorizationException(required_role="ADMIN")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: requires role ADMIN"
    assert exc.details == {"required_role": "ADMIN"}


def test_user_already_exists_is_conflict() -> None:
    exc = UserAlreadyExistsException()
    assert isinstance(exc, ConflictException)
    assert exc.error_code == "CONFLICT"


def test_validation_field() -> None:
    assert ValidationException("bad", field="email").details == {"field": "email"}
    assert ValidationException("bad").details == {}


def test_store_unavailable_reason_is_optional() -> None:
    exc = StoreUnavailableException("cache", "set")
    assert exc.message == "cache unavailable during set"
    assert "reason" not in exc.details
    assert StoreUnavailableException("cache", "set", "timeout").details["reason"] == "timeout"
