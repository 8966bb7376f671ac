"""
Unit tests for status-code mapping onto the error taxonomy.
"""

from __future__ import annotations

import pytest

from automation_client.errors import (
    ApiError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    raise_for_status,
)
from shared.test_helpers import make_response

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("status_code", [200, 201, 204])
def test_success_statuses_do_not_raise(status_code):
    raise_for_status(make_response(status_code))


@pytest.mark.parametrize(
    ("status_code", "error_class"),
    [
        (400, ValidationError),
        (401, UnauthorizedError),
        (404, NotFoundError),
    ],
)
def test_expected_statuses_map_to_typed_errors(status_code, error_class):
    """Test that each provoked status raises its own subclass."""
    # Arrange
    response = make_response(status_code, '{"Message": "nope"}')

    # Act
    with pytest.raises(error_class) as exc_info:
        raise_for_status(response)

    # Assert
    assert exc_info.value.status_code == status_code
    assert exc_info.value.body == '{"Message": "nope"}'


def test_other_errors_raise_base_api_error():
    with pytest.raises(ApiError) as exc_info:
        raise_for_status(make_response(500, "boom"))

    assert type(exc_info.value) is ApiError
    assert exc_info.value.status_code == 500


def test_error_message_names_request_and_status():
    """Test that the message carries method, URL, status and a body excerpt."""
    # Arrange
    response = make_response(
        404, "missing", method="DELETE", url="http://api.test/api/automation/companies/id/9"
    )

    # Act
    with pytest.raises(NotFoundError) as exc_info:
        raise_for_status(response)

    # Assert
    message = str(exc_info.value)
    assert "DELETE http://api.test/api/automation/companies/id/9" in message
    assert "'missing'" in message
    assert message.endswith("(HTTP 404)")


def test_long_bodies_are_truncated_in_message():
    response = make_response(500, "x" * 1000)

    with pytest.raises(ApiError) as exc_info:
        raise_for_status(response)

    assert len(str(exc_info.value)) < 400
    assert len(exc_info.value.body) == 1000
