"""
Custom Assertions for API Testing

Provides reusable assertion functions for validating API responses.
"""

import re


def assert_valid_address(address: str):
    """Assert that a string is a hex-encoded 28-byte principal"""
    assert re.match(r"^[0-9a-f]{56}$", address), f"Invalid address format: {address}"


def assert_successful_response(response, expected_keys: list[str] | None = None, expected_status: int = 200):
    """Assert that an API response is successful and contains expected keys"""
    assert response.status_code == expected_status, (
        f"Expected {expected_status}, got {response.status_code}: {response.text}"
    )

    data = response.json()

    if expected_keys:
        for key in expected_keys:
            assert key in data, f"Missing key '{key}' in response: {data.keys()}"

    return data


def assert_error_response(response, expected_status: int, error_message_contains: str | None = None):
    """Assert that an API response is an error with expected status and message"""
    assert response.status_code == expected_status, f"Expected {expected_status}, got {response.status_code}"

    data = response.json()
    assert "detail" in data, f"Error response missing 'detail' field: {data}"

    if error_message_contains:
        detail = str(data["detail"]).lower()
        assert error_message_contains.lower() in detail, (
            f"Expected '{error_message_contains}' in error message, got: {data['detail']}"
        )

    return data


def assert_engine_error(response, expected_status: int, error: str, category: str):
    """Assert that an engine failure was mapped with its class and category"""
    data = assert_error_response(response, expected_status)
    assert data["error"] == error, f"Expected {error}, got {data['error']}"
    assert data["category"] == category, f"Expected category {category}, got {data['category']}"
    return data
