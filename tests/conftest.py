"""
Shared pytest fixtures and utilities for testing numkernel values.

This module provides:
- Utilities for testing Pydantic validation of value payloads
- A settings override fixture for the cached configuration
- Helpers for checking representation tags and canonical text
"""

import pytest
from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError

from numkernel.core.config import Settings


T = TypeVar('T', bound=BaseModel)


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
        expected_type: str | None = None,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to pass to model
            expected_field: Expected field name in error (optional)
            expected_type: Expected error type (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(**data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'] and e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        if expected_type:
            assert any(
                expected_type in str(e['type']).lower() for e in error.errors()
            ), f"Expected error type containing '{expected_type}' not found"

        return error

    return _assert_validation


@pytest.fixture
def override_settings(monkeypatch):
    """Replace the cached settings for the duration of a test."""
    def _override(**values: Any) -> Settings:
        custom = Settings(**values)
        for module in (
            "numkernel.math.numeric",
            "numkernel.math.integer",
            "numkernel.math.parser",
            "numkernel.math.formatter",
            "numkernel.math.transcendental",
        ):
            monkeypatch.setattr(f"{module}.get_settings", lambda: custom)
        return custom

    return _override


@pytest.fixture
def assert_text():
    """Helper asserting a value's canonical text and that it parses back equal."""
    def _assert_text(value, expected: str) -> None:
        from numkernel.math.value import to_number

        assert value.to_string() == expected
        assert to_number(expected) == value

    return _assert_text


pytestmark = [
    pytest.mark.filterwarnings("ignore::DeprecationWarning"),
]
