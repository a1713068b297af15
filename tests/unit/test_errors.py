"""Unit tests for the Bella error hierarchy."""

import pytest

from bella.core.errors import BellaError, CatalogError, ConfigError, ValidatorNotFoundError


def test_message_without_context():
    error = BellaError("Something failed")

    assert str(error) == "Something failed"
    assert error.context == {}


def test_context_is_rendered_into_message():
    """Test keyword context is kept and formatted"""
    # Act
    error = CatalogError("Unknown step", task="loan", step="NOPE")

    # Assert
    assert error.message == "Unknown step"
    assert error.context == {"task": "loan", "step": "NOPE"}
    assert str(error) == "Unknown step (task=loan, step=NOPE)"


@pytest.mark.parametrize("error_class", [ConfigError, CatalogError, ValidatorNotFoundError])
def test_subclasses_share_base(error_class):
    """Test all errors can be caught as BellaError"""
    with pytest.raises(BellaError):
        raise error_class("boom")
