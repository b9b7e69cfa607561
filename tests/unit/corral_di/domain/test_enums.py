"""Unit tests for domain enums."""

import pytest

from corral_di.domain.enums import ConstructionStrategy


class TestConstructionStrategyEnum:
    """Test cases for the ConstructionStrategy enum."""

    def test_default_constructor_value(self):
        """Test that DEFAULT_CONSTRUCTOR has correct string value."""
        assert ConstructionStrategy.DEFAULT_CONSTRUCTOR.value == "default_constructor"

    def test_factory_function_value(self):
        """Test that FACTORY_FUNCTION has correct string value."""
        assert ConstructionStrategy.FACTORY_FUNCTION.value == "factory_function"

    def test_prebuilt_instance_value(self):
        """Test that PREBUILT_INSTANCE has correct string value."""
        assert ConstructionStrategy.PREBUILT_INSTANCE.value == "prebuilt_instance"

    def test_strategy_from_value(self):
        """Test that a strategy can be created from its string value."""
        assert ConstructionStrategy("factory_function") == ConstructionStrategy.FACTORY_FUNCTION

    def test_invalid_strategy_value_raises_error(self):
        """Test that an invalid value raises ValueError."""
        with pytest.raises(ValueError):
            ConstructionStrategy("lazy_proxy")

    def test_str_returns_value(self):
        """Test that str() renders the plain value."""
        assert str(ConstructionStrategy.PREBUILT_INSTANCE) == "prebuilt_instance"

    def test_strategy_members(self):
        """Test that exactly three strategies exist."""
        assert len(ConstructionStrategy) == 3
