"""Unit tests for identifier and class reference helpers."""

import argparse
import logging

import pytest

from corral_di.domain.references import describe, identifier_key, locate_class


class TestIdentifierKey:
    """Test cases for identifier_key."""

    def test_string_is_used_verbatim(self):
        """Test that string identifiers are not changed."""
        assert identifier_key("mailer") == "mailer"

    def test_class_maps_to_module_and_qualname(self):
        """Test that a class maps to its dotted name."""
        assert identifier_key(argparse.Namespace) == "argparse.Namespace"

    def test_local_class_key_is_unique_per_scope(self):
        """Test that local classes include their enclosing scope."""

        class Service:
            pass

        key = identifier_key(Service)

        assert key.startswith(Service.__module__)
        assert key.endswith("<locals>.Service")

    def test_invalid_identifier_raises(self):
        """Test that anything else is rejected."""
        with pytest.raises(TypeError):
            identifier_key(42)


class TestLocateClass:
    """Test cases for locate_class."""

    def test_class_is_returned(self):
        """Test that a class is returned unchanged."""
        assert locate_class(argparse.Namespace) is argparse.Namespace

    def test_dotted_path(self):
        """Test locating a class by dotted path."""
        assert locate_class("logging.Formatter") is logging.Formatter

    def test_colon_path(self):
        """Test locating a class with a module:attribute path."""
        assert locate_class("logging:Formatter") is logging.Formatter

    def test_unknown_module_raises_import_error(self):
        """Test that an unknown module raises ImportError."""
        with pytest.raises(ImportError):
            locate_class("corral_di_missing_module.Service")

    def test_unknown_attribute_raises_attribute_error(self):
        """Test that an unknown attribute raises AttributeError."""
        with pytest.raises(AttributeError):
            locate_class("logging.NoSuchFormatter")

    def test_bare_name_raises_type_error(self):
        """Test that a string without a module part is rejected."""
        with pytest.raises(TypeError):
            locate_class("missing")

    def test_non_class_attribute_raises_type_error(self):
        """Test that a dotted path to a function is rejected."""
        with pytest.raises(TypeError, match="does not name a class"):
            locate_class("logging.getLogger")


class TestDescribe:
    """Test cases for describe."""

    def test_describe_class(self):
        """Test describing a class."""
        assert describe(argparse.Namespace) == "argparse.Namespace"

    def test_describe_string(self):
        """Test describing a string identifier."""
        assert describe("mailer") == "mailer"
