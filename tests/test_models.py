"""Tests for the pin domain models."""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from pinboard_poster import ErrorKind, PinConfig, PinResult


class TestPinConfigBuilder:
    """Tests for PinConfig.builder()."""

    def test_mandatory_fields(self):
        config = PinConfig.builder("https://example.com", "Example Description").build()

        assert config.url == "https://example.com"
        assert config.description == "Example Description"
        assert config.extended == ""
        assert config.tags == ()
        assert config.dt is None
        assert config.replace is True
        assert config.shared is True
        assert config.to_read is False

    def test_all_fields(self):
        dt = datetime(1997, 8, 29, 6, 14, tzinfo=timezone.utc)
        config = (
            PinConfig.builder("https://example.com", "Example")
            .url("https://new-url.com")
            .description("Updated")
            .extended("Extended description for testing")
            .tags("tag1", "tag2", "tag3")
            .dt(dt)
            .replace(False)
            .shared(False)
            .to_read(True)
            .build()
        )

        assert config.url == "https://new-url.com"
        assert config.description == "Updated"
        assert config.extended == "Extended description for testing"
        assert config.tags == ("tag1", "tag2", "tag3")
        assert config.dt == dt
        assert config.replace is False
        assert config.shared is False
        assert config.to_read is True


class TestPinConfig:
    def test_frozen(self):
        config = PinConfig(url="https://example.com", description="Example")
        with pytest.raises(ValidationError):
            config.url = "https://other.com"

    def test_tags_from_string(self):
        config = PinConfig(url="https://example.com", description="x", tags="test  java")
        assert config.tags == ("test", "java")

    def test_blank_tags_dropped(self):
        config = PinConfig(url="https://example.com", description="x", tags=["a", " ", "", " b "])
        assert config.tags == ("a", "b")

    def test_empty_fields_allowed(self):
        # Rejected by the poster at call time, not at construction.
        config = PinConfig(url="", description="")
        assert config.url == ""


class TestPinResult:
    def test_truthiness(self):
        assert PinResult(ok=True)
        assert not PinResult(ok=False, error=ErrorKind.TRANSPORT)
