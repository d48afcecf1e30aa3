"""
Unit Tests for Resource Value Objects

Tests identifier validation, path traversal detection and sharding.
"""

from pathlib import Path

import pytest

from private_resources.domain.resources.value_objects import (
    InvalidResourceIdentifierError,
    ResourceIdentifier,
    ResourceMetadata,
    contains_path_traversal,
)

from tests.fixtures import SAMPLE_IDENTIFIER


class TestContainsPathTraversal:
    @pytest.mark.parametrize(
        "value",
        ["", ".", "..", "../etc", "..hidden", "a/b", "a\\b", "a\x00b", "c:file", "/abs"],
    )
    def test_detects_traversal(self, value):
        assert contains_path_traversal(value) is True

    @pytest.mark.parametrize("value", [SAMPLE_IDENTIFIER, "file.txt", "a.b.c"])
    def test_accepts_plain_names(self, value):
        assert contains_path_traversal(value) is False


class TestResourceIdentifier:
    def test_valid_identifier(self):
        identifier = ResourceIdentifier(SAMPLE_IDENTIFIER)
        assert identifier.value == SAMPLE_IDENTIFIER
        assert str(identifier) == SAMPLE_IDENTIFIER

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "abcd",
            "a" * 41,
            "ABCD1234" + "5" * 32,
            "g" * 40,
            "../" + "a" * 37,
            "a" * 20 + "/" + "a" * 19,
        ],
    )
    def test_invalid_identifier(self, value):
        with pytest.raises(InvalidResourceIdentifierError):
            ResourceIdentifier(value)

    def test_non_string_identifier(self):
        with pytest.raises(InvalidResourceIdentifierError, match="expected str"):
            ResourceIdentifier(1234)

    def test_shard_parts(self):
        identifier = ResourceIdentifier(SAMPLE_IDENTIFIER)
        assert identifier.shard_parts() == ("a", "b", "c", "d", SAMPLE_IDENTIFIER)

    def test_shard_path(self):
        identifier = ResourceIdentifier(SAMPLE_IDENTIFIER)
        assert identifier.shard_path(Path("/data")) == Path("/data/a/b/c/d", SAMPLE_IDENTIFIER)

    def test_identifier_is_immutable(self):
        identifier = ResourceIdentifier(SAMPLE_IDENTIFIER)
        with pytest.raises(AttributeError):
            identifier.value = "0" * 40


class TestResourceMetadata:
    def test_round_trips_through_dict(self):
        metadata = ResourceMetadata(SAMPLE_IDENTIFIER, "image/png", "logo.png", 512)
        assert ResourceMetadata.from_dict(metadata.to_dict()) == metadata

    def test_missing_media_type_defaults_to_octet_stream(self):
        metadata = ResourceMetadata.from_dict(
            {"sha1": SAMPLE_IDENTIFIER, "filename": "blob", "file_size": "10"}
        )
        assert metadata.media_type == "application/octet-stream"
        assert metadata.file_size == 10
