"""
Unit Tests for TokenCodec

Tests decoding of authenticated payload segments into TokenPayload.
"""

import base64
import json

import pytest

from private_resources.domain.errors import MalformedPayloadError
from private_resources.domain.resources.value_objects import ResourceIdentifier
from private_resources.domain.tokens.codec import TokenCodec

from tests.fixtures import SAMPLE_IDENTIFIER, create_payload, encode_payload


def _encode_raw(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii")


class TestTokenCodec:
    def setup_method(self):
        self.codec = TokenCodec()

    def test_decode_unbound_unexpiring_payload(self):
        payload = self.codec.decode(encode_payload(create_payload(SAMPLE_IDENTIFIER)))

        assert payload.resource_identifier == ResourceIdentifier(SAMPLE_IDENTIFIER)
        assert payload.expiration_date_time is None
        assert payload.security_context_hash is None

    def test_decode_all_fields(self):
        encoded = encode_payload(
            create_payload(SAMPLE_IDENTIFIER, "2099-01-01T00:00:00Z", "ctx-hash")
        )
        payload = self.codec.decode(encoded)

        assert payload.expiration_date_time == "2099-01-01T00:00:00Z"
        assert payload.security_context_hash == "ctx-hash"

    def test_decode_accepts_standard_alphabet_with_padding(self):
        raw = json.dumps(create_payload(SAMPLE_IDENTIFIER)).encode("utf-8")
        encoded = base64.b64encode(raw).decode("ascii")
        assert self.codec.decode(encoded).resource_identifier.value == SAMPLE_IDENTIFIER

    def test_decode_treats_null_fields_as_absent(self):
        encoded = encode_payload({
            "resourceIdentifier": SAMPLE_IDENTIFIER,
            "expirationDateTime": None,
            "securityContextHash": None,
        })
        payload = self.codec.decode(encoded)
        assert payload.expiration_date_time is None
        assert payload.security_context_hash is None

    def test_decode_ignores_unknown_fields(self):
        encoded = encode_payload({"resourceIdentifier": SAMPLE_IDENTIFIER, "issuer": "cms"})
        assert self.codec.decode(encoded).resource_identifier.value == SAMPLE_IDENTIFIER

    def test_invalid_base64_is_malformed(self):
        with pytest.raises(MalformedPayloadError) as exc_info:
            self.codec.decode("!!!not base64!!!")
        assert exc_info.value.code == 1429696251

    def test_invalid_json_is_malformed(self):
        with pytest.raises(MalformedPayloadError, match="JSON"):
            self.codec.decode(_encode_raw(b"{not json"))

    def test_invalid_utf8_is_malformed(self):
        with pytest.raises(MalformedPayloadError):
            self.codec.decode(_encode_raw(b"\xff\xfe\xfd"))

    @pytest.mark.parametrize("document", [[], "string", 42, None])
    def test_non_object_json_is_malformed(self, document):
        with pytest.raises(MalformedPayloadError, match="JSON object"):
            self.codec.decode(encode_payload(document))

    def test_missing_identifier_is_malformed(self):
        with pytest.raises(MalformedPayloadError, match="resourceIdentifier"):
            self.codec.decode(encode_payload({"expirationDateTime": "2099-01-01T00:00:00Z"}))

    @pytest.mark.parametrize(
        "identifier",
        [
            "../../etc/passwd",
            "abc/def",
            "ABCD1234" + "5" * 32,
            "abcd",
            12345,
            "a" * 39 + "\x00",
        ],
    )
    def test_invalid_identifier_is_malformed(self, identifier):
        with pytest.raises(MalformedPayloadError):
            self.codec.decode(encode_payload({"resourceIdentifier": identifier}))

    def test_non_string_expiration_is_malformed(self):
        encoded = encode_payload({"resourceIdentifier": SAMPLE_IDENTIFIER, "expirationDateTime": 4102444800})
        with pytest.raises(MalformedPayloadError, match="expirationDateTime"):
            self.codec.decode(encoded)

    def test_non_string_context_hash_is_malformed(self):
        encoded = encode_payload({"resourceIdentifier": SAMPLE_IDENTIFIER, "securityContextHash": ["a"]})
        with pytest.raises(MalformedPayloadError, match="securityContextHash"):
            self.codec.decode(encoded)
