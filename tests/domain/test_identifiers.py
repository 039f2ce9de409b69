"""Tests for compact identifier canonicalization."""

import uuid

import pytest

from core.domain.identifiers import canonicalize_identifier, coerce_identifier, compact_identifier
from core.errors import FormatError, ValidationError


class TestCanonicalizeIdentifier:
    def test_inserts_hyphens_in_8_4_4_4_12_groups(self) -> None:
        uid = canonicalize_identifier("61699b2ed3274a019f1e0ea8c3f06bc6")
        assert str(uid) == "61699b2e-d327-4a01-9f1e-0ea8c3f06bc6"

    @pytest.mark.parametrize(
        "compact",
        [
            "61699b2ed3274a019f1e0ea8c3f06bc6",
            "00000000000000000000000000000000",
            "ffffffffffffffffffffffffffffffff",
            uuid.UUID(int=0x0123456789ABCDEF0123456789ABCDEF).hex,
        ],
    )
    def test_removing_hyphens_reproduces_input(self, compact: str) -> None:
        assert str(canonicalize_identifier(compact)).replace("-", "") == compact

    def test_uppercase_hex_is_accepted(self) -> None:
        uid = canonicalize_identifier("61699B2ED3274A019F1E0EA8C3F06BC6")
        assert compact_identifier(uid) == "61699b2ed3274a019f1e0ea8c3f06bc6"

    @pytest.mark.parametrize(
        "compact",
        [
            "",
            "61699b2ed3274a019f1e0ea8c3f06bc",
            "61699b2ed3274a019f1e0ea8c3f06bc6a",
            "61699b2e-d327-4a01-9f1e-0ea8c3f06bc6",
        ],
    )
    def test_wrong_length_fails(self, compact: str) -> None:
        with pytest.raises(FormatError, match="length"):
            canonicalize_identifier(compact)

    @pytest.mark.parametrize(
        "compact",
        [
            "61699b2ed3274a019f1e0ea8c3f06bcg",
            "61699b2e_d3274a019f1e0ea8c3f06bc",
            " 1699b2ed3274a019f1e0ea8c3f06bc6",
            "{1699b2ed3274a019f1e0ea8c3f06bc}",
        ],
    )
    def test_non_hex_fails(self, compact: str) -> None:
        with pytest.raises(FormatError, match="not hexadecimal"):
            canonicalize_identifier(compact)

    def test_non_string_fails(self) -> None:
        with pytest.raises(FormatError):
            canonicalize_identifier(1234)  # type: ignore[arg-type]

    def test_format_error_is_a_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            canonicalize_identifier("nope")


class TestCoerceIdentifier:
    def test_uuid_passes_through(self) -> None:
        uid = uuid.uuid4()
        assert coerce_identifier(uid) is uid

    def test_accepts_compact_and_hyphenated_forms(self) -> None:
        expected = uuid.UUID("61699b2e-d327-4a01-9f1e-0ea8c3f06bc6")
        assert coerce_identifier("61699b2ed3274a019f1e0ea8c3f06bc6") == expected
        assert coerce_identifier("61699b2e-d327-4a01-9f1e-0ea8c3f06bc6") == expected

    def test_misplaced_hyphens_fail(self) -> None:
        with pytest.raises(FormatError):
            coerce_identifier("61699b2ed-327-4a01-9f1e-0ea8c3f06bc6")
