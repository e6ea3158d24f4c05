"""Tests for specrefresh.normalizer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specrefresh.errors import FormatError
from specrefresh.models import SpecDocument
from specrefresh.normalizer import SpecNormalizer, format_json

SAMPLE_SPEC = (
    '{"openapi":"3.0.1","info":{"title":"TrustedForm","version":"4.0"},'
    '"paths":{"/certificates/{id}":{"get":{"operationId":"getCertificate",'
    '"responses":{"200":{"description":"OK"}}}}},"components":{}}'
)


def test_format_json_is_idempotent() -> None:
    once = format_json(SAMPLE_SPEC)
    twice = format_json(once)

    assert once == twice


def test_format_json_indents_and_keeps_member_order() -> None:
    formatted = format_json('{"zeta": 1, "alpha": {"b": 2, "a": 3}}')

    assert formatted == '{\n  "zeta": 1,\n  "alpha": {\n    "b": 2,\n    "a": 3\n  }\n}\n'


def test_format_json_preserves_content() -> None:
    formatted = format_json(SAMPLE_SPEC)

    assert json.loads(formatted) == json.loads(SAMPLE_SPEC)


def test_format_json_keeps_non_ascii_text() -> None:
    formatted = format_json('{"description": "Zertifikat für Käufer"}')

    assert "für Käufer" in formatted


def test_format_json_rejects_malformed_input() -> None:
    with pytest.raises(FormatError):
        format_json("<html>not json</html>")


def test_normalize_writes_new_file_and_leaves_input(tmp_path: Path) -> None:
    raw = tmp_path / "raw.json"
    raw.write_text(SAMPLE_SPEC, encoding="utf-8")

    result = SpecNormalizer().normalize(SpecDocument(path=raw, content=SAMPLE_SPEC))

    assert result.path != raw
    assert result.path.exists()
    assert raw.read_text(encoding="utf-8") == SAMPLE_SPEC
    assert result.path.read_text(encoding="utf-8") == result.content
    assert result.content == format_json(SAMPLE_SPEC)


def test_normalize_accepts_plain_path_with_bom(tmp_path: Path) -> None:
    raw = tmp_path / "raw.json"
    raw.write_bytes(b"\xef\xbb\xbf" + SAMPLE_SPEC.encode("utf-8"))

    result = SpecNormalizer().normalize(raw)

    assert json.loads(result.content)["info"]["title"] == "TrustedForm"


def test_normalize_reports_source_on_format_error(tmp_path: Path) -> None:
    raw = tmp_path / "raw.json"
    raw.write_text("{ broken", encoding="utf-8")

    with pytest.raises(FormatError) as excinfo:
        SpecNormalizer().normalize(raw)

    assert excinfo.value.source == str(raw)
    assert raw.exists()


def test_renormalizing_output_is_byte_identical(tmp_path: Path) -> None:
    raw = tmp_path / "raw.json"
    raw.write_text(SAMPLE_SPEC, encoding="utf-8")
    normalizer = SpecNormalizer()

    first = normalizer.normalize(raw)
    second = normalizer.normalize(first.path)

    assert first.path.read_bytes() == second.path.read_bytes()


def test_normalize_rejects_undecodable_bytes(tmp_path: Path) -> None:
    raw = tmp_path / "raw.json"
    raw.write_bytes(b'{"a": "\xff\xfe"}')

    with pytest.raises(FormatError) as excinfo:
        SpecNormalizer().normalize(raw)

    assert excinfo.value.source == str(raw)
    assert "UTF-8" in str(excinfo.value)
