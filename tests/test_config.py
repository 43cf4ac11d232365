"""Tests for settings merge and match document loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from screenref.core.config import (
    DEFAULT_SETTINGS_FILENAME,
    _deep_merge,
    load_document,
    load_settings,
    read_document,
)
from screenref.core.exceptions import ConfigError, ConfigLoadError, ConfigParseError
from screenref.core.models import Point, Rect

_DOCUMENT = {
    "sources": [
        {"name": "p", "geometry": [1, 2], "refs": ["white"]},
        {"name": "r", "geometry": [0, 0, 5, 5], "refs": ["img"]},
    ],
    "references": [
        {"name": "white", "spec": "color:#FFFFFF"},
        {"name": "img", "spec": "image:a.png"},
    ],
}

# ── Settings ──


class TestLoadSettings:
    def test_defaults_without_file(self) -> None:
        settings = load_settings(settings_path=Path("/nonexistent/screenref.yaml"))
        assert settings.strict_geometry is True

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / DEFAULT_SETTINGS_FILENAME
        path.write_text(
            yaml.dump({"dash_step": 3, "ocr_languages": ["eng", "deu"]}),
            encoding="utf-8",
        )
        settings = load_settings(settings_path=path)
        assert settings.dash_step == 3
        assert settings.ocr_languages == ["eng", "deu"]

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / DEFAULT_SETTINGS_FILENAME
        path.write_text("", encoding="utf-8")
        assert load_settings(settings_path=path).dash_step == 5

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / DEFAULT_SETTINGS_FILENAME
        path.write_text("dash_step: [invalid: yaml: {{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to parse YAML"):
            load_settings(settings_path=path)

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / DEFAULT_SETTINGS_FILENAME
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a YAML mapping"):
            load_settings(settings_path=path)

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / DEFAULT_SETTINGS_FILENAME
        path.write_text(yaml.dump({"dash_step": 3}), encoding="utf-8")
        monkeypatch.setenv("SCREENREF_DASH_STEP", "7")
        assert load_settings(settings_path=path).dash_step == 7

    def test_env_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCREENREF_STRICT_GEOMETRY", "false")
        assert load_settings().strict_geometry is False

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCREENREF_DASH_STEP", "7")
        assert load_settings(overrides={"dash_step": 9}).dash_step == 9

    def test_validation_error(self) -> None:
        with pytest.raises(ConfigError, match="Settings validation failed"):
            load_settings(overrides={"dash_step": 0})


class TestDeepMerge:
    def test_nested(self) -> None:
        merged = _deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}, "d": 4})
        assert merged == {"a": {"b": 1, "c": 3}, "d": 4}


# ── Documents ──


class TestLoadDocument:
    def test_json(self) -> None:
        doc = load_document(json.dumps(_DOCUMENT).encode())
        assert doc.sources[0].geometry == Point(x=1, y=2)
        assert doc.sources[1].geometry == Rect(x=0, y=0, width=5, height=5)
        assert [r.name for r in doc.references] == ["white", "img"]

    def test_yaml(self) -> None:
        doc = load_document(yaml.dump(_DOCUMENT))
        assert len(doc.sources) == 2

    def test_malformed(self) -> None:
        with pytest.raises(ConfigParseError):
            load_document(b'{"sources": [ {"name": ')

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a mapping"):
            load_document(b"[1, 2, 3]")

    def test_empty(self) -> None:
        with pytest.raises(ConfigParseError):
            load_document(b"")

    def test_schema_mismatch(self) -> None:
        with pytest.raises(ConfigParseError, match="validation failed"):
            load_document(json.dumps({"sources": [{"geometry": [1, 2]}]}))

    def test_invalid_geometry_strict(self) -> None:
        data = {"sources": [{"name": "bad", "geometry": [1, 2, 3]}]}
        with pytest.raises(ConfigParseError):
            load_document(json.dumps(data))

    def test_invalid_geometry_lenient(self) -> None:
        data = {"sources": [{"name": "bad", "geometry": [1, 2, 3]}]}
        doc = load_document(json.dumps(data), strict_geometry=False)
        assert doc.sources[0].geometry is None

    def test_unknown_tags_accepted(self) -> None:
        data = {"references": [{"name": "r", "spec": "bogus:x"}]}
        assert load_document(json.dumps(data)).references[0].spec == "bogus:x"


class TestReadDocument:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "refs.json"
        path.write_text(json.dumps(_DOCUMENT), encoding="utf-8")
        assert len(read_document(path).references) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            read_document(tmp_path / "noExist.json")
