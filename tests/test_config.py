import json
from pathlib import Path

import pytest

from esimports.modules.core.config import (
    CONFIG_FILENAME,
    QUOTE_ENV,
    RenderConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def _clear_quote_env(monkeypatch):
    monkeypatch.delenv(QUOTE_ENV, raising=False)


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == RenderConfig(quote="'", semicolons=True)


def test_config_file_is_read(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"quote": "double", "semicolons": False}))

    config = load_config(tmp_path)

    assert config.quote == '"'
    assert config.semicolons is False


def test_invalid_json_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("{not json")

    assert load_config(tmp_path) == RenderConfig()


def test_non_object_json_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("[1, 2]")

    assert load_config(tmp_path) == RenderConfig()


def test_unknown_quote_style_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"quote": "backtick"}))

    assert load_config(tmp_path) == RenderConfig()


def test_environment_overrides_quote(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"semicolons": False}))
    monkeypatch.setenv(QUOTE_ENV, "double")

    config = load_config(tmp_path)

    assert config == RenderConfig(quote='"', semicolons=False)


def test_invalid_environment_value_ignored(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(QUOTE_ENV, "fancy")

    assert load_config(tmp_path) == RenderConfig()


def test_render_config_rejects_unknown_quote() -> None:
    with pytest.raises(ValueError):
        RenderConfig(quote="`")


def test_from_style() -> None:
    assert RenderConfig.from_style("single") == RenderConfig()
    with pytest.raises(ValueError):
        RenderConfig.from_style("triple")


@pytest.mark.parametrize("value", ["false", 0, None])
def test_non_boolean_semicolons_fall_back_to_defaults(tmp_path: Path, value) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"quote": "double", "semicolons": value}))

    assert load_config(tmp_path) == RenderConfig()


def test_render_config_rejects_non_boolean_semicolons() -> None:
    with pytest.raises(ValueError):
        RenderConfig(semicolons="false")
