from pathlib import Path

import pytest

from typed_response import TypedResponse
from typed_response.config import (
    ENV_DEBUG,
    ConfigError,
    Settings,
    configure,
    load_settings,
)


def test_defaults_without_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert load_settings(environ={}) == Settings(debug=False)


def test_reads_local_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "typed_response.toml").write_text(
        "[typed_response]\ndebug = true\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert load_settings(environ={}) == Settings(debug=True)


def test_explicit_path_without_table(tmp_path: Path) -> None:
    cfg = tmp_path / "other.toml"
    cfg.write_text("[something_else]\nx = 1\n", encoding="utf-8")
    assert load_settings(cfg, environ={}) == Settings()


def test_missing_explicit_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Missing config file"):
        load_settings(tmp_path / "nope.toml", environ={})


def test_malformed_toml_raises(tmp_path: Path) -> None:
    cfg = tmp_path / "bad.toml"
    cfg.write_text("[typed_response\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Malformed TOML"):
        load_settings(cfg, environ={})


@pytest.mark.parametrize(
    "body",
    [
        "typed_response = 1\n",
        '[typed_response]\ndebug = "yes"\n',
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str) -> None:
    cfg = tmp_path / "cfg.toml"
    cfg.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(cfg, environ={})


def test_unknown_keys_raise(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.toml"
    cfg.write_text('[typed_response]\njson_error_key = "detail"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="Unknown keys.*json_error_key"):
        load_settings(cfg, environ={})


def test_env_overrides_file(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.toml"
    cfg.write_text("[typed_response]\ndebug = true\n", encoding="utf-8")
    assert load_settings(cfg, environ={ENV_DEBUG: "off"}) == Settings(debug=False)


def test_invalid_env_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError, match="Invalid boolean"):
        load_settings(environ={ENV_DEBUG: "maybe"})


def test_configure_reads_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(ENV_DEBUG, "1")
    assert configure() == Settings(debug=True)


def test_json_error_key_is_chosen_per_call(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TYPED_RESPONSE_JSON_ERROR_KEY", "detail")
    configure(load_settings())

    resp = TypedResponse.from_status(200, b"not json")
    assert list(resp.into_json().unwrap()) == ["error"]
    assert list(resp.into_json(error_key="detail").unwrap()) == ["detail"]
