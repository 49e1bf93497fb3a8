import json

import pytest

from jwtgen.settings import DEFAULT_KEY_ID, GeneratorConfig, Settings, load_settings


def test_defaults_match_documented_flags():
    s = load_settings()
    assert s.ISSUER == "https://appleid.apple.com"
    assert s.AUDIENCE == "com.fake.fake.AppleSignIn"
    assert s.SUBJECT == "Test User"
    assert s.EMAIL == "test@example.com"
    assert s.KEY_ID == DEFAULT_KEY_ID == "86D88Kf"
    assert s.LOG_FILE is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("JWTGEN_ISSUER", "https://issuer.test")
    monkeypatch.setenv("JWTGEN_KEY_ID", "kid-env")
    s = Settings()
    assert s.ISSUER == "https://issuer.test"
    assert s.KEY_ID == "kid-env"


def test_env_names_are_case_sensitive(monkeypatch):
    monkeypatch.setenv("jwtgen_issuer", "https://lower.test")
    assert Settings().ISSUER == "https://appleid.apple.com"


def test_json_config_file(monkeypatch, tmp_path):
    cfg = tmp_path / "jwtgen.json"
    cfg.write_text(json.dumps({"audience": "com.example.app", "email": "file@example.com"}))
    monkeypatch.setenv("JWTGEN_CONFIG_FILE", str(cfg))
    s = Settings()
    assert s.AUDIENCE == "com.example.app"
    assert s.EMAIL == "file@example.com"
    assert s.SUBJECT == "Test User"


def test_toml_config_file_loses_to_env(monkeypatch, tmp_path):
    cfg = tmp_path / "jwtgen.toml"
    cfg.write_text('SUBJECT = "from-file"\nKEY_ID = "file-kid"\n')
    monkeypatch.setenv("JWTGEN_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("JWTGEN_SUBJECT", "from-env")
    s = Settings()
    assert s.SUBJECT == "from-env"
    assert s.KEY_ID == "file-kid"


def test_malformed_config_file_is_ignored(monkeypatch, tmp_path):
    cfg = tmp_path / "broken.json"
    cfg.write_text("{not json")
    monkeypatch.setenv("JWTGEN_CONFIG_FILE", str(cfg))
    assert Settings().ISSUER == "https://appleid.apple.com"


def test_missing_config_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("JWTGEN_CONFIG_FILE", str(tmp_path / "nope.toml"))
    assert Settings().EMAIL == "test@example.com"


def test_generator_config_is_frozen():
    from pydantic import ValidationError
    cfg = GeneratorConfig()
    with pytest.raises(ValidationError):
        cfg.expired = True


def test_generator_config_from_args_maps_empty_error_to_none():
    import argparse
    ns = argparse.Namespace(iss="i", aud="a", expired=True, sub="s", email="e", error="", pp=True, debug=False, kid="k")
    cfg = GeneratorConfig.from_args(ns)
    assert cfg.error is None
    assert (cfg.issuer, cfg.audience, cfg.subject, cfg.email, cfg.key_id) == ("i", "a", "s", "e", "k")
    assert cfg.expired and cfg.pretty and not cfg.debug
