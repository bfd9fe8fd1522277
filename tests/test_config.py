import importlib
import os

from cropyield import config


def test_env_file_overrides_defaults(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text(
        "CROPYIELD_LOG_LEVEL=debug\nCROPYIELD_CORS_ORIGINS=http://a.test, http://b.test\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CROPYIELD_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CROPYIELD_CORS_ORIGINS", raising=False)

    try:
        importlib.reload(config)
        assert config.LOG_LEVEL == "DEBUG"
        assert config.CORS_ORIGINS == ["http://a.test", "http://b.test"]
    finally:
        os.environ.pop("CROPYIELD_LOG_LEVEL", None)
        os.environ.pop("CROPYIELD_CORS_ORIGINS", None)
        monkeypatch.undo()
        importlib.reload(config)


def test_defaults_without_env_file():
    assert config.DECIMAL_PLACES == 2
    assert config.YIELD_UNIT == "quintals"
