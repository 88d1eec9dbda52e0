import pydantic
import pytest

from phraseforge.application.config import AppConfig, resolve_config


def test_defaults_live_under_home(mock_home):
    config = resolve_config()

    assert config.backend == "yaml"
    assert config.data_path == mock_home / ".config/phraseforge/phrases.yaml"
    assert config.stats_cache_ttl == 300.0
    assert config.seed_defaults is True


def test_env_overrides_defaults(mock_home, monkeypatch):
    monkeypatch.setenv("PHRASEFORGE_BACKEND", "memory")
    monkeypatch.setenv("PHRASEFORGE_STATS_CACHE_TTL", "5")

    config = resolve_config()

    assert config.backend == "memory"
    assert config.stats_cache_ttl == 5.0


def test_toml_file_is_loaded_and_paths_expanded(mock_home):
    config_dir = mock_home / ".config/phraseforge"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text(
        'backend = "memory"\ndata_path = "~/cards.yaml"\nseed_defaults = false\n'
    )

    config = resolve_config()

    assert config.backend == "memory"
    assert config.data_path == mock_home / "cards.yaml"
    assert config.seed_defaults is False


def test_fallback_dotfile(mock_home):
    (mock_home / ".phraseforge.toml").write_text("stats_cache_ttl = 42\n")

    assert resolve_config().stats_cache_ttl == 42.0


def test_priority_cli_over_env_over_file(mock_home, monkeypatch, tmp_path):
    (mock_home / ".phraseforge.toml").write_text('backend = "memory"\nstats_cache_ttl = 1\n')
    monkeypatch.setenv("PHRASEFORGE_STATS_CACHE_TTL", "2")

    config = resolve_config({"data_path": tmp_path / "cli.yaml", "backend": None})

    assert config.backend == "memory"  # file
    assert config.stats_cache_ttl == 2.0  # env
    assert config.data_path == tmp_path / "cli.yaml"  # cli


def test_invalid_values_rejected(mock_home):
    with pytest.raises(pydantic.ValidationError):
        AppConfig(backend="sqlite")
    with pytest.raises(pydantic.ValidationError):
        AppConfig(stats_cache_ttl=-1)
