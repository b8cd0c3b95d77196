import os
from pathlib import Path

import pytest

from git_files_changed.config import (
    BASE_REF_ENV,
    CONFIG_FILENAME,
    HEAD_REF_ENV,
    apply_overrides,
    load_config,
    load_env_file,
)
from git_files_changed.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(HEAD_REF_ENV, raising=False)
    monkeypatch.delenv(BASE_REF_ENV, raising=False)


def test_defaults_without_config(tmp_path: Path):
    cfg = load_config(None, tmp_path)
    assert (cfg.head_ref, cfg.base_ref) == ("HEAD", "main")
    assert cfg.include_paths == []
    assert cfg.exclude_paths == []


def test_config_file_discovered_in_root(tmp_path: Path):
    (tmp_path / CONFIG_FILENAME).write_text(
        "\n".join(
            [
                "base_ref: origin/main",
                "include_paths:",
                "  - services/api/**",
                "exclude_paths:",
                "  - '*.md'",
            ]
        )
    )
    cfg = load_config(None, tmp_path)
    assert cfg.head_ref == "HEAD"
    assert cfg.base_ref == "origin/main"
    assert cfg.include_paths == ["services/api/**"]
    assert cfg.exclude_paths == ["*.md"]


def test_explicit_config_path_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yml"))


def test_config_rejects_non_list_paths(tmp_path: Path):
    cfg_path = tmp_path / "c.yml"
    cfg_path.write_text("include_paths: services/**\n")
    with pytest.raises(ConfigError):
        load_config(str(cfg_path))


def test_config_rejects_non_mapping(tmp_path: Path):
    cfg_path = tmp_path / "c.yml"
    cfg_path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(str(cfg_path))


def test_config_rejects_invalid_yaml(tmp_path: Path):
    cfg_path = tmp_path / "c.yml"
    cfg_path.write_text("base_ref: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(str(cfg_path))


def test_overrides_precedence(monkeypatch, tmp_path: Path):
    cfg_path = tmp_path / "c.yml"
    cfg_path.write_text("head_ref: release\nbase_ref: develop\nexclude_paths: ['docs/**']\n")
    cfg = load_config(str(cfg_path))

    monkeypatch.setenv(BASE_REF_ENV, "origin/main")
    out = apply_overrides(cfg, head_ref="feature", exclude=["*.lock"])

    assert out.head_ref == "feature"
    assert out.base_ref == "origin/main"
    assert out.exclude_paths == ["docs/**", "*.lock"]
    assert cfg.exclude_paths == ["docs/**"]


def test_load_env_file_does_not_override(monkeypatch, tmp_path: Path):
    env = tmp_path / ".env"
    env.write_text(f"# refs\n{HEAD_REF_ENV}=from-file\n{BASE_REF_ENV}='develop'\n")
    monkeypatch.setenv(HEAD_REF_ENV, "from-env")
    # registers BASE_REF_ENV with monkeypatch so the value loaded below is undone
    monkeypatch.setenv(BASE_REF_ENV, "placeholder")
    monkeypatch.delenv(BASE_REF_ENV)

    load_env_file(env)

    assert os.environ[HEAD_REF_ENV] == "from-env"
    assert os.environ[BASE_REF_ENV] == "develop"


def test_config_rejects_unquoted_numeric_ref(tmp_path: Path):
    cfg_path = tmp_path / "c.yml"
    # YAML 1.1 reads an all-digit short hash with a leading zero as octal
    cfg_path.write_text("base_ref: 0012345\n")
    with pytest.raises(ConfigError, match="quote"):
        load_config(str(cfg_path))

    cfg_path.write_text("base_ref: '0012345'\n")
    assert load_config(str(cfg_path)).base_ref == "0012345"
