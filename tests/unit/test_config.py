"""
Unit tests for YAML configuration loading
"""

import os
import sys
from unittest.mock import patch

import pytest

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from tile_deploy.config import DEFAULT_BASE_URL, DeployConfig, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            cfg = load_config(str(tmp_path / "absent.yaml"), cwd=tmp_path)
        assert cfg.repo_root == tmp_path.resolve()
        assert cfg.base_url == DEFAULT_BASE_URL
        assert cfg.gdal2tiles == "gdal2tiles.py"
        assert cfg.inspector == "gdalinfo"
        assert cfg.log_level == "INFO"

    def test_values_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TILE_DEPLOY_BASE_URL", raising=False)
        path = tmp_path / "deploy.yaml"
        path.write_text(
            "repo:\n"
            "  root: checkout\n"
            "publish:\n"
            "  base_url: https://example.org/tiles-repo/\n"
            "tools:\n"
            "  gdal2tiles: /opt/gdal/bin/gdal2tiles.py\n"
            "  git: /usr/bin/git\n"
            "  inspector: rasterio\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        cfg = load_config(str(path), cwd=tmp_path)
        assert cfg.repo_root == (tmp_path / "checkout").resolve()
        assert cfg.base_url == "https://example.org/tiles-repo"
        assert cfg.gdal2tiles == "/opt/gdal/bin/gdal2tiles.py"
        assert cfg.git == "/usr/bin/git"
        assert cfg.gdalinfo == "gdalinfo"
        assert cfg.inspector == "rasterio"
        assert cfg.log_level == "DEBUG"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "deploy.yaml"
        path.write_text("")
        cfg = load_config(str(path), cwd=tmp_path)
        assert cfg.repo_root == tmp_path.resolve()

    def test_env_base_url_when_file_silent(self, tmp_path):
        with patch.dict(os.environ, {"TILE_DEPLOY_BASE_URL": "https://mirror.example.org/farm"}):
            cfg = load_config(str(tmp_path / "absent.yaml"), cwd=tmp_path)
        assert cfg.base_url == "https://mirror.example.org/farm"

    def test_env_base_url_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "deploy.yaml"
        path.write_text("publish:\n  base_url: https://agnesfa.github.io/farm-tiles\n")
        monkeypatch.setenv("TILE_DEPLOY_BASE_URL", "https://mirror.example.org/farm")
        cfg = load_config(str(path), cwd=tmp_path)
        assert cfg.base_url == "https://mirror.example.org/farm"

    def test_flag_beats_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TILE_DEPLOY_BASE_URL", "https://mirror.example.org/farm")
        cfg = load_config(str(tmp_path / "absent.yaml"), cwd=tmp_path).with_overrides(base_url="https://flag.example.org/r")
        assert cfg.base_url == "https://flag.example.org/r"

    def test_unknown_inspector_rejected(self, tmp_path):
        path = tmp_path / "deploy.yaml"
        path.write_text("tools:\n  inspector: exiftool\n")
        with pytest.raises(ValueError, match="tools.inspector"):
            load_config(str(path), cwd=tmp_path)


class TestOverrides:
    def test_flags_replace_fields(self, tmp_path):
        cfg = DeployConfig(repo_root=tmp_path)
        out = cfg.with_overrides(repo_root=str(tmp_path / "other"), base_url="https://x.org/r/", log_level="DEBUG")
        assert out.repo_root == tmp_path / "other"
        assert out.base_url == "https://x.org/r"
        assert out.log_level == "DEBUG"

    def test_none_leaves_config_untouched(self, tmp_path):
        cfg = DeployConfig(repo_root=tmp_path)
        assert cfg.with_overrides() is cfg
