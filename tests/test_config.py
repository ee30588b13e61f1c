"""
Configuration Tests
===================

YAML loading, environment overrides, and CLI overrides.
"""

import pytest
from pydantic import ValidationError

from asciicam.config import Settings, load_config
from asciicam.main import apply_args, build_parser, main


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "ASCIICAM_COLUMNS",
        "ASCIICAM_DENSITY",
        "ASCIICAM_CHARSET",
        "ASCIICAM_INVERT",
        "ASCIICAM_CAMERA_INDEX",
        "ASCIICAM_FPS",
        "ASCIICAM_DISPLAY",
        "ASCIICAM_PORT",
        "ASCIICAM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, clean_env, tmp_path):
        settings = load_config(str(tmp_path / "missing.yaml"))

        assert settings.render.columns == 120
        assert settings.render.density == 1.0
        assert settings.render.charset == "standard"
        assert settings.render.char_aspect == 2.0
        assert settings.clock.fps == 30.0
        assert settings.display.mode == "window"
        assert settings.server.enabled is False

    def test_yaml_file(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "render:\n"
            "  columns: 160\n"
            "  charset: blocks\n"
            "display:\n"
            "  mode: terminal\n"
        )
        settings = load_config(str(path))

        assert settings.render.columns == 160
        assert settings.render.charset == "blocks"
        assert settings.display.mode == "terminal"

    def test_env_overrides_yaml(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("render:\n  columns: 160\n")
        clean_env.setenv("ASCIICAM_COLUMNS", "90")
        clean_env.setenv("ASCIICAM_INVERT", "true")
        clean_env.setenv("ASCIICAM_FPS", "15")

        settings = load_config(str(path))

        assert settings.render.columns == 90
        assert settings.render.invert is True
        assert settings.clock.fps == 15.0

    def test_empty_charset_rejected(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("render:\n  charset: ''\n")
        with pytest.raises(ValidationError):
            load_config(str(path))

    def test_unknown_display_mode_rejected(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("display:\n  mode: hologram\n")
        with pytest.raises(ValidationError):
            load_config(str(path))

    def test_fractional_env_columns(self, clean_env, tmp_path):
        clean_env.setenv("ASCIICAM_COLUMNS", "90.5")
        settings = load_config(str(tmp_path / "missing.yaml"))
        assert settings.render.columns == 90.5


class TestCliOverrides:
    """Tests for apply_args."""

    def test_camera_index_source(self):
        args = build_parser().parse_args(["--source", "2", "--columns", "80", "--invert"])
        settings = apply_args(Settings(), args)

        assert settings.source.camera_index == 2
        assert settings.source.image_path is None
        assert settings.render.columns == 80
        assert settings.render.invert is True

    def test_image_source(self):
        args = build_parser().parse_args(["--source", "me.jpg", "--display", "terminal"])
        settings = apply_args(Settings(), args)

        assert settings.source.image_path == "me.jpg"
        assert settings.display.mode == "terminal"

    def test_unset_flags_keep_settings(self):
        base = Settings()
        settings = apply_args(base, build_parser().parse_args([]))
        assert settings == base

    def test_serve_and_port(self):
        args = build_parser().parse_args(["--serve", "--port", "9000"])
        settings = apply_args(Settings(), args)

        assert settings.server.enabled is True
        assert settings.server.port == 9000


class TestMainConfigErrors:
    """main() reports bad configuration with exit code 2."""

    def test_bad_env_number(self, clean_env, tmp_path):
        clean_env.setenv("ASCIICAM_COLUMNS", "abc")
        argv = ["--config", str(tmp_path / "missing.yaml"), "--display", "none"]
        assert main(argv) == 2

    def test_bad_env_display_mode(self, clean_env, tmp_path):
        clean_env.setenv("ASCIICAM_DISPLAY", "hologram")
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 2

    def test_bad_config_file(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("clock:\n  fps: -5\n")
        assert main(["--config", str(path), "--display", "none"]) == 2
