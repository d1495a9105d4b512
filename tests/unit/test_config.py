"""Unit tests for renderer configuration loading."""

import pytest

from folio.contexts.rendering import config as config_module
from folio.contexts.rendering.config import RendererConfig, load_renderer_config


@pytest.mark.unit
def test_defaults_without_config_file(monkeypatch):
    monkeypatch.setattr(config_module, "RENDERER_CONFIG_PATH", None)

    config = load_renderer_config()

    assert isinstance(config, RendererConfig)
    assert config == RendererConfig()
    assert config.autoescape is True
    assert config.strict_undefined is False


@pytest.mark.unit
def test_yaml_values_override_defaults(tmp_path):
    config_file = tmp_path / "renderer.yaml"
    config_file.write_text("strict_undefined: true\nautoescape: false\n")

    config = load_renderer_config(config_file)

    assert config.strict_undefined is True
    assert config.autoescape is False
    assert config.keep_trailing_newline is True


@pytest.mark.unit
def test_env_variable_points_at_config(tmp_path, monkeypatch):
    config_file = tmp_path / "renderer.yaml"
    config_file.write_text("trim_blocks: true\n")
    monkeypatch.setattr(config_module, "RENDERER_CONFIG_PATH", str(config_file))

    assert load_renderer_config().trim_blocks is True


@pytest.mark.unit
def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_renderer_config(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_environment_options():
    options = RendererConfig(lstrip_blocks=True).environment_options()

    assert options == {
        "autoescape": True,
        "trim_blocks": False,
        "lstrip_blocks": True,
        "keep_trailing_newline": True,
    }
