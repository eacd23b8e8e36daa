"""Config package - configuration loading and render option normalization."""

from .loader import load_config, get_config_path, build_render_config, DEFAULT_CONFIG

__all__ = ["load_config", "get_config_path", "build_render_config", "DEFAULT_CONFIG"]
