from .loader import ConfigError, EditorConfig, apply_env_overrides, load_config

__all__ = [
    "ConfigError",
    "EditorConfig",
    "apply_env_overrides",
    "load_config",
]
