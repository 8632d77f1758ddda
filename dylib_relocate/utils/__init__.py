from .config_loader import load_app_config, merge_configs, DEFAULT_APP_CONFIG, get_default_config_yaml_example

__all__ = [
    "load_app_config",
    "merge_configs",
    "DEFAULT_APP_CONFIG",
    "get_default_config_yaml_example"
]
