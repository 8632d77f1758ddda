import copy
import yaml  # from PyYAML
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_CONFIG_FILENAMES = ["config.yaml", "config.yml"]

DEFAULT_APP_CONFIG: Dict[str, Any] = {
    "general": {
        "verbose": False,
    },
    "tools": {
        "otool_path": "otool",
        "install_name_tool_path": "install_name_tool",
        "cp_path": "cp",
    },
    "filtering": {
        # Libraries whose resolved path starts with this prefix are left alone.
        "system_library_prefix": "/usr/lib",
        "library_suffix": ".dylib",
        # Drop /usr/lib references that are not on disk (dyld shared cache on macOS 11+).
        "skip_missing_system_libraries": False,
    },
    "staging": {
        "file_mode": 0o644,  # rw-r--r-- on every staged copy
        "create_target_dir": True,
    },
}


def merge_configs(
    base_config: Dict[str, Any], user_config: Dict[str, Any]
) -> Dict[str, Any]:
    merged = base_config.copy()
    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def _restore_invalid_sections(config: Dict[str, Any], source: Path) -> Dict[str, Any]:
    # Built-in sections must stay mappings; "general:" left empty loads as None.
    for section, defaults in DEFAULT_APP_CONFIG.items():
        if not isinstance(config.get(section), dict):
            print(
                f"ConfigLoader Warning: Section '{section}' in {source} is not a mapping. Using defaults for it."
            )
            config[section] = copy.deepcopy(defaults)
    return config


def load_app_config(config_file_path: Optional[Path] = None) -> Dict[str, Any]:
    current_config = copy.deepcopy(DEFAULT_APP_CONFIG)

    file_to_load: Optional[Path] = None

    if config_file_path and config_file_path.is_file():
        file_to_load = config_file_path
    else:
        for filename in DEFAULT_CONFIG_FILENAMES:
            default_path = Path.cwd() / filename
            if default_path.is_file():
                file_to_load = default_path
                break

    if file_to_load:
        try:
            with open(file_to_load, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f)
            if isinstance(user_config, dict):
                current_config = merge_configs(current_config, user_config)
                current_config = _restore_invalid_sections(current_config, file_to_load)
            print(f"ConfigLoader: Loaded configuration from {file_to_load}")
        except yaml.YAMLError as e_yaml:
            print(
                f"ConfigLoader Warning: Error parsing YAML config file {file_to_load}: {e_yaml}. Using defaults."
            )
        except OSError as e_io:
            print(
                f"ConfigLoader Warning: Error reading config file {file_to_load}: {e_io}. Using defaults."
            )

    return current_config


def get_default_config_yaml_example() -> str:
    return yaml.dump(DEFAULT_APP_CONFIG, sort_keys=False, indent=2)
