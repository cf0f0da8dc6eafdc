from typing import Dict, Any, List
import logging

logger = logging.getLogger(__name__)

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigValidator:
    """
    Validates configuration structure and types.
    Every key is optional; present keys must have the right type.
    """

    @staticmethod
    def validate(config: Dict[str, Any]) -> List[str]:
        errors = []

        # 1. Scalars
        ConfigValidator._check_type(config, "search_text", str, errors)
        ConfigValidator._check_bool(config, "auto_drives", errors)
        ConfigValidator._check_bool(config, "follow_links", errors)
        ConfigValidator._check_type(config, "asset_path_separator", str, errors)

        # 2. Non-negative integers (bool is an int subclass, reject it)
        for key in ["threads", "max_file_size_mb", "snippet_chars"]:
            if key in config and config[key] is not None:
                val = config[key]
                if isinstance(val, bool) or not isinstance(val, int):
                    errors.append(f"Field '{key}' must be integer, got {type(val).__name__}")
                elif val < 0:
                    errors.append(f"Field '{key}' must be >= 0, got {val}")
        if config.get("threads") == 0:
            errors.append("Field 'threads' must be >= 1")

        # 3. String lists
        for key in ["paths", "extensions", "exclude_dirs"]:
            ConfigValidator._check_str_list(config, key, errors)

        # 4. Logging
        logging_cfg = config.get("logging", {})
        if logging_cfg:
            if not isinstance(logging_cfg, dict):
                errors.append("'logging' must be a dictionary")
            else:
                level = logging_cfg.get("level")
                if level is not None and str(level).upper() not in LOG_LEVELS:
                    errors.append(f"'logging.level' must be one of {sorted(LOG_LEVELS)}, got {level}")

        if errors:
            logger.error(f"Config Validation Failed: {errors}")
        else:
            logger.info("Config OK: keys=%s", sorted(config.keys()))

        return errors

    @staticmethod
    def _check_bool(section: dict, key: str, errors: list):
        if key in section and not isinstance(section[key], bool):
            errors.append(f"Field '{key}' must be boolean, got {type(section[key]).__name__}")

    @staticmethod
    def _check_type(section: dict, key: str, expected: type, errors: list):
        if key in section and section[key] is not None and not isinstance(section[key], expected):
            errors.append(f"Field '{key}' must be {expected.__name__}, got {type(section[key]).__name__}")

    @staticmethod
    def _check_str_list(section: dict, key: str, errors: list):
        if key not in section or section[key] is None:
            return
        val = section[key]
        if not isinstance(val, list):
            errors.append(f"Field '{key}' must be a list, got {type(val).__name__}")
        elif not all(isinstance(v, str) for v in val):
            errors.append(f"Field '{key}' must contain only strings")
