import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from premiere_hunter.config.validator import ConfigValidator

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "PREMIERE_HUNTER_CONFIG_FILE"


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads the YAML configuration file.
    Returns a dictionary with configuration and status metadata.
    Priority: explicit path (CLI) > PREMIERE_HUNTER_CONFIG_FILE > no file (defaults).
    """
    config_status = {
        "status": "OK",
        "error": None,
        "config_path": None,
        "source": None,
        "data": {}
    }

    # --- 1. Pick the file ---
    env_override_file = os.environ.get(CONFIG_FILE_ENV)
    if path:
        config_path = Path(path)
        config_status["source"] = "CLI (--config)"
    elif env_override_file:
        config_path = Path(env_override_file)
        config_status["source"] = f"ENV_FILE ({CONFIG_FILE_ENV})"
    else:
        config_status["source"] = "DEFAULTS"
        return config_status

    config_status["config_path"] = str(config_path)

    # --- 2. Load ---
    try:
        if not config_path.exists():
            config_status["status"] = "ERROR"
            config_status["error"] = f"Config file not found: {config_path}"
            return config_status

        with open(config_path, "r", encoding="utf-8") as f:
            loaded_config = yaml.safe_load(f) or {}

        if not isinstance(loaded_config, dict):
            config_status["status"] = "ERROR"
            config_status["error"] = f"Config root must be a mapping, got {type(loaded_config).__name__}"
            return config_status

        # --- 3. Validation ---
        validation_errors = ConfigValidator.validate(loaded_config)
        if validation_errors:
            config_status["status"] = "ERROR"
            config_status["error"] = "Invalid Configuration:\n" + "\n".join(validation_errors)
            # Still expose data for debugging the config
            config_status["data"] = loaded_config
            return config_status

        config_status["data"] = loaded_config
        logger.info(f"Config Loaded from {config_path}: keys={sorted(loaded_config.keys())}")

    except (OSError, yaml.YAMLError) as e:
        config_status["status"] = "ERROR"
        config_status["error"] = str(e)

    return config_status
