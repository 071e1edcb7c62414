import copy
import logging
import os
from logging.handlers import RotatingFileHandler

import yaml

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

DEFAULT_CONFIG = {
    "scoring": {
        "format": "Open",
        "history_limit": 50,
        "default_teams": ["Team A", "Team B"],
    },
    "logging": {
        "level": "INFO",
        "log_to_file": False,
        "log_dir": "logs",
    },
}

logger = logging.getLogger(__name__)


def load_config(config_path=None):
    """Read config.yaml, falling back to DEFAULT_CONFIG if it is missing or unreadable."""
    config_path = config_path or CONFIG_PATH
    if not os.path.exists(config_path):
        logger.warning(f"{config_path} not found, using built-in defaults")
        return copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or copy.deepcopy(DEFAULT_CONFIG)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load {config_path}: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)


def setup_logging(config=None):
    """Console logging, plus a rotating file when logging.log_to_file is set."""
    log_cfg = (config or DEFAULT_CONFIG).get("logging") or {}
    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)

    # Clear existing handlers to avoid duplicates
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    if log_cfg.get("log_to_file"):
        log_dir = log_cfg.get("log_dir", "logs")
        if not os.path.isabs(log_dir):
            log_dir = os.path.join(PROJECT_ROOT, log_dir)
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "scoring.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)
    return logging.getLogger("CricketScorer")
