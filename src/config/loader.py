"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
#   1. config/config.yaml  - static defaults checked into the repo
#                            (revalidation paths, dashboard sizes)
#   2. .env file           - local developer overrides (not committed)
#   3. Environment vars    - set at deploy time
#
# load_config() reads the YAML first, then deep-merges the values derived
# from Settings on top.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings

# Pages that list or aggregate blog articles.  Used when config.yaml is
# missing or does not define ``revalidation.paths``.
DEFAULT_REVALIDATION_PATHS: list[str] = [
    "/blog",
    "/blog/[slug]",
    "/blog/places-to-go/[location]",
    "/regional/country/[country]",
]

DEFAULT_RECENT_ARTICLES = 5


def load_config(
    path: str = "config/config.yaml",
    settings: Settings | None = None,
) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings to merge; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "llm": {
            "available_providers": settings.get_available_llm_providers(),
            "max_tokens": settings.llm_max_tokens,
        },
        "pipeline": {
            "batch_size": settings.generation_batch_size,
            "max_batch_size": settings.generation_max_batch_size,
            "delay_seconds": settings.generation_delay_seconds,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def get_revalidation_paths(config: dict) -> list[str]:
    """Return the fixed list of page paths to invalidate after content changes."""
    paths = config.get("revalidation", {}).get("paths")
    if not paths:
        return list(DEFAULT_REVALIDATION_PATHS)
    return [str(p) for p in paths]


def get_recent_articles_limit(config: dict) -> int:
    """Return how many recent articles the stats view lists."""
    return int(config.get("dashboard", {}).get("recent_articles", DEFAULT_RECENT_ARTICLES))


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
