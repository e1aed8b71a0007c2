"""Configuration module - exports Settings and the YAML loader helpers."""

from src.config.loader import get_recent_articles_limit, get_revalidation_paths, load_config
from src.config.settings import Settings

__all__ = ["Settings", "get_recent_articles_limit", "get_revalidation_paths", "load_config"]
