"""Configuration management for deprecation-audit.

Loads environment variables (optionally from a .env file) and provides
centralized config access.
"""
import os
from dotenv import find_dotenv, load_dotenv


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self):
        """Initialize config by loading the nearest .env file, if any."""
        load_dotenv(find_dotenv(usecwd=True))

    @property
    def source_root(self) -> str:
        """Directory scanned when no path is given on the command line."""
        return os.getenv("DEPRECATION_AUDIT_SOURCE_ROOT", "../ember.js/packages")

    @property
    def report_path(self) -> str:
        return os.getenv("DEPRECATION_AUDIT_REPORT", "report.md")

    @property
    def sentinel_name(self) -> str:
        """Identifier that gates debug-only branches."""
        return os.getenv("DEPRECATION_AUDIT_SENTINEL", "DEBUG")

    @property
    def function_name(self) -> str:
        """Bare name of the deprecation function."""
        return os.getenv("DEPRECATION_AUDIT_FUNCTION", "deprecate")

    @property
    def link_host(self) -> str:
        return os.getenv("DEPRECATION_AUDIT_LINK_HOST", "github.com")

    @property
    def link_org(self) -> str:
        return os.getenv("DEPRECATION_AUDIT_LINK_ORG", "emberjs")

    @property
    def link_repo(self) -> str:
        return os.getenv("DEPRECATION_AUDIT_LINK_REPO", "ember.js")

    @property
    def link_ref(self) -> str:
        """Branch, tag or commit the deep links point at."""
        return os.getenv("DEPRECATION_AUDIT_LINK_REF", "lts-3-28")

    @property
    def link_base_dir(self) -> str:
        """Path of the scanned directory inside the linked repository."""
        return os.getenv("DEPRECATION_AUDIT_LINK_BASE_DIR", "packages")


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
