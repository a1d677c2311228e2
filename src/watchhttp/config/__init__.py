"""Configuration management for watchhttp.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides with the ``WATCHHTTP_`` prefix.
"""

from watchhttp.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
