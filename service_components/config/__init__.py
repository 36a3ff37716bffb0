"""
Configuration module - Base settings class for environment configuration.
"""

from service_components.config.base_settings import ComponentSettings, get_settings

__all__ = ["ComponentSettings", "get_settings"]
