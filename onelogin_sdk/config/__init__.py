"""Configuration module for the OneLogin SDK."""
from .settings import ClientConfig, load_settings, region_url

__all__ = ["ClientConfig", "load_settings", "region_url"]
