"""
Configuration management module for the fieldtrack change detection engine.

This module provides the per-tracker configuration model and the loader for
named configuration profiles.
"""

from ..change_detection.change_detection_models import TrackerConfig
from .config_loader import ConfigLoader

__all__ = ["ConfigLoader", "TrackerConfig"]
