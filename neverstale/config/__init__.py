"""
Configuration management for the Neverstale SDK.

Author: Neverstale
Date: 2026-10-19
"""

from neverstale.config.settings import NeverstaleSettings, get_settings

__all__ = ["NeverstaleSettings", "get_settings"]
