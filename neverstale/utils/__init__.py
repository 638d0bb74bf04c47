"""
Utility functions for the Neverstale SDK.

Author: Neverstale
Date: 2026-10-19
"""

from neverstale.utils.logging import configure_logging

__all__ = ["configure_logging"]
