# NCD Utilities Package
"""
Shared utility functions and helpers for NCD.
"""

from .helpers import clean_output, load_settings, setup_logging

__all__ = ["clean_output", "load_settings", "setup_logging"]
