"""slidealign: anchor-relative layout operations for slide objects."""

from slidealign.config import Settings, configure_logging, get_settings
from slidealign.engine import LayoutEngine
from slidealign.errors import MutationError

__version__ = "0.1.0"

__all__ = [
    "LayoutEngine",
    "MutationError",
    "Settings",
    "configure_logging",
    "get_settings",
]
