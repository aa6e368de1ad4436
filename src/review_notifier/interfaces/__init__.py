"""Protocol definitions for pluggable adapters."""

from .chat import ChatProvider
from .directory import ProfileDirectory

__all__ = ["ChatProvider", "ProfileDirectory"]
