# NCD Services Package
"""
Backend services for the resolver.

Services handle filesystem access, search roots, and name suggestions.
"""

from .filesystem import FileSystem, RealFileSystem
from .roots import RootRegistry, SearchRoot, Strategy

__all__ = ["FileSystem", "RealFileSystem", "RootRegistry", "SearchRoot", "Strategy"]
