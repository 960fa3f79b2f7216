# NCD Package
"""
Navigation Control Directory - a directory jumper for shell wrappers.

Resolves a short query into one absolute path:
  - Literal/anchored paths
  - Ellipsis (... = up two levels)
  - Children of the current directory
  - Configured search roots (CDPATH)
"""

__version__ = "0.1.0-dev"
