"""
Version information for venddy-search package.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("venddy-search")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0+unknown"
