"""
Version information for the Catapult SDK.

This module reads the version from the VERSION file at the root of the
repository, falling back to the installed distribution metadata.
"""

from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """
    Read version from VERSION file.

    Returns:
        str: The version string (e.g., "1.2.0")
    """
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        return metadata.version("catapult-sdk")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
