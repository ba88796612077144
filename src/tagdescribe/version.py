"""Version handling for tagdescribe.

The version is primarily obtained from package metadata. When running from a
checkout without installation, tagdescribe describes its own repository,
so a development version looks like "v0.1.0-5-g1234abc".
"""

from importlib.metadata import version, PackageNotFoundError
from pathlib import Path


def get_version() -> str:
    """Get the tagdescribe version.

    Returns:
        Version string, e.g., "0.1.0", "v0.1.0-5-g1234abc", or "unknown" if
        version cannot be determined.
    """
    try:
        return version("tagdescribe")
    except PackageNotFoundError:
        return _get_version_from_git()


def _get_version_from_git() -> str:
    from .describe import describe_repository

    result = describe_repository(str(Path(__file__).resolve().parent), prefix="v")
    return result.value_or_none() or "unknown"
