"""Application identity."""

from importlib import metadata


def get_app_name() -> str:
    """Get application name."""
    return "clinicdocs"


def get_app_version() -> str:
    """Get installed package version."""
    try:
        return metadata.version("clinicdocs")
    except metadata.PackageNotFoundError:
        from .. import __version__
        return __version__
