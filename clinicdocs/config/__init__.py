"""Configuration package."""

from .app import get_app_name, get_app_version
from .profile_loader import PROFILE_ENV_VAR, LayoutProfile, load_profile

__all__ = [
    'get_app_name',
    'get_app_version',
    'LayoutProfile',
    'load_profile',
    'PROFILE_ENV_VAR',
]
