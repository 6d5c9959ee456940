"""Configuration package."""

from .profile_loader import DEFAULT_TOLERANCES, ProfileConfig, get_default_profile, list_available_profiles, load_profile
from .profile_manager import get_profile, get_tolerance, reset_profile, set_profile, use_profile
from .settings import get_app_name, get_app_version, get_default_export_name, get_default_output_dir

__all__ = [
    'get_app_name',
    'get_app_version',
    'get_default_output_dir',
    'get_default_export_name',
    'DEFAULT_TOLERANCES',
    'ProfileConfig',
    'load_profile',
    'list_available_profiles',
    'get_default_profile',
    'set_profile',
    'use_profile',
    'get_profile',
    'get_tolerance',
    'reset_profile',
]
