"""Process-wide profile manager for extraction tolerances."""

from typing import Optional

from .profile_loader import ProfileConfig, get_default_profile, load_profile

# Active profile; None until first use
_current_profile: Optional[ProfileConfig] = None


def set_profile(profile_name: str = "default") -> ProfileConfig:
    """Load a named profile and make it active for the extractors.

    Raises:
        FileNotFoundError: If profile doesn't exist
        ValueError: If profile is invalid
    """
    global _current_profile
    _current_profile = load_profile(profile_name)
    return _current_profile


def use_profile(profile: ProfileConfig) -> ProfileConfig:
    """Activate an already-built ProfileConfig (no YAML lookup)."""
    global _current_profile
    _current_profile = profile
    return profile


def get_profile() -> ProfileConfig:
    """Current active profile (default profile if none set)."""
    global _current_profile
    if _current_profile is None:
        _current_profile = get_default_profile()
    return _current_profile


def get_tolerance(key: str) -> float:
    """Tolerance from the active profile."""
    return get_profile().tolerance(key)


def reset_profile():
    global _current_profile
    _current_profile = None
