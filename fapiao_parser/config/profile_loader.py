"""Profile loader for configurable extraction tolerances."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# Layout tolerances in page units, tuned for the VAT e-invoice template
DEFAULT_TOLERANCES: Dict[str, float] = {
    "line_y": 10.0,               # same-line corridor for left/right/same-line search
    "party_label_y": 6.0,         # party field value vs label
    "party_footer_x": 1.0,        # party footer glyph vs header glyph
    "party_footer_window": 50.0,  # fallback footer glyph window below header
    "remark_above": 14.0,
    "remark_below": 33.0,
    "item_row_y": 2.0,            # line-item row clustering
    "item_header_pad": 2.0,
    "item_footer_guard": 5.0,
    "item_header_skip": 5.0,
    "totals_row_y": 5.0,
}


@dataclass
class ProfileConfig:
    """Configuration profile for extraction behavior."""
    name: str
    description: str = ""
    tolerances: Dict[str, float] = field(default_factory=dict)
    export: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProfileConfig':
        """Create ProfileConfig from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            tolerances={k: float(v) for k, v in (data.get('tolerances') or {}).items()},
            export=data.get('export') or {}
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'tolerances': self.tolerances,
            'export': self.export
        }

    def tolerance(self, key: str) -> float:
        """Configured tolerance, or the built-in default."""
        if key in self.tolerances:
            return self.tolerances[key]
        return DEFAULT_TOLERANCES[key]


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files.

    Returns:
        Path to profiles directory
    """
    # fapiao_parser/config/profile_loader.py -> fapiao_parser/config -> fapiao_parser -> root
    project_root = Path(__file__).resolve().parent.parent.parent
    return project_root / "configs" / "profiles"


def load_profile(profile_name: str = "default") -> ProfileConfig:
    """Load a configuration profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        ProfileConfig object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profile_path = get_profiles_dir() / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}") from e

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")

    try:
        return ProfileConfig.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ValueError(f"Error loading profile {profile_name}: {e}") from e


def list_available_profiles() -> list[str]:
    """List all available profile names.

    Returns:
        List of profile names (without .yaml extension)
    """
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = [profile_file.stem for profile_file in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]


def get_default_profile() -> ProfileConfig:
    """Get default profile (always available).

    Returns:
        Default ProfileConfig
    """
    try:
        return load_profile("default")
    except FileNotFoundError:
        return ProfileConfig(name="default", description="Built-in defaults")
    except ValueError as e:
        logger.warning("Default profile unreadable, using built-in defaults: %s", e)
        return ProfileConfig(name="default", description="Built-in defaults")
