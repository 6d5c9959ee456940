"""Central configuration for fapiao-parser."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def get_app_name() -> str:
    """Get application name."""
    return "fapiao-parser"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = PROJECT_ROOT / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "0.1.0")
    except (ImportError, OSError, ValueError) as e:
        # Installed without the source tree, or unreadable pyproject.toml
        logger.debug("Could not read version from pyproject.toml: %s", e)
        return "0.1.0"


def get_default_output_dir() -> Path:
    """Get default output directory.

    FAPIAO_OUTPUT_DIR wins when set; otherwise project root / "out".

    Returns:
        Path object to default output directory (created if needed)
    """
    env_value = os.getenv("FAPIAO_OUTPUT_DIR")
    output_dir = Path(env_value) if env_value else PROJECT_ROOT / "out"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def get_default_export_name() -> str:
    """Default Excel workbook name (without .xlsx)."""
    return os.getenv("FAPIAO_EXPORT_NAME", "发票数据汇总")
