"""Version of the Tenant Content API.

Read from installed package metadata, or from pyproject.toml when running
from a source checkout.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "tenant-content-api"

# src/api/infrastructure/version.py -> repository root
_PYPROJECT_PATH = Path(__file__).resolve().parents[3] / "pyproject.toml"


def get_version() -> str:
    """Get the application version.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        with open(_PYPROJECT_PATH, "rb") as f:
            return tomllib.load(f)["project"]["version"]


__version__ = get_version()
