"""Max views quota package."""

from typing import cast
import logging
import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "maxviews-quota"


def get_version() -> str:
    """Get the version from pyproject.toml, or from the installed distribution."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        try:
            return version(DISTRIBUTION_NAME)
        except PackageNotFoundError:
            logger.warning("pyproject.toml not found at %s", pyproject_path)
            return "0.1.0"

    with open(pyproject_path, "rb") as f:
        pyproject_data = tomllib.load(f)

    return cast(str, pyproject_data.get("project", {}).get("version", "0.1.0"))


__version__: str = get_version()
