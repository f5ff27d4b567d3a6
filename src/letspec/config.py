"""Configuration loaded from ``[tool.letspec]`` in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from letspec.types import RedeclarationPolicy

logger = logging.getLogger(__name__)


class LetspecConfig(BaseModel):
    """Runtime options for groups and the runner.

    Attributes
    ----------
    redeclaration_policy
        How a same-scope redeclaration treats the aliases of the
        declaration it replaces.
    concurrency
        Number of examples the runner executes at once. ``0`` means the
        runner's default maximum.
    verbosity
        Console reporter verbosity; negative is quieter.
    """

    redeclaration_policy: RedeclarationPolicy = RedeclarationPolicy.REPLACE
    concurrency: int = Field(default=1, ge=0)
    verbosity: int = 0


DEFAULT_CONFIG = LetspecConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | str | None = None) -> LetspecConfig:
    """Load configuration from a pyproject.toml file.

    Args:
        path: File to read, or a directory to search upwards from. Defaults
            to the current directory.

    Raises:
        ValueError: If the ``[tool.letspec]`` table is invalid.
    """
    if isinstance(path, str):
        path = Path(path)
    pyproject = path if path is not None and path.is_file() else find_pyproject(path)
    if pyproject is None:
        return DEFAULT_CONFIG.model_copy()

    with pyproject.open("rb") as fh:
        data: dict[str, Any] = tomllib.load(fh)

    section = data.get("tool", {}).get("letspec")
    if section is None:
        return DEFAULT_CONFIG.model_copy()

    options = {key.replace("-", "_"): value for key, value in section.items()}
    try:
        config = LetspecConfig.model_validate(options)
    except ValidationError as e:
        msg = f"Invalid [tool.letspec] configuration in {pyproject}: {e}"
        raise ValueError(msg) from e

    logger.debug("Loaded configuration from %s: %r", pyproject, config)
    return config
