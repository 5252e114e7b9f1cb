"""Environment loading from dotenv files.

The bin location and limits can be set through environment variables
(``RECYCLEBIN_DIR``, ``RECYCLEBIN_MAX_SIZE_MB``, ``RECYCLEBIN_RETENTION_DAYS``).
Besides the process environment they may come from dotenv files:

- User file: $XDG_CONFIG_HOME/recyclebin/.env (default ~/.config/recyclebin/.env)
- Project files: ./.env, then ./.env.local

Precedence: shell environment > project files > user file.

Only ``RECYCLEBIN_*`` keys are taken from the files; a project ``.env``
written for some other tool does not leak into the process.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

ENV_PREFIX = "RECYCLEBIN_"


def user_env_file() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "recyclebin" / ".env"


def project_env_files(project_dir: Path) -> list[Path]:
    return [project_dir / ".env", project_dir / ".env.local"]


def read_env_file(path: Path) -> dict[str, str]:
    """``RECYCLEBIN_*`` assignments from one dotenv file (empty if absent)."""
    if not path.is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key and value is not None and key.startswith(ENV_PREFIX)
    }


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """Export settings from the user and project dotenv files.

    Args:
        project_dir: Base directory for the project files (defaults to cwd)
        user_env_paths: Explicit user files, replacing the XDG default
        project_env_paths: Explicit project files, replacing ./.env(.local)

    Returns:
        The variables this call exported
    """
    if user_env_paths is None:
        user_env_paths = [user_env_file()]
    if project_env_paths is None:
        project_env_paths = project_env_files(project_dir or Path.cwd())

    merged: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        # Later files win over earlier ones
        merged.update(read_env_file(Path(path)))

    exported = {key: value for key, value in merged.items() if key not in os.environ}
    os.environ.update(exported)
    if exported:
        logger.debug("Loaded %s from dotenv files", ", ".join(sorted(exported)))
    return exported
