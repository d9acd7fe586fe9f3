"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in depman configuration."""


@dataclass(slots=True, frozen=True)
class DepmanConfig:
    """Configuration loaded from the ``[tool.depman]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    spec: Path | None = None
    output: Path | None = None
    strict: bool = False
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.depman].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> DepmanConfig:
    """Load and validate [tool.depman] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DepmanConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    depman_section = data.get("tool", {}).get("depman", {})
    if not depman_section:
        return DepmanConfig(project_root=project_root)

    strict = depman_section.get("strict", False)
    if not isinstance(strict, bool):
        msg = "Invalid [tool.depman].strict: expected boolean"
        raise ConfigError(msg)

    return DepmanConfig(
        spec=_parse_path(depman_section, "spec", project_root),
        output=_parse_path(depman_section, "output", project_root),
        strict=strict,
        project_root=project_root,
    )


def get_config() -> DepmanConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DepmanConfig (may be empty if no pyproject.toml or no [tool.depman] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DepmanConfig()
    return load_config(pyproject_path)
