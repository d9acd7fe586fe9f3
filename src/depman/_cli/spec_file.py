"""Loading dependency specifications from TOML files."""

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from depman._manager import DependencyManager

logger = logging.getLogger(__name__)


class SpecFileError(Exception):
    """Error reading or validating a dependency spec file."""


class DependencySpecFile(BaseModel):
    """Contents of a dependency spec file.

    Example file::

        elements = ["docs"]

        [dependents]
        libc = ["openssl", "zlib"]
        zlib = ["openssl"]

    Attributes:
        elements: Elements registered without any dependency.
        dependents: Mapping from an element to the elements that depend on it.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    elements: list[str] = Field(default_factory=list)
    dependents: dict[str, list[str]] = Field(default_factory=dict)

    def to_manager(self) -> DependencyManager[str]:
        """Build a manager holding every element and dependency of this file.

        Raises:
            InvalidDependencyError: If the file declares a direct circular dependency.

        """
        manager: DependencyManager[str] = DependencyManager()
        for element in self.elements:
            manager.add_dependency(element)
        manager.build_dependency_graph(self.dependents)
        return manager


def load_spec_file(path: Path) -> DependencySpecFile:
    """Read and validate a dependency spec file.

    Raises:
        SpecFileError: If the file is missing, is not valid TOML, or does not match the schema.

    """
    logger.debug(f"Loading dependency spec from {path}")
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        msg = f"Spec file not found: {path}"
        raise SpecFileError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise SpecFileError(msg) from e

    try:
        return DependencySpecFile.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid dependency spec in {path}:\n{e}"
        raise SpecFileError(msg) from e
