"""Generator configuration and output file location."""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from routespec.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Open API Specification"
DEFAULT_VERSION = "1.0.0"
OUTPUT_NAME = "openapi"
RESOURCE_DIR_NAMES = ("res", "resources")


class GeneratorConfig(BaseModel):
    """Values one generation pass needs; where they come from is up to the caller."""

    enabled: bool = True
    title: str = DEFAULT_TITLE
    description: str | None = None
    version: str = DEFAULT_VERSION
    format: Literal["json", "yaml"] = "yaml"
    file_path: Path | None = None  # explicit output directory
    save_in_build: bool = False
    build_path: Path | None = None
    module_path: Path | None = None  # a source file or directory under .../main/


def locate_output_file(config: GeneratorConfig) -> Path:
    """Resolve (and create the directory of) the document the pass writes to.

    Precedence: explicit file_path, then the build directory, then the
    resources directory next to the module's `main` source root.
    """
    file_name = f"{OUTPUT_NAME}.{config.format}"

    if config.file_path is not None:
        directory = config.file_path
    elif config.save_in_build:
        if config.build_path is None:
            raise ConfigurationError("save_in_build is set but no build_path was given")
        directory = config.build_path / OUTPUT_NAME
    else:
        directory = _resources_dir(config.module_path) / "raw"

    directory.mkdir(parents=True, exist_ok=True)
    logger.debug("Output document: %s", directory / file_name)
    return directory / file_name


def _resources_dir(module_path: Path | None) -> Path:
    if module_path is None:
        raise ConfigurationError(
            "No output location: set file_path, enable save_in_build, or give module_path"
        )

    main_root = _main_root(module_path)
    if main_root.is_dir():
        for child in sorted(main_root.iterdir()):
            if child.is_dir() and child.name in RESOURCE_DIR_NAMES:
                return child

    raise ConfigurationError(
        f"No 'res' or 'resources' directory found under {main_root}; "
        "set file_path or build_path explicitly"
    )


def _main_root(module_path: Path) -> Path:
    parts = module_path.parts
    if "main" in parts:
        return Path(*parts[: parts.index("main") + 1])
    return module_path
