"""Configuration management for the binding generator."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .model_config import ModelConfig

_LIBRARY_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


@dataclass
class Config:
    """Configuration for one generator run."""

    input_files: list[Path]
    output_dir: Path
    library_name: str = "cglue_bindings"
    verbose: bool = False
    log_dir: Path = Path("logs")
    includes: list[str] = field(default_factory=list)
    std_types: bool = True
    strict: bool = False
    extern: bool = False
    model: ModelConfig = field(default_factory=ModelConfig)

    @classmethod
    def from_env(cls, env_path: Path | None = None) -> "Config":
        """
        Load configuration from environment variables or .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        input_files = [Path(p) for p in _split_list(os.getenv("CGLUE_INPUT_FILES", ""))]
        output_dir = Path(os.getenv("CGLUE_OUTPUT_DIR", "output"))
        library_name = os.getenv("CGLUE_LIBRARY_NAME", "cglue_bindings").strip()
        verbose = _as_bool(os.getenv("CGLUE_VERBOSE", "false"))
        log_dir = Path(os.getenv("CGLUE_LOG_DIR", "logs"))
        includes = _split_list(os.getenv("CGLUE_INCLUDES", ""))
        std_types = _as_bool(os.getenv("CGLUE_STD_TYPES", "true"))
        strict = _as_bool(os.getenv("CGLUE_STRICT", "false"))
        extern = _as_bool(os.getenv("CGLUE_EXTERN", "false"))

        return cls(
            input_files=input_files,
            output_dir=output_dir,
            library_name=library_name,
            verbose=verbose,
            log_dir=log_dir,
            includes=includes,
            std_types=std_types,
            strict=strict,
            extern=extern,
            model=ModelConfig.from_env(),
        )

    @classmethod
    def from_args(
        cls,
        input_files: list[Path] | None = None,
        output_dir: Path | None = None,
        library_name: str | None = None,
        verbose: bool | None = None,
        includes: list[str] | None = None,
        std_types: bool | None = None,
        strict: bool | None = None,
        extern: bool | None = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Args:
            input_files: Declaration files to read (overrides env)
            output_dir: Output directory (overrides env)
            library_name: Base name of the generated files (overrides env)
            verbose: Enable verbose output (overrides env)
            includes: Headers included by the generated source (extends env)
            std_types: Register the std container specializations (overrides env)
            strict: Abort on the first declaration error (overrides env)
            extern: Also write the extern declarations (overrides env)

        Returns:
            Config object
        """
        config = cls.from_env()

        if input_files:
            config.input_files = list(input_files)
        if output_dir is not None:
            config.output_dir = output_dir
        if library_name is not None:
            config.library_name = library_name
        if verbose is not None:
            config.verbose = verbose
        if includes:
            config.includes = [*config.includes, *includes]
        if std_types is not None:
            config.std_types = std_types
        if strict is not None:
            config.strict = strict
        if extern is not None:
            config.extern = extern

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.input_files:
            raise ValueError("No input files given")

        for path in self.input_files:
            if not path.exists():
                raise ValueError(f"Input file not found: {path}")
            if not path.is_file():
                raise ValueError(f"Not a file: {path}")

        if not _LIBRARY_NAME_RE.match(self.library_name):
            raise ValueError(f"Library name is not a C identifier: {self.library_name!r}")

    def ensure_output_dir(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def ensure_log_dir(self) -> None:
        """Create the log directory if it doesn't exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
