"""cscope tool configuration for scopehound.

Configuration can be provided via:
- Environment variables (SCOPEHOUND_CSCOPE__*)
- CLI arguments
- Default values
"""

import argparse
import os
import shlex
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CscopeConfig(BaseModel):
    """Settings for invoking cscope.

    Besides attribute access, the model answers ``get(key)`` for the keys
    ``cscope``, ``database``, ``buildArgs`` and ``queryArgs`` so it can be
    handed to CscopeService as its config provider directly.
    """

    model_config = ConfigDict(populate_by_name=True)

    executable: str = Field(
        default="cscope", alias="cscope", description="cscope executable name or path"
    )
    database: str = Field(
        default="cscope.out",
        description="Database file, relative to each workspace directory",
    )
    build_args: str = Field(
        default="-Rbq",
        alias="buildArgs",
        description="Extra flags used when building the database",
    )
    query_args: str = Field(
        default="-dL",
        alias="queryArgs",
        description="Extra flags used for line-oriented queries",
    )
    queue_capacity: int = Field(
        default=2,
        ge=1,
        alias="queueCapacity",
        description="Maximum number of outstanding build registrations",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before a cscope process is killed (None = no limit)",
    )

    @field_validator("executable", "database")
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank executable or database names."""
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("build_args", "query_args", mode="before")
    def validate_flags(cls, v: Any) -> str:
        """Accept either a flag string or a list of flags."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return " ".join(shlex.quote(str(part)) for part in v)
        return str(v)

    def get(self, key: str, default: Any = "") -> Any:
        """Look up a setting by alias or field name.

        Unknown or unset keys return ``default`` (empty string), matching the
        config-provider contract where absence is treated as empty.
        """
        for name, field in type(self).model_fields.items():
            if key == name or key == field.alias:
                value = getattr(self, name)
                return default if value is None else value
        return default

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add cscope-related CLI arguments."""
        parser.add_argument(
            "--cscope",
            help="cscope executable (default: from environment or 'cscope')",
        )
        parser.add_argument(
            "--database",
            help="Database file name inside each directory (default: cscope.out)",
        )
        parser.add_argument(
            "--build-args",
            help="Flags passed to cscope when building, e.g. --build-args=-Rbq",
        )
        parser.add_argument(
            "--query-args",
            help="Flags passed to cscope when querying, e.g. --query-args=-dL",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            help="Kill cscope after this many seconds (default: no timeout)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load cscope config from environment variables."""
        config: dict[str, Any] = {}
        if executable := (
            os.getenv("SCOPEHOUND_CSCOPE__EXECUTABLE") or os.getenv("SCOPEHOUND_CSCOPE")
        ):
            config["executable"] = executable
        if database := os.getenv("SCOPEHOUND_CSCOPE__DATABASE"):
            config["database"] = database
        if (build_args := os.getenv("SCOPEHOUND_CSCOPE__BUILD_ARGS")) is not None:
            config["build_args"] = build_args
        if (query_args := os.getenv("SCOPEHOUND_CSCOPE__QUERY_ARGS")) is not None:
            config["query_args"] = query_args
        if capacity := os.getenv("SCOPEHOUND_CSCOPE__QUEUE_CAPACITY"):
            config["queue_capacity"] = int(capacity)
        if timeout := os.getenv("SCOPEHOUND_CSCOPE__TIMEOUT"):
            config["timeout"] = float(timeout)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract cscope config from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "cscope", None):
            overrides["executable"] = args.cscope
        if getattr(args, "database", None):
            overrides["database"] = args.database
        if getattr(args, "build_args", None) is not None:
            overrides["build_args"] = args.build_args
        if getattr(args, "query_args", None) is not None:
            overrides["query_args"] = args.query_args
        if getattr(args, "timeout", None):
            overrides["timeout"] = args.timeout
        return overrides

    @classmethod
    def from_sources(cls, args: Any = None) -> "CscopeConfig":
        """Merge defaults, environment and CLI overrides (later wins)."""
        values = cls.load_from_env()
        if args is not None:
            values.update(cls.extract_cli_overrides(args))
        return cls(**values)

    def __repr__(self) -> str:
        return (
            f"CscopeConfig(executable={self.executable}, database={self.database}, "
            f"build_args={self.build_args!r}, query_args={self.query_args!r})"
        )
