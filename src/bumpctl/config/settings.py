"""Run settings — one frozen object per invocation.

Everything comes from the command line; bumpctl reads no environment
variables and no config file. Built by the CLI via :meth:`BumpSettings.from_cli`
and carried on ``click.Context.obj`` through :class:`AppContext`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from bumpctl.domain.manifest import normalize_version


class BumpSettings(BaseModel):
    """Settings for a single propagate run.

    Attributes:
        version: Target version with any leading ``v`` stripped.
        root: Directory (or manifest file) the traversal starts from.
        jobs: Worker threads; None lets the executor pick.
    """

    model_config = {"frozen": True}

    version: str
    root: Path = Field(default_factory=lambda: Path("."))
    jobs: int | None = Field(default=None, ge=1)

    # --- output flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @field_validator("version")
    @classmethod
    def _strip_prefix(cls, value: str) -> str:
        version = normalize_version(value)
        if not version:
            msg = "version must not be empty"
            raise ValueError(msg)
        return version

    @classmethod
    def from_cli(
        cls,
        *,
        version: str,
        root: str | Path | None = None,
        **cli_flags: Any,
    ) -> BumpSettings:
        """Construct settings from a CLI invocation; *root* defaults to the CWD."""
        return cls(
            version=version,
            root=Path(root) if root is not None else Path("."),
            **cli_flags,
        )
