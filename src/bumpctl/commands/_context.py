"""AppContext — settings plus result emission for the CLI.

Created once per invocation. Configures logging and telemetry from the
settings and owns the stdout/stderr routing and exit code of a result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bumpctl.config.logging import configure_logging
from bumpctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from bumpctl.config.settings import BumpSettings
    from bumpctl.services.result import ServiceResult


class AppContext:
    """Shared context for a CLI run."""

    def __init__(self, settings: BumpSettings) -> None:
        self.settings = settings

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from bumpctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
