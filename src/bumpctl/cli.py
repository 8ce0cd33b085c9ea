"""bumpctl command line: ``bumpctl VERSION``."""

from __future__ import annotations

import click
from pydantic import ValidationError

from bumpctl import __version__
from bumpctl.commands._base import BumpCommand
from bumpctl.commands._context import AppContext
from bumpctl.config.settings import BumpSettings


@click.command(
    cls=BumpCommand,
    examples="""\
  bumpctl 1.4.0
  bumpctl v1.4.0
  bumpctl 2.0.0-rc.1 --root crates/core
  bumpctl 1.4.0 --json
  bumpctl 1.4.0 -v --log-json""",
)
@click.version_option(version=__version__, prog_name="bumpctl")
@click.argument("target_version", metavar="VERSION")
@click.option(
    "--root",
    type=click.Path(file_okay=True, dir_okay=True, path_type=str),
    default=".",
    show_default=True,
    help="Directory or Cargo.toml to start from.",
)
@click.option("-j", "--jobs", type=click.IntRange(min=1), default=None, help="Worker threads.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
def cli(
    target_version: str,
    root: str,
    jobs: int | None,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """Set VERSION on every manifest reachable from the root via path dependencies.

    A leading "v" is stripped from VERSION. Dependency entries that already
    pin a version and workspace-inherited package versions are left alone.
    """
    try:
        settings = BumpSettings.from_cli(
            version=target_version,
            root=root,
            jobs=jobs,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        raise click.BadParameter(messages, param_hint="VERSION") from exc

    app = AppContext(settings)

    from bumpctl.services.propagate import PropagateService

    svc = PropagateService(settings.version, max_workers=settings.jobs)
    app.emit(svc.propagate(settings.root))
