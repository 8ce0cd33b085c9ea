"""Human, quiet, and JSON rendering of a ServiceResult.

Human output is rendered through Rich; ``--json`` dumps the model as-is;
``--quiet`` prints a single status line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text

from bumpctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from bumpctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def render_quiet(result: ServiceResult) -> str:
    """One line: the count on success, the error otherwise."""
    if result.ok:
        return f"OK: {result.op} ({result.data.get('count', 0)} manifests)"
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op} - {msg}"


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _render_success(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def _render_success(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    header = Text()
    header.append("OK", style="bump.ok")
    header.append(f"  {result.op}", style="bump.op")
    console.print(header)

    summary = Text("  version ", style="bump.key")
    summary.append(str(result.data.get("version", "")), style="bump.version")
    summary.append(f"  ({result.data.get('count', 0)} manifests)", style="bump.key")
    console.print(summary)

    for path in result.data.get("updated", []):
        console.print(Text(f"  {path}", style="bump.path"))

    if verbose and result.meta:
        _render_meta(result, console)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    header = Text()
    header.append("ERROR", style="bump.error")
    header.append(f"  {result.op}", style="bump.op")
    if result.error is not None:
        header.append(f"  [{result.error.code}]", style="bump.key")
    console.print(header)

    message = result.error.message if result.error else "Unknown error"
    console.print(Text(f"  {message}"))

    updated = result.data.get("updated", [])
    if updated:
        console.print(Text(f"  {len(updated)} manifest(s) were still updated", style="bump.key"))
        if verbose:
            for path in updated:
                console.print(Text(f"    {path}", style="bump.path"))

    if verbose:
        for warning in result.warnings:
            console.print(Text(f"  WARNING: {warning}", style="bump.warning"))
        if result.meta:
            _render_meta(result, console)


def _render_meta(result: ServiceResult, console: Console) -> None:
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    line = Text(f"  {telemetry['name']}: {telemetry['duration_ms']}ms", style="bump.key")
    console.print(line)
