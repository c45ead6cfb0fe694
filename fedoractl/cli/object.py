"""Object commands for fedoractl."""

from __future__ import annotations

from typing import BinaryIO, Optional

import click

from fedoractl.cli.common import Context, ExitCode, confirm_destructive, global_options, handle_errors
from fedoractl.core.output import (
    OutputFormat,
    print_error,
    print_output,
    print_success,
    print_warning,
    print_xml,
)
from fedoractl.core.validation import validate_pid
from fedoractl.models import ObjectProfile
from fedoractl.services import ObjectService


@click.group("object")
def object_() -> None:
    """Manage repository objects."""
    pass


@object_.command("show")
@click.argument("pid")
@click.option("--as-of", help="Show the profile as of this date-time (e.g. 2020-01-01T00:00:00.000Z)")
@global_options
@handle_errors
def object_show(ctx: Context, pid: str, as_of: Optional[str]) -> None:
    """Show an object profile.

    Example:
        fedoractl object show demo:1
    """
    pid = validate_pid(pid)
    record = ObjectService(ctx.get_client()).profile(pid, as_of=as_of)
    if not record:
        print_error(f"Object not found: {pid}")
        raise SystemExit(ExitCode.NOT_FOUND)

    if ctx.output_format == OutputFormat.JSON:
        print_output(record, format=OutputFormat.JSON)
        return

    profile = ObjectProfile.from_record(record)
    if not profile.is_active and not ctx.quiet:
        print_warning(f"Object {pid} is not active (state {profile.state})")
    data = profile.to_dict()
    data["models"] = ", ".join(profile.models)
    print_output(data, format=ctx.output_format, quiet=ctx.quiet)


@object_.command("versions")
@click.argument("pid")
@global_options
@handle_errors
def object_versions(ctx: Context, pid: str) -> None:
    """List the change dates of an object.

    Example:
        fedoractl object versions demo:1
    """
    pid = validate_pid(pid)
    dates = ObjectService(ctx.get_client()).history(pid)
    print_output(
        [{"changed": d} for d in dates],
        format=ctx.output_format,
        columns=["changed"],
        column_labels={"changed": "Change Date"},
        quiet=ctx.quiet,
        id_field="changed",
    )


@object_.command("xml")
@click.argument("pid")
@global_options
@handle_errors
def object_xml(ctx: Context, pid: str) -> None:
    """Print the FOXML of an object."""
    pid = validate_pid(pid)
    print_xml(ObjectService(ctx.get_client()).xml(pid))


@object_.command("ingest")
@click.argument("foxml", type=click.File("rb"), required=False)
@click.option("--pid", help="Pid for the new object (server assigns one if omitted)")
@click.option("--label", help="Object label")
@click.option("--log-message", help="Audit log message")
@global_options
@handle_errors
def object_ingest(
    ctx: Context,
    foxml: Optional[BinaryIO],
    pid: Optional[str],
    label: Optional[str],
    log_message: Optional[str],
) -> None:
    """Ingest a new object from a FOXML file (or an empty object).

    Example:
        fedoractl object ingest demo.xml
        fedoractl object ingest --pid demo:2 --label "Empty object"
    """
    if pid:
        pid = validate_pid(pid)
    params = {"label": label, "logMessage": log_message}
    new_pid = ObjectService(ctx.get_client()).ingest(foxml, pid=pid, params=params)
    if ctx.quiet:
        click.echo(new_pid)
    else:
        print_success(f"Ingested {new_pid}")


@object_.command("purge")
@click.argument("pid")
@click.option("--log-message", help="Audit log message")
@global_options
@confirm_destructive("Permanently purge this object?")
@handle_errors
def object_purge(ctx: Context, pid: str, log_message: Optional[str], dry_run: bool) -> None:
    """Permanently remove an object.

    Example:
        fedoractl object purge demo:1 --yes
    """
    pid = validate_pid(pid)
    if dry_run:
        click.echo(f"Would purge {pid}")
        return
    ObjectService(ctx.get_client()).purge(pid, {"logMessage": log_message})
    print_success(f"Purged {pid}")
