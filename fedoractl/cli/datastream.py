"""Datastream commands for fedoractl."""

from __future__ import annotations

import sys
from typing import BinaryIO, Optional

import click

from fedoractl.cli.common import Context, ExitCode, confirm_destructive, global_options, handle_errors
from fedoractl.core.output import (
    OutputFormat,
    create_spinner,
    print_error,
    print_output,
    print_success,
    print_warning,
    print_xml,
)
from fedoractl.core.validation import validate_dsid, validate_pid
from fedoractl.models import DatastreamProfile


@click.group()
def datastream() -> None:
    """Manage object datastreams."""
    pass


@datastream.command("list")
@click.argument("pid")
@global_options
@handle_errors
def datastream_list(ctx: Context, pid: str) -> None:
    """Print the datastream listing of an object."""
    pid = validate_pid(pid)
    print_xml(ctx.datastream_service().list(pid))


@datastream.command("show")
@click.argument("pid")
@click.argument("dsid")
@click.option("--validate-checksum", is_flag=True, help="Ask the server to verify the checksum")
@click.option("--as-of", help="Show the profile as of this date-time")
@global_options
@handle_errors
def datastream_show(
    ctx: Context,
    pid: str,
    dsid: str,
    validate_checksum: bool,
    as_of: Optional[str],
) -> None:
    """Show a datastream profile.

    Example:
        fedoractl datastream show demo:1 DC
    """
    pid = validate_pid(pid)
    dsid = validate_dsid(dsid)
    record = ctx.datastream_service().profile(pid, dsid, validate_checksum=validate_checksum, as_of=as_of)
    if not record:
        print_error(f"Datastream not found: {pid}/{dsid}")
        raise SystemExit(ExitCode.NOT_FOUND)

    if ctx.output_format == OutputFormat.JSON:
        print_output(record, format=OutputFormat.JSON)
        return

    profile = DatastreamProfile.from_record(record)
    # dsChecksumValid is only meaningful when validation was requested
    if validate_checksum and profile.checksum_valid is False:
        print_warning(f"Checksum validation failed for {pid}/{dsid}")
    print_output(
        profile.to_dict(),
        format=ctx.output_format,
        quiet=ctx.quiet,
        id_field="dsid",
    )


@datastream.command("versions")
@click.argument("pid")
@click.argument("dsid")
@global_options
@handle_errors
def datastream_versions(ctx: Context, pid: str, dsid: str) -> None:
    """List every version of a datastream.

    Example:
        fedoractl datastream versions demo:1 DC
    """
    pid = validate_pid(pid)
    dsid = validate_dsid(dsid)
    history = ctx.datastream_service().history(pid, dsid)

    if ctx.output_format == OutputFormat.JSON:
        print_output(history, format=OutputFormat.JSON)
        return

    columns = ["version_id", "created", "state", "mime_type", "size"]
    rows = [DatastreamProfile.from_record(record).to_row(columns) for record in history.values()]
    print_output(
        rows,
        format=ctx.output_format,
        columns=columns,
        quiet=ctx.quiet,
        id_field="version_id",
    )


@datastream.command("content")
@click.argument("pid")
@click.argument("dsid")
@click.option("--as-of", help="Content as of this date-time")
@click.option("--output-file", "-O", type=click.File("wb"), help="Write to file instead of stdout")
@global_options
@handle_errors
def datastream_content(
    ctx: Context,
    pid: str,
    dsid: str,
    as_of: Optional[str],
    output_file: Optional[BinaryIO],
) -> None:
    """Download datastream content.

    Example:
        fedoractl datastream content demo:1 OBJ -O image.jpg
    """
    pid = validate_pid(pid)
    dsid = validate_dsid(dsid)
    data = ctx.datastream_service().content(pid, dsid, {"asOfDateTime": as_of})
    target = output_file or sys.stdout.buffer
    target.write(data)
    target.flush()


@datastream.command("upload")
@click.argument("pid")
@click.argument("dsid")
@click.argument("file", type=click.File("rb"))
@click.option("--mime-type", help="Content type (guessed from the file name if omitted)")
@click.option("--label", help="Datastream label")
@click.option(
    "--control-group",
    type=click.Choice(["M", "X", "E", "R"]),
    default="M",
    help="Control group for new datastreams",
)
@click.option("--checksum-type", help="Checksum algorithm, e.g. SHA-256")
@click.option("--checksum", help="Expected checksum of the content")
@click.option("--replace", is_flag=True, help="Modify an existing datastream instead of adding")
@global_options
@handle_errors
def datastream_upload(
    ctx: Context,
    pid: str,
    dsid: str,
    file: BinaryIO,
    mime_type: Optional[str],
    label: Optional[str],
    control_group: str,
    checksum_type: Optional[str],
    checksum: Optional[str],
    replace: bool,
) -> None:
    """Upload content to a new or existing datastream.

    Example:
        fedoractl datastream upload demo:1 OBJ image.jpg --label "Master image"
        fedoractl datastream upload demo:1 OBJ image.jpg --replace
    """
    pid = validate_pid(pid)
    dsid = validate_dsid(dsid)
    service = ctx.datastream_service()
    params = {
        "dsLabel": label,
        "mimeType": mime_type,
        "checksumType": checksum_type,
        "checksum": checksum,
    }

    with create_spinner() as progress:
        progress.add_task(f"Uploading {file.name} to {pid}/{dsid}", total=None)
        if replace:
            service.modify(pid, dsid, file, params=params)
        else:
            service.add(pid, dsid, file, params={**params, "controlGroup": control_group})

    print_success(f"{'Modified' if replace else 'Added'} {pid}/{dsid}")


@datastream.command("purge")
@click.argument("pid")
@click.argument("dsid")
@click.option("--start", "start_dt", help="Purge versions created at or after this date-time")
@click.option("--end", "end_dt", help="Purge versions created at or before this date-time")
@click.option("--log-message", help="Audit log message")
@global_options
@confirm_destructive("Permanently purge this datastream?")
@handle_errors
def datastream_purge(
    ctx: Context,
    pid: str,
    dsid: str,
    start_dt: Optional[str],
    end_dt: Optional[str],
    log_message: Optional[str],
    dry_run: bool,
) -> None:
    """Purge a datastream, or a date range of its versions.

    Example:
        fedoractl datastream purge demo:1 OLD --yes
    """
    pid = validate_pid(pid)
    dsid = validate_dsid(dsid)
    if dry_run:
        click.echo(f"Would purge {pid}/{dsid}")
        return
    params = {"startDT": start_dt, "endDT": end_dt, "logMessage": log_message}
    ctx.datastream_service().purge(pid, dsid, params)
    print_success(f"Purged {pid}/{dsid}")
