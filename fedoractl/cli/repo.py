"""Repository-level commands for fedoractl."""

from __future__ import annotations

from typing import Optional

import click

from fedoractl.cli.common import Context, global_options, handle_errors
from fedoractl.core.exceptions import ParseError
from fedoractl.core.output import OutputFormat, print_output, print_xml
from fedoractl.models import RepositoryProfile
from fedoractl.services import RepositoryService


@click.group()
def repo() -> None:
    """Inspect and search the repository."""
    pass


@repo.command("describe")
@global_options
@handle_errors
def repo_describe(ctx: Context) -> None:
    """Show the repository profile.

    Example:
        fedoractl repo describe
        fedoractl repo describe -o json
    """
    record = RepositoryService(ctx.get_client()).profile()
    if record is None:
        raise ParseError("repository profile", "server returned no usable description")

    if ctx.output_format == OutputFormat.JSON:
        print_output(record, format=OutputFormat.JSON)
        return

    profile = RepositoryProfile.from_record(record)
    print_output(
        {
            "name": profile.name,
            "version": profile.version,
            "base_url": profile.base_url,
            "admin_emails": ", ".join(profile.admin_emails),
        },
        format=ctx.output_format,
        quiet=ctx.quiet,
        id_field="name",
        column_labels={
            "name": "Name",
            "version": "Version",
            "base_url": "Base URL",
            "admin_emails": "Admin Email",
        },
    )


@repo.command("next-pid")
@click.option("--namespace", "-n", help="Pid namespace")
@click.option("--count", type=int, default=None, help="Number of pids to reserve")
@global_options
@handle_errors
def repo_next_pid(ctx: Context, namespace: Optional[str], count: Optional[int]) -> None:
    """Reserve new pids and print the server response.

    Example:
        fedoractl repo next-pid --namespace demo --count 3
    """
    print_xml(RepositoryService(ctx.get_client()).next_pid(namespace=namespace, num_pids=count))


@repo.command("find")
@click.option("--query", help="Field query, e.g. 'pid~demo:*'")
@click.option("--terms", help="Phrase search across all fields")
@click.option("--max-results", type=int, default=None, help="Maximum number of results")
@global_options
@handle_errors
def repo_find(
    ctx: Context,
    query: Optional[str],
    terms: Optional[str],
    max_results: Optional[int],
) -> None:
    """Search objects and print the XML result set.

    Example:
        fedoractl repo find --query 'pid~demo:*' --max-results 20
    """
    params = {"pid": True, "label": True, "maxResults": max_results}
    print_xml(RepositoryService(ctx.get_client()).find_objects(query=query, terms=terms, params=params))
