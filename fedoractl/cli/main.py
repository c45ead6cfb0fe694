"""Main CLI entry point for fedoractl."""

from __future__ import annotations

import click

from fedoractl import __version__
from fedoractl.cli.common import Context, global_options, handle_errors
from fedoractl.cli.config_cmd import config
from fedoractl.cli.datastream import datastream
from fedoractl.cli.object import object_
from fedoractl.cli.repo import repo
from fedoractl.core.output import OutputFormat, print_output, print_success

# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="fedoractl")
def cli() -> None:
    """fedoractl - A CLI for the Fedora Commons REST API.

    Inspect objects and datastreams, upload content and read version
    histories.

    Get started:

      fedoractl config init          # Create config file

      fedoractl repo describe        # Check the repository

      fedoractl object show demo:1   # Show an object

    Use --help on any command for more information.
    """
    pass


# =============================================================================
# Register Command Groups
# =============================================================================

cli.add_command(config)
cli.add_command(repo)
cli.add_command(object_)
cli.add_command(datastream)


# =============================================================================
# Top-Level Commands
# =============================================================================


@cli.group()
def health() -> None:
    """Server health and connectivity checks."""
    pass


@health.command("ping")
@global_options
@handle_errors
def health_ping(ctx: Context) -> None:
    """Check server connectivity."""
    result = ctx.get_client().ping()

    if ctx.output_format == OutputFormat.JSON:
        print_output(result, format=OutputFormat.JSON)
        return

    print_success(f"Server reachable: {result['url']}")
    print_output(
        {"status": result["status"], "latency": f"{result['latency_ms']}ms"},
        format=OutputFormat.TABLE,
    )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
