"""Common CLI utilities, decorators, and helpers."""

from __future__ import annotations

import sys
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import click

from fedoractl.core.client import FedoraClient
from fedoractl.core.config import Config, Profile
from fedoractl.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    FedoraCtlError,
    ProfileNotFoundError,
    RequestFailedError,
    ResourceNotFoundError,
)
from fedoractl.core.logging import setup_logging
from fedoractl.core.output import OutputFormat, print_error
from fedoractl.services import DatastreamService

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# Context Object
# =============================================================================


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[Config] = None
        self.client: Optional[FedoraClient] = None
        self.profile_name: Optional[str] = None
        self.output_format: OutputFormat = OutputFormat.TABLE
        self.quiet: bool = False
        self.verbose: bool = False

    def get_profile(self) -> Profile:
        """Get the active configuration profile.

        Raises:
            ConfigurationError: If no profile configured.
        """
        if self.config is None:
            self.config = Config.load()

        try:
            return self.config.get_profile(self.profile_name)
        except ProfileNotFoundError:
            raise ConfigurationError(
                f"Profile '{self.profile_name or self.config.default_profile}' not found. "
                "Run 'fedoractl config init' or set FEDORA_URL."
            )

    def get_client(self) -> FedoraClient:
        """Get or create the repository client."""
        if self.client is None:
            self.client = FedoraClient.from_profile(self.get_profile())
        return self.client

    def datastream_service(self) -> DatastreamService:
        """Datastream service honouring the profile's checksum validation setting."""
        return DatastreamService(
            self.get_client(),
            validate_checksum=self.get_profile().validate_checksum,
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


# =============================================================================
# Global Options
# =============================================================================


def global_options(f: F) -> F:
    """Add global options to a command."""

    @click.option(
        "--profile",
        "-p",
        envvar="FEDORA_PROFILE",
        help="Config profile to use",
    )
    @click.option(
        "--output",
        "-o",
        "output_format",
        type=click.Choice(["json", "table"]),
        default="table",
        help="Output format",
    )
    @click.option(
        "--quiet",
        "-q",
        is_flag=True,
        help="Minimal output (identifiers only)",
    )
    @click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose output",
    )
    @pass_context
    @wraps(f)
    def wrapper(
        ctx: Context,
        profile: Optional[str],
        output_format: str,
        quiet: bool,
        verbose: bool,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Populate context from global options and invoke the command."""
        ctx.profile_name = profile
        ctx.output_format = OutputFormat.from_string(output_format)
        ctx.quiet = quiet
        ctx.verbose = verbose

        setup_logging(quiet=quiet, verbose=verbose)

        return f(ctx, *args, **kwargs)

    return wrapper  # type: ignore


# =============================================================================
# Destructive Operation Decorators
# =============================================================================


def confirm_destructive(message: str) -> Callable[[F], F]:
    """Require confirmation for destructive operations."""

    def decorator(f: F) -> F:
        """Wrap a command to enforce confirmation/dry-run behavior."""

        @click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
        @click.option("--dry-run", is_flag=True, help="Preview without making changes")
        @wraps(f)
        def wrapper(*args: Any, yes: bool, dry_run: bool, **kwargs: Any) -> Any:
            """Handle yes/dry-run flags and invoke the command."""
            if dry_run:
                click.echo("[DRY-RUN] Preview mode - no changes will be made", err=True)
            elif not yes:
                click.confirm(message, abort=True)
            kwargs["dry_run"] = dry_run

            return f(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


# =============================================================================
# Error Handling
# =============================================================================


def handle_errors(f: F) -> F:
    """Report fedoractl errors and exit with the matching code."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except click.ClickException:
            raise
        except FedoraCtlError as e:
            print_error(str(e))
            sys.exit(ExitCode.for_error(e))
        except Exception as e:
            print_error(f"Unexpected error: {e}")
            sys.exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCode:
    """Process exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    AUTH_ERROR = 3

    @classmethod
    def for_error(cls, error: BaseException) -> int:
        """Exit code for an error, looking through service request failures."""
        while isinstance(error, RequestFailedError) and error.__cause__ is not None:
            error = error.__cause__
        if isinstance(error, ResourceNotFoundError):
            return cls.NOT_FOUND
        # PermissionDeniedError is an AuthenticationError
        if isinstance(error, AuthenticationError):
            return cls.AUTH_ERROR
        return cls.GENERAL_ERROR
