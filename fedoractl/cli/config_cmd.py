"""Config commands for fedoractl."""

from __future__ import annotations

from typing import Optional

import click

from fedoractl.core.config import CONFIG_FILE, Config
from fedoractl.core.exceptions import ConfigurationError, ValidationError
from fedoractl.core.output import OutputFormat, print_error, print_key_value, print_output, print_success
from fedoractl.core.validation import validate_server_url


def _load() -> Config:
    try:
        return Config.load()
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(1)


@click.group()
def config() -> None:
    """Manage fedoractl configuration."""
    pass


@config.command("init")
@click.option("--url", prompt="Fedora base URL", help="Repository base URL, e.g. http://localhost:8080/fedora")
@click.option("--profile", default="default", help="Profile name")
@click.option("--user", default=None, help="Username for basic authentication")
@click.option("--timeout", type=int, default=None, help="Read timeout in seconds")
@click.option("--open-timeout", type=int, default=None, help="Connect timeout in seconds")
@click.option("--ssl-client-cert", type=click.Path(exists=True), default=None, help="Client certificate")
@click.option("--ssl-client-key", type=click.Path(exists=True), default=None, help="Client key")
@click.option("--no-verify-ssl", is_flag=True, help="Skip TLS certificate verification")
@click.option("--force", is_flag=True, help="Overwrite an existing profile")
def config_init(
    url: str,
    profile: str,
    user: Optional[str],
    timeout: Optional[int],
    open_timeout: Optional[int],
    ssl_client_cert: Optional[str],
    ssl_client_key: Optional[str],
    no_verify_ssl: bool,
    force: bool,
) -> None:
    """Create or update a profile in the configuration file.

    The password is never stored; set FEDORA_PASSWORD instead.

    Example:
        fedoractl config init --url http://localhost:8080/fedora --user fedoraAdmin
    """
    try:
        url = validate_server_url(url)
    except ValidationError as e:
        print_error(str(e))
        raise SystemExit(1)

    cfg = _load() if CONFIG_FILE.exists() else Config()
    if cfg.has_profile(profile) and not force:
        print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
        raise SystemExit(1)

    settings = {
        "user": user,
        "open_timeout": open_timeout,
        "ssl_client_cert": ssl_client_cert,
        "ssl_client_key": ssl_client_key,
        "verify_ssl": not no_verify_ssl,
    }
    if timeout is not None:
        settings["timeout"] = timeout
    cfg.add_profile(profile, url, **settings)

    if len(cfg.profiles) == 1:
        cfg.default_profile = profile

    cfg.save()

    print_success(f"Configuration saved to {CONFIG_FILE}")
    print_key_value({"profile": profile, "url": url, "user": user or "-"})


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
def config_show(output: str) -> None:
    """Show current configuration."""
    cfg = _load()

    if not cfg.profiles:
        print_error("No configuration found. Run 'fedoractl config init' first.")
        raise SystemExit(1)

    if output == "json":
        print_output(
            {
                "config_file": str(CONFIG_FILE),
                "default_profile": cfg.default_profile,
                "profiles": {name: p.to_dict() for name, p in cfg.profiles.items()},
            },
            format=OutputFormat.JSON,
        )
        return

    print_key_value(
        {"config_file": str(CONFIG_FILE), "default_profile": cfg.default_profile},
        title="Configuration",
    )
    for name, profile in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo()
        click.echo(f"Profile: {name}{marker}")
        print_key_value(profile.to_dict())


@config.command("use-profile")
@click.argument("profile")
def config_use_profile(profile: str) -> None:
    """Switch the default profile.

    Example:
        fedoractl config use-profile production
    """
    cfg = _load()

    if not cfg.has_profile(profile):
        print_error(f"Profile '{profile}' not found.")
        click.echo(f"Available profiles: {', '.join(cfg.profiles.keys())}")
        raise SystemExit(1)

    cfg.set_default_profile(profile)
    cfg.save()

    print_success(f"Switched to profile '{profile}'")
