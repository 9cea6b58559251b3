#!/usr/bin/env python3
"""youup CLI - gateway, internet and DNS reachability diagnostics."""

import sys

import click

from youup.models.constants import CheckMode
from youup.utils.env import get_env
from youup.utils.logger import Logger


@click.group()
def youup():
    """Diagnose whether connectivity problems sit at the gateway, DNS or ISP."""
    if not Logger.is_configured():
        # Logs go to stderr so --json output on stdout stays parseable
        Logger.configure(
            level=get_env("YOUUP_LOG_LEVEL", default="WARNING"),
            output="stderr",
            timestamps=True,
        )


@youup.command()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=get_env("YOUUP_VERBOSE", default=False, as_type=bool),
    help="Show interfaces, routers, DNS servers and test targets first.",
)
@click.option(
    "--gateway-only",
    "mode",
    flag_value=CheckMode.GATEWAY_ONLY.value,
    help="Only check the default gateway.",
)
@click.option(
    "--internet-only",
    "mode",
    flag_value=CheckMode.INTERNET_ONLY.value,
    help="Only check internet endpoints.",
)
@click.option(
    "--dns-only",
    "mode",
    flag_value=CheckMode.DNS_ONLY.value,
    help="Only check DNS resolution.",
)
@click.option(
    "--json",
    "-j",
    "json_output",
    is_flag=True,
    help="Output results in JSON format.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Endpoints configuration file (default: XDG config path)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging on stderr",
)
def check(verbose, mode, json_output, config_file, debug):
    r"""Check gateway, internet and DNS reachability.

    Exits with status 1 when any checked target is unreachable.

    \b
    Examples:
      youup check                   # Full check with diagnosis
      youup check -v                # Include interface and router details
      youup check --gateway-only    # Only probe the default gateway
      youup check --json            # Machine-readable output
    """
    from youup.commands.check_cmd import run_check

    if debug:
        Logger.set_level("DEBUG")

    exit_code = run_check(
        mode=CheckMode(mode) if mode else CheckMode.FULL,
        verbose=verbose,
        json_output=json_output,
        config_file=config_file,
    )
    sys.exit(exit_code)


@youup.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file to show or create (default: XDG config path)",
)
def config(path):
    """Show the configuration file and create a sample if none exists."""
    from youup.commands.config_cmd import run_show_config

    sys.exit(run_show_config(path))


@youup.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display youup version information."""
    from youup.commands.version_cmd import run_version

    if verbose:
        Logger.set_level("DEBUG")

    run_version(verbose=verbose)


if __name__ == "__main__":
    youup()
