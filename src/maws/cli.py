"""Command-line entrypoint for maws.

Usage:
    maws <aws arguments...>     # run aws with cached MFA session credentials
    maws export-envs            # print export statements for eval
    maws delete-session-token   # forget the cached session
"""

from __future__ import annotations

import logging
import sys

import click

from maws import __version__
from maws.config import Settings, load_settings
from maws.credentials import AWSCLIRunner, CredentialCache, CredentialSource, MFARenewal
from maws.delegate import ProcessDelegator, export_shell
from maws.errors import MawsError
from maws.logging_utils import configure_logging

DELETE_SESSION_TOKEN = "delete-session-token"
EXPORT_ENVS = "export-envs"

FAILURE_EXIT_CODE = 1
INTERRUPTED_EXIT_CODE = 130

logger = logging.getLogger(__name__)


def build_source(settings: Settings) -> CredentialSource:
    cache = CredentialCache(settings.session.cache_file)
    runner = AWSCLIRunner(command=settings.aws.command, profile=settings.session.profile)
    return CredentialSource(cache, MFARenewal(runner, cache))


def _delete_session_token(settings: Settings) -> int:
    CredentialCache(settings.session.cache_file).delete()
    return 0


def _export_envs(settings: Settings) -> int:
    cred = build_source(settings).obtain()
    click.echo(export_shell(cred))
    return 0


def _run_aws(settings: Settings, args: tuple[str, ...]) -> int:
    cred = build_source(settings).obtain()
    return ProcessDelegator(settings.aws.command).delegate(cred, args)


def dispatch(settings: Settings, args: tuple[str, ...]) -> int:
    """Route to a reserved subcommand or pass everything through to aws."""
    if args == (DELETE_SESSION_TOKEN,):
        return _delete_session_token(settings)
    if args == (EXPORT_ENVS,):
        return _export_envs(settings)
    return _run_aws(settings, args)


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": [],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(args: tuple[str, ...]) -> None:
    try:
        settings = load_settings()
    except RuntimeError as exc:
        click.echo(f"maws: {exc}", err=True)
        sys.exit(FAILURE_EXIT_CODE)

    configure_logging()
    logger.debug("maws %s, profile=%s", __version__, settings.session.profile)

    try:
        exit_code = dispatch(settings, args)
    except MawsError as exc:
        logger.debug("maws failed with %s", exc.code)
        click.echo(f"maws: {exc}", err=True)
        sys.exit(FAILURE_EXIT_CODE)
    except (click.Abort, KeyboardInterrupt):
        click.echo("", err=True)
        sys.exit(INTERRUPTED_EXIT_CODE)
    sys.exit(exit_code)


def run_entrypoint() -> None:
    cli(prog_name="maws")


if __name__ == "__main__":
    run_entrypoint()
