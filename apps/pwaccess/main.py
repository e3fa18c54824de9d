"""pwaccess entrypoint: maintain a passlist password file from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from passlist.application.errors import PassListError
from passlist.application.ports.password_prompt_port import PasswordPromptPort
from passlist.application.services.pass_list import resolve_passwd_path
from passlist.application.services.pass_list_admin_service import (
    AdminOutcome,
    AdminResult,
    PassListAdminService,
)
from passlist.config.settings import load_settings
from passlist.infrastructure.cli.password_prompt import GetpassPasswordPrompt
from passlist.infrastructure.logging import configure_logging
from passlist.infrastructure.security.password_hasher import BcryptPasswordHasher

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the pwaccess argument parser."""

    parser = argparse.ArgumentParser(
        prog="pwaccess",
        description="Maintain the user/password list of a passlist password file.",
    )
    parser.add_argument(
        "--add",
        metavar="USERNAME",
        help="name of the user to add to the file (prompting for the password)",
    )
    parser.add_argument(
        "--chk",
        metavar="USERNAME",
        help="name of the user whose password to check (prompting for the password)",
    )
    parser.add_argument(
        "--del",
        dest="delete",
        metavar="USERNAME",
        help="name of the user to remove from the file",
    )
    parser.add_argument(
        "--file",
        metavar="FILENAME",
        default=None,
        help="name of the password file to use (default: PASSLIST_FILE or pwaccess.db)",
    )
    parser.add_argument(
        "--lst",
        action="store_true",
        help="list all current usernames from the file",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress non-essential messages",
    )
    parser.add_argument(
        "--upd",
        metavar="USERNAME",
        help="name of the user to update in the file (prompting for the password)",
    )
    return parser


def build_admin_service(
    *,
    path: str,
    prompt: PasswordPromptPort,
    bcrypt_rounds: int | None = None,
) -> PassListAdminService:
    """Build the admin service for one password file."""

    settings = load_settings()
    return PassListAdminService(
        path=resolve_passwd_path(path),
        hasher=BcryptPasswordHasher(
            rounds=bcrypt_rounds if bcrypt_rounds is not None else settings.bcrypt_rounds
        ),
        prompt=prompt,
        pepper=settings.pepper,
    )


def dispatch(args: argparse.Namespace, service: PassListAdminService) -> AdminResult | None:
    """Run the first requested command; None when no command was given."""

    if args.add:
        return service.add_user(args.add)
    if args.chk:
        return service.check_user(args.chk)
    if args.delete:
        return service.delete_user(args.delete)
    if args.lst:
        return service.list_users()
    if args.upd:
        return service.update_user(args.upd)
    return None


def run(
    argv: Sequence[str] | None = None,
    *,
    prompt: PasswordPromptPort | None = None,
    bcrypt_rounds: int | None = None,
) -> int:
    """Execute pwaccess and return the process exit code."""

    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    configure_logging(level=settings.log_level, quiet=args.quiet)

    try:
        service = build_admin_service(
            path=args.file or settings.passwd_file,
            prompt=prompt if prompt is not None else GetpassPasswordPrompt(quiet=args.quiet),
            bcrypt_rounds=bcrypt_rounds,
        )
        result = dispatch(args, service)
    except PassListError as exc:
        if not args.quiet:
            print(f"\n\t{exc}\n", file=sys.stderr)
        logger.debug("pwaccess_failed error=%s", exc)
        return EXIT_FAILURE

    if result is None:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    if result.outcome is AdminOutcome.LISTED:
        print(result.message)
    elif not args.quiet:
        print(f"\t{result.message}\n")
    return EXIT_SUCCESS


def main() -> None:
    """Run pwaccess and exit with its status code."""

    sys.exit(run())


if __name__ == "__main__":
    main()
