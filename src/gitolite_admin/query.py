"""Show what access ``gitolite.conf`` grants a user."""

import configparser
import logging
import optparse
import re
import sys

from gitolite_admin import access, app, fmt, matcher, util
from gitolite_admin.group import ResolutionError
from gitolite_admin.parser import ConfigSyntaxError

_log = logging.getLogger(__name__)


class UnsafeNameError(Exception):
    """Name contains not allowed characters"""

    def __str__(self) -> str:
        return f"{self.__doc__}: {': '.join(self.args)}"


USER_RE = re.compile(r"^@?[a-zA-Z0-9][a-zA-Z0-9@._+-]*$")


def check_user(user: str) -> str:
    # users may be email addresses, and groups can be queried too
    if USER_RE.match(user) is not None:
        return user
    raise UnsafeNameError(repr(user))


def check_name(name: str) -> str:
    # repositories may live in subdirectories
    if all(matcher.is_safe_name(part) for part in name.split("/")):
        return name
    raise UnsafeNameError(repr(name))


def format_permission(permission: access.Permission) -> str:
    if permission.ref is None:
        return permission.perm
    return f"{permission.perm} {permission.ref}"


class Main(app.App):
    def create_parser(self) -> optparse.OptionParser:
        parser = super().create_parser()
        parser.set_usage("%prog [OPTS] USER [REPO]")
        parser.set_description("Show the access rules that apply to USER")
        parser.add_option(
            "--admin",
            action="store_true",
            default=False,
            help="only check whether USER administers the gitolite-admin repository",
        )
        return parser

    def handle_args(
        self,
        parser: optparse.OptionParser,
        cfg: configparser.ConfigParser,
        options: optparse.Values,
        args: list[str],
    ) -> None:
        if len(args) not in (1, 2):
            parser.error("Expected arguments USER [REPO].")
        user = args[0]
        repo = args[1] if len(args) == 2 else None

        path = util.get_conf_path(cfg)
        try:
            check_user(user)
            if repo is not None:
                check_name(repo)
            document = fmt.read_document(path)
            if options.admin:
                admin = access.is_admin(document, user)
                print("yes" if admin else "no")
                sys.exit(0 if admin else 1)
            if repo is None:
                for grant in access.list_user_repos(document, user):
                    print(format_permission(access.Permission(grant.perm, grant.ref)), grant.name)
            else:
                for permission in access.resolve_access(document, repo, user):
                    print(format_permission(permission))
        except (UnsafeNameError, ConfigSyntaxError, matcher.PatternError, ResolutionError, OSError) as e:
            _log.error("%s", e)
            sys.exit(1)
