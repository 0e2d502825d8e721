"""Rewrite ``gitolite.conf`` in canonical form."""

import configparser
import logging
import optparse
import sys

from gitolite_admin import app, model, serializer, util
from gitolite_admin.parser import ConfigSyntaxError, parse

_log = logging.getLogger(__name__)


def read_document(path: str) -> model.Document:
    return parse(util.read_file(path))


def write_document(path: str, document: model.Document) -> None:
    util.write_file(path, serializer.serialize(document))


def format_file(path: str, *, check: bool = False) -> bool:
    """Canonicalize the configuration at ``path``.

    Returns whether the file was (or, with ``check``, would be) changed.
    The file is only written when its contents change.
    """
    text = util.read_file(path)
    canonical = serializer.serialize(parse(text))
    if canonical == text:
        return False
    if not check:
        _log.info("Rewriting %s", path)
        util.write_file(path, canonical)
    return True


class Main(app.App):
    def create_parser(self) -> optparse.OptionParser:
        parser = super().create_parser()
        parser.set_usage("%prog [OPTS]")
        parser.set_description("Rewrite gitolite.conf in canonical form")
        parser.add_option(
            "--check",
            action="store_true",
            default=False,
            help="only report whether the file needs formatting",
        )
        return parser

    def handle_args(
        self,
        parser: optparse.OptionParser,
        cfg: configparser.ConfigParser,
        options: optparse.Values,
        args: list[str],
    ) -> None:
        super().handle_args(parser, cfg, options, args)

        path = util.get_conf_path(cfg)
        try:
            changed = format_file(path, check=options.check)
        except (ConfigSyntaxError, OSError) as e:
            _log.error("%s: %s", path, e)
            sys.exit(1)

        if options.check and changed:
            _log.error("%s is not in canonical form", path)
            sys.exit(1)
