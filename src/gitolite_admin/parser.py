"""Read ``gitolite.conf`` text into a :class:`~gitolite_admin.model.Document`.

The format is line oriented::

    @devs = alice bob # the developers
    repo foo bar
        RW+ = @devs
        R master = carol
        option deny-rules = 1
        config gitweb.owner = Alice

Comment lines inside a repo block are kept back until the next line
decides where they belong: a body line pulls them into the current repo,
a ``repo`` or group line puts them back at the top level in front of it.
"""

import logging
import re
import typing as t

from gitolite_admin import model

_log = logging.getLogger(__name__)

REPO_PREFIX = "repo "
OPTION_PREFIX = "option "
CONFIG_PREFIX = "config "

_COMMENT_RE = re.compile(r"(?<!\\)#")


class ConfigSyntaxError(Exception):
    """Syntax error"""

    def __init__(self, message: str, lineno: int, line: str) -> None:
        super().__init__(message, lineno, line)
        self.message = message
        self.lineno = lineno
        self.line = line

    def __str__(self) -> str:
        return f"{self.__doc__}: line {self.lineno}: {self.message}: {self.line!r}"


def normalize(line: str) -> str:
    return " ".join(line.split())


def split_comment(text: str) -> tuple[str, t.Optional[str]]:
    """Split ``text`` at the first unescaped ``#``."""
    match = _COMMENT_RE.search(text)
    if match is None:
        return text.strip(), None
    comment = text[match.end() :].strip()
    return text[: match.start()].strip(), comment or None


def _split_pair(text: str, lineno: int, line: str) -> tuple[str, str, t.Optional[str]]:
    code, comment = split_comment(text)
    parts = code.split("=")
    if len(parts) != 2:
        raise ConfigSyntaxError("expected key/value pair", lineno, line)
    key, value = parts
    return key.strip(), value.strip(), comment


def _parse_body(text: str, lineno: int, line: str) -> model.BodyEntry:
    key, value, comment = _split_pair(text, lineno, line)
    if key.startswith(OPTION_PREFIX):
        return model.Option(name=key[len(OPTION_PREFIX) :].strip(), value=value, comment=comment)
    if key.startswith(CONFIG_PREFIX):
        return model.Config(name=key[len(CONFIG_PREFIX) :].strip(), value=value, comment=comment)
    if not key:
        raise ConfigSyntaxError("expected permission", lineno, line)
    if not value:
        raise ConfigSyntaxError("expected user or group name", lineno, line)
    perm, _, ref = key.partition(" ")
    return model.Access(perm=perm, name=value, ref=ref or None, comment=comment)


def parse(text: str) -> model.Document:
    """Parse configuration ``text``.

    Raises :class:`ConfigSyntaxError` on the first malformed line; no
    partial document is returned.
    """
    document = model.Document()
    repo: t.Optional[model.Repo] = None
    pending: list[str] = []

    def flush(entries: list) -> None:
        entries.extend(model.Comment(text=comment) for comment in pending)
        pending.clear()

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = normalize(raw)
        if not line:
            continue

        if line.startswith("#"):
            comment = line[1:].strip()
            if repo is None:
                document.entries.append(model.Comment(text=comment))
            else:
                pending.append(comment)
            continue

        if line.startswith("@"):
            name, members, comment = _split_pair(line, lineno, raw)
            flush(document.entries)
            document.entries.append(model.Group(name=name, members=members.split(), comment=comment))
            continue

        if line.startswith(REPO_PREFIX):
            aliases, comment = split_comment(line[len(REPO_PREFIX) :])
            if not aliases:
                raise ConfigSyntaxError("expected repository name", lineno, raw)
            flush(document.entries)
            repo = model.Repo(aliases=aliases.split(), comment=comment)
            _log.debug("Line %d opens repo block %s", lineno, aliases)
            document.entries.append(repo)
            continue

        if repo is None:
            raise ConfigSyntaxError("expected to be inside a repo block", lineno, raw)

        entry = _parse_body(line, lineno, raw)
        flush(repo.body)
        repo.body.append(entry)

    # comments trailing the last repo block belong to the file, not the repo
    flush(document.entries)
    return document
