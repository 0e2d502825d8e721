"""Write a :class:`~gitolite_admin.model.Document` back out as text."""

from collections import abc
import typing as t

from gitolite_admin import model

INDENT = "\t"

# permissions without a ref are padded so the "=" lines up
PERM_WIDTH = 4


def _with_comment(line: str, comment: t.Optional[str]) -> str:
    if comment:
        return f"{line} # {comment}"
    return line


def _body_line(entry: model.BodyEntry) -> str:
    if isinstance(entry, model.Access):
        if entry.ref:
            key = f"{entry.perm} {entry.ref}"
        else:
            key = entry.perm.ljust(PERM_WIDTH)
        return _with_comment(f"{key} = {entry.name}", entry.comment)
    if isinstance(entry, model.Option):
        return _with_comment(f"option {entry.name} = {entry.value}", entry.comment)
    if isinstance(entry, model.Config):
        return _with_comment(f"config {entry.name} = {entry.value}", entry.comment)
    if isinstance(entry, model.Comment):
        return f"# {entry.text}"
    raise TypeError(f"unknown repo body entry: {entry!r}")


def _entry_lines(entry: model.Entry) -> abc.Iterator[str]:
    if isinstance(entry, model.Group):
        line = f"{entry.name} ="
        if entry.members:
            line = f"{line} {' '.join(entry.members)}"
        yield _with_comment(line, entry.comment)
    elif isinstance(entry, model.Repo):
        yield _with_comment(f"repo {' '.join(entry.aliases)}", entry.comment)
        for sub in entry.body:
            yield INDENT + _body_line(sub)
    elif isinstance(entry, model.Comment):
        yield f"# {entry.text}"
    else:
        raise TypeError(f"unknown entry: {entry!r}")


def serialize(document: model.Document) -> str:
    out = []
    for entry in document.entries:
        out.extend(f"{line}\n" for line in _entry_lines(entry))
        out.append("\n")
    return "".join(out)
