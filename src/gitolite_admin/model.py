"""Document model for ``gitolite.conf``.

A parsed file is a :class:`Document` holding, in file order, top-level
:class:`Comment`, :class:`Group` and :class:`Repo` entries. Each repo
block keeps its own ordered body of comments, options, configs and
access rules, so the file can be written back the way it was read.
"""

from collections import abc
import dataclasses
import typing as t


class NotFoundError(Exception):
    """Not found"""

    def __str__(self) -> str:
        return f"{self.__doc__}: {': '.join(self.args)}"


@dataclasses.dataclass
class Comment:
    text: str


@dataclasses.dataclass
class Option:
    name: str
    value: str
    comment: t.Optional[str] = None


@dataclasses.dataclass
class Config:
    name: str
    value: str
    comment: t.Optional[str] = None


@dataclasses.dataclass
class Access:
    perm: str
    name: str
    ref: t.Optional[str] = None
    comment: t.Optional[str] = None


BodyEntry = t.Union[Comment, Option, Config, Access]


@dataclasses.dataclass
class Group:
    name: str
    members: list[str] = dataclasses.field(default_factory=list)
    comment: t.Optional[str] = None


@dataclasses.dataclass
class Repo:
    aliases: list[str]
    body: list[BodyEntry] = dataclasses.field(default_factory=list)
    comment: t.Optional[str] = None

    def accesses(self) -> abc.Iterator[Access]:
        for entry in self.body:
            if isinstance(entry, Access):
                yield entry

    def options(self) -> abc.Iterator[Option]:
        for entry in self.body:
            if isinstance(entry, Option):
                yield entry

    def configs(self) -> abc.Iterator[Config]:
        for entry in self.body:
            if isinstance(entry, Config):
                yield entry


Entry = t.Union[Comment, Group, Repo]


@dataclasses.dataclass
class Document:
    entries: list[Entry] = dataclasses.field(default_factory=list)

    def groups(self) -> abc.Iterator[Group]:
        for entry in self.entries:
            if isinstance(entry, Group):
                yield entry

    def repos(self) -> abc.Iterator[Repo]:
        for entry in self.entries:
            if isinstance(entry, Repo):
                yield entry

    def group_members(self) -> dict[str, list[str]]:
        """Map each group name to its members.

        A group defined on more than one line gets the members of all of
        them, in file order.
        """
        members: dict[str, list[str]] = {}
        for group in self.groups():
            members.setdefault(group.name, []).extend(group.members)
        return members

    def get_group(self, name: str) -> Group:
        for group in self.groups():
            if group.name == name:
                return group
        raise NotFoundError("group", name)

    def get_repo(self, alias: str) -> Repo:
        for repo in self.repos():
            if alias in repo.aliases:
                return repo
        raise NotFoundError("repo", alias)
