from collections import abc
import logging

from gitolite_admin import matcher, model

_log = logging.getLogger(__name__)

ALL = "@all"

# deepest chain of groups nested in groups that will be followed
MAX_DEPTH = 64


class ResolutionError(Exception):
    """Cannot resolve group membership"""

    def __str__(self) -> str:
        return f"{self.__doc__}: {': '.join(self.args)}"


def _belongs(
    members: abc.Mapping[str, list[str]],
    identifier: str,
    group: str,
    seen: set[str],
    depth: int,
) -> bool:
    if depth > MAX_DEPTH:
        raise ResolutionError(identifier, f"groups nested deeper than {MAX_DEPTH} at {group}")
    if group in seen:
        return False
    seen.add(group)

    for member in members.get(group, ()):
        # @all is the only member that needs no lookup, it holds everyone
        if member == ALL or matcher.matches(identifier, member):
            return True
        if member.startswith("@") and _belongs(members, identifier, member, seen, depth + 1):
            return True
    return False


def resolve_groups(document: model.Document, identifier: str) -> set[str]:
    """Return the names of all groups ``identifier`` belongs to.

    ``identifier`` may be a user, a repository or a group name; nested
    groups are followed, and a loop of groups naming each other ends the
    search on that branch.

    Chains of groups nested more than ``MAX_DEPTH`` deep are refused with
    :class:`ResolutionError`, even when they hold no loop.
    """
    members = document.group_members()
    found = set()
    for group in members:
        if _belongs(members, identifier, group, set(), 0):
            _log.debug("found %s in %s", identifier, group)
            found.add(group)
    return found


def _expand(
    members: abc.Mapping[str, list[str]],
    group: str,
    seen: set[str],
) -> abc.Iterator[str]:
    if group in seen:
        return
    seen.add(group)
    for member in members.get(group, ()):
        if member.startswith("@"):
            yield from _expand(members, member, seen)
        else:
            yield member


def get_members(document: model.Document, group: str) -> list[str]:
    """List the non-group members of ``group``, nested groups included."""
    found: list[str] = []
    for member in _expand(document.group_members(), group, set()):
        if member not in found:
            found.append(member)
    return found
