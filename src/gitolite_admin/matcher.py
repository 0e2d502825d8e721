import functools
import re

REGEX_CHARS = frozenset("^[]*?()$")

SAFE_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9._-]*$")


class PatternError(Exception):
    """Invalid pattern"""

    def __init__(self, clause: str, reason: str) -> None:
        super().__init__(clause, reason)
        self.clause = clause

    def __str__(self) -> str:
        return f"{self.__doc__}: {': '.join(self.args)}"


def is_regex(name: str) -> bool:
    return not REGEX_CHARS.isdisjoint(name)


def is_safe_name(name: str) -> bool:
    """Check ``name`` is usable as a user or repository name on disk."""
    return SAFE_NAME_RE.match(name) is not None


@functools.lru_cache(maxsize=256)
def _compile(clause: str) -> re.Pattern:
    try:
        return re.compile(clause)
    except re.error as e:
        raise PatternError(clause, str(e)) from e


def matches(candidate: str, clause: str) -> bool:
    """Test ``candidate`` against a name clause.

    Clauses holding any of ``^[]*?()$`` are regular expressions searched
    anywhere in ``candidate``; everything else must be equal.
    """
    if candidate == clause:
        return True
    if is_regex(clause):
        return _compile(clause).search(candidate) is not None
    return False
