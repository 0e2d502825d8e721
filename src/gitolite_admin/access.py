import logging
import typing as t

from gitolite_admin import group, matcher, model

_log = logging.getLogger(__name__)

ADMIN_REPO = "gitolite-admin"
ADMIN_PERM = "RW+"


class Permission(t.NamedTuple):
    perm: str
    ref: t.Optional[str] = None


class RepoGrant(t.NamedTuple):
    name: str
    perm: str
    ref: t.Optional[str] = None


def _direct_access(document: model.Document, repo: str, user: str) -> list[Permission]:
    found = []
    for block in document.repos():
        if not any(matcher.matches(repo, alias) for alias in block.aliases):
            continue
        for rule in block.accesses():
            # names were already widened through groups by the caller
            if rule.name == user:
                found.append(Permission(rule.perm, rule.ref))
    return found


def resolve_access(
    document: model.Document,
    repo: str,
    user: str,
    *,
    include_groups: bool = True,
) -> list[Permission]:
    """Collect the access rules that apply to ``user`` on ``repo``.

    With ``include_groups``, rules granted through a group ``repo`` is in,
    a group ``user`` is in, or both at once are included as well. Everyone
    and every repository is in ``@all``.

    Returns ``(perm, ref)`` pairs in the order they were found, without
    duplicates; an empty list means no rule applies.
    """
    _log.debug("Access check for %s on %s...", user, repo)
    found = _direct_access(document, repo, user)
    if not include_groups:
        return found

    repo_groups = sorted(group.resolve_groups(document, repo) | {group.ALL})
    user_groups = sorted(group.resolve_groups(document, user) | {group.ALL})

    for repo_group in repo_groups:
        found.extend(_direct_access(document, repo_group, user))
    for user_group in user_groups:
        found.extend(_direct_access(document, repo, user_group))
    for repo_group in repo_groups:
        for user_group in user_groups:
            found.extend(_direct_access(document, repo_group, user_group))

    unique = list(dict.fromkeys(found))
    _log.debug("Access for %s on %s: %r", user, repo, unique)
    return unique


def is_admin(document: model.Document, user: str) -> bool:
    """Check ``user`` may rewrite every ref of the admin repository."""
    return Permission(ADMIN_PERM, None) in resolve_access(document, ADMIN_REPO, user)


def _concrete_repos(document: model.Document) -> list[str]:
    names: list[str] = []
    for block in document.repos():
        for alias in block.aliases:
            repos = group.get_members(document, alias) if alias.startswith("@") else [alias]
            for name in repos:
                if not matcher.is_regex(name) and name not in names:
                    names.append(name)
    return names


def list_user_repos(document: model.Document, user: str) -> list[RepoGrant]:
    """List the concrete repositories ``user`` has a rule on.

    Concrete repositories are the literal repo names and the literal
    members of groups used as repo names. Each rule reaching ``user`` is
    reported for every concrete repository its block covers, whether by
    name, through a group, through ``@all`` or by regular expression.
    """
    names = group.resolve_groups(document, user) | {user, group.ALL}
    repos = _concrete_repos(document)
    repo_groups = {repo: group.resolve_groups(document, repo) | {group.ALL} for repo in repos}

    grants: list[RepoGrant] = []
    for block in document.repos():
        rules = [rule for rule in block.accesses() if rule.name in names]
        if not rules:
            continue
        covered = [
            repo
            for repo in repos
            if any(alias in repo_groups[repo] or matcher.matches(repo, alias) for alias in block.aliases)
        ]
        for rule in rules:
            for repo in covered:
                grant = RepoGrant(repo, rule.perm, rule.ref)
                if grant not in grants:
                    grants.append(grant)
    return grants
