"""GitHub search qualifiers.

A qualifier is an opaque ``key:value`` token understood by the search
syntax. Fixed qualifiers are members of StandardQualifier; parametrised
ones are built by the functions below and share the same Qualifier type.

See: https://docs.github.com/en/search-github/searching-on-github
"""

from __future__ import annotations

import json
from datetime import date
from enum import Enum

DATE_FORMAT = "%Y-%m-%d"


class Qualifier(str):
    """Opaque search qualifier token."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Qualifier({str.__repr__(self)})"


class StandardQualifier(Qualifier, Enum):
    """Qualifiers that take no argument."""

    # Result type
    TYPE_USER = "type:user"
    TYPE_ORG = "type:org"
    TYPE_PR = "type:pr"
    TYPE_ISSUE = "type:issue"
    IS_PR = "is:pr"
    IS_ISSUE = "is:issue"

    # Fields searched
    IN_LOGIN = "in:login"
    IN_EMAIL = "in:email"
    IN_NAME = "in:name"
    IN_DESCRIPTION = "in:description"
    IN_README = "in:readme"
    IN_TITLE = "in:title"
    IN_BODY = "in:body"
    IN_COMMENTS = "in:comments"

    # Issue and pull request state
    STATE_OPEN = "state:open"
    STATE_CLOSED = "state:closed"
    IS_OPEN = "is:open"
    IS_CLOSED = "is:closed"
    IS_MERGED = "is:merged"
    IS_UNMERGED = "is:unmerged"
    IS_LOCKED = "is:locked"
    IS_UNLOCKED = "is:unlocked"
    DRAFT_TRUE = "draft:true"
    DRAFT_FALSE = "draft:false"

    # Commit status of pull requests
    STATUS_PENDING = "status:pending"
    STATUS_SUCCESS = "status:success"
    STATUS_FAILURE = "status:failure"

    # Repository visibility
    IS_PUBLIC = "is:public"
    IS_INTERNAL = "is:internal"
    IS_PRIVATE = "is:private"
    ARCHIVED_TRUE = "archived:true"
    ARCHIVED_FALSE = "archived:false"

    __str__ = str.__str__
    __format__ = str.__format__


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


# -----------------------------------------------------------------------------
# People, organisations and repositories
# -----------------------------------------------------------------------------
def user(username: str) -> Qualifier:
    """Match resources owned by a user."""
    return Qualifier(f"user:{username}")


def org(orgname: str) -> Qualifier:
    """Match resources owned by an organization."""
    return Qualifier(f"org:{orgname}")


def repo(owner: str, name: str) -> Qualifier:
    """Match a single repository."""
    return Qualifier(f"repo:{owner}/{name}")


def author(username: str) -> Qualifier:
    """Match issues and pull requests opened by a user."""
    return Qualifier(f"author:{username}")


def author_app(app: str) -> Qualifier:
    """Match issues and pull requests opened by a GitHub App."""
    return Qualifier(f"author:app/{app}")


def assignee(username: str) -> Qualifier:
    """Match issues and pull requests assigned to a user."""
    return Qualifier(f"assignee:{username}")


# -----------------------------------------------------------------------------
# Free-form names (quoted)
# -----------------------------------------------------------------------------
def label(name: str) -> Qualifier:
    """Match issues and pull requests with a label."""
    return Qualifier(f"label:{_quote(name)}")


def milestone(name: str) -> Qualifier:
    """Match issues and pull requests in a milestone."""
    return Qualifier(f"milestone:{_quote(name)}")


def project(board: str) -> Qualifier:
    """Match issues and pull requests on a project board."""
    return Qualifier(f"project:{_quote(board)}")


def repo_project(owner: str, name: str, board: str) -> Qualifier:
    """Match issues and pull requests on a repository project board."""
    return Qualifier(f"project:{owner}/{name}/{board}")


# -----------------------------------------------------------------------------
# Branches, languages and topics
# -----------------------------------------------------------------------------
def head(branch: str) -> Qualifier:
    """Match pull requests opened from a branch."""
    return Qualifier(f"head:{branch}")


def base(branch: str) -> Qualifier:
    """Match pull requests targeting a branch."""
    return Qualifier(f"base:{branch}")


def language(name: str) -> Qualifier:
    """Match repositories, issues or pull requests by language."""
    return Qualifier(f"language:{name}")


def topic(name: str) -> Qualifier:
    """Match repositories with a topic."""
    return Qualifier(f"topic:{name}")


# -----------------------------------------------------------------------------
# Dates
#
# Dates are rendered as YYYY-MM-DD in the value's own timezone; the token
# carries no offset.
# -----------------------------------------------------------------------------
def _on(key: str, value: date) -> Qualifier:
    return Qualifier(f"{key}:{_date(value)}")


def _compare(key: str, op: str, value: date) -> Qualifier:
    return Qualifier(f"{key}:{op}{_date(value)}")


def _between(key: str, start: date, end: date) -> Qualifier:
    return Qualifier(f"{key}:{_date(start)}..{_date(end)}")


def created_on(value: date) -> Qualifier:
    """Match issues and pull requests created on a date."""
    return _on("created", value)


def created_after(value: date) -> Qualifier:
    """Match issues and pull requests created after a date."""
    return _compare("created", ">", value)


def created_on_or_after(value: date) -> Qualifier:
    """Match issues and pull requests created on or after a date."""
    return _compare("created", ">=", value)


def created_before(value: date) -> Qualifier:
    """Match issues and pull requests created before a date."""
    return _compare("created", "<", value)


def created_on_or_before(value: date) -> Qualifier:
    """Match issues and pull requests created on or before a date."""
    return _compare("created", "<=", value)


def created_between(start: date, end: date) -> Qualifier:
    """Match issues and pull requests created between two dates."""
    return _between("created", start, end)


def updated_on(value: date) -> Qualifier:
    """Match issues and pull requests updated on a date."""
    return _on("updated", value)


def updated_after(value: date) -> Qualifier:
    """Match issues and pull requests updated after a date."""
    return _compare("updated", ">", value)


def updated_on_or_after(value: date) -> Qualifier:
    """Match issues and pull requests updated on or after a date."""
    return _compare("updated", ">=", value)


def updated_before(value: date) -> Qualifier:
    """Match issues and pull requests updated before a date."""
    return _compare("updated", "<", value)


def updated_on_or_before(value: date) -> Qualifier:
    """Match issues and pull requests updated on or before a date."""
    return _compare("updated", "<=", value)


def updated_between(start: date, end: date) -> Qualifier:
    """Match issues and pull requests updated between two dates."""
    return _between("updated", start, end)


def closed_on(value: date) -> Qualifier:
    """Match issues and pull requests closed on a date."""
    return _on("closed", value)


def closed_after(value: date) -> Qualifier:
    """Match issues and pull requests closed after a date."""
    return _compare("closed", ">", value)


def closed_on_or_after(value: date) -> Qualifier:
    """Match issues and pull requests closed on or after a date."""
    return _compare("closed", ">=", value)


def closed_before(value: date) -> Qualifier:
    """Match issues and pull requests closed before a date."""
    return _compare("closed", "<", value)


def closed_on_or_before(value: date) -> Qualifier:
    """Match issues and pull requests closed on or before a date."""
    return _compare("closed", "<=", value)


def closed_between(start: date, end: date) -> Qualifier:
    """Match issues and pull requests closed between two dates."""
    return _between("closed", start, end)


def merged_on(value: date) -> Qualifier:
    """Match pull requests merged on a date."""
    return _on("merged", value)


def merged_after(value: date) -> Qualifier:
    """Match pull requests merged after a date."""
    return _compare("merged", ">", value)


def merged_on_or_after(value: date) -> Qualifier:
    """Match pull requests merged on or after a date."""
    return _compare("merged", ">=", value)


def merged_before(value: date) -> Qualifier:
    """Match pull requests merged before a date."""
    return _compare("merged", "<", value)


def merged_on_or_before(value: date) -> Qualifier:
    """Match pull requests merged on or before a date."""
    return _compare("merged", "<=", value)


def merged_between(start: date, end: date) -> Qualifier:
    """Match pull requests merged between two dates."""
    return _between("merged", start, end)
