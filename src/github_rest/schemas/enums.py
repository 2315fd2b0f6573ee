"""Enums for Pydantic schemas."""

from enum import Enum


class Permission(str, Enum):
    """Repository permission level of a collaborator.

    See: https://docs.github.com/en/organizations/managing-user-access-to-your-organizations-repositories/repository-roles-for-an-organization
    """

    NONE = "none"
    READ = "read"
    TRIAGE = "triage"
    WRITE = "write"
    MAINTAIN = "maintain"
    ADMIN = "admin"


class IssueState(str, Enum):
    """State filter for issues and pull requests."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class Scope(str, Enum):
    """OAuth scopes a token can be granted.

    See: https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/scopes-for-oauth-apps
    """

    REPO = "repo"
    REPO_STATUS = "repo:status"
    REPO_DEPLOYMENT = "repo_deployment"
    PUBLIC_REPO = "public_repo"
    REPO_INVITE = "repo:invite"
    SECURITY_EVENTS = "security_events"
    WRITE_PACKAGES = "write:packages"
    READ_PACKAGES = "read:packages"
    DELETE_PACKAGES = "delete:packages"
    ADMIN_ORG = "admin:org"
    WRITE_ORG = "write:org"
    READ_ORG = "read:org"
    USER = "user"
    READ_USER = "read:user"
    USER_EMAIL = "user:email"
    USER_FOLLOW = "user:follow"
    GIST = "gist"
    NOTIFICATIONS = "notifications"
    WORKFLOW = "workflow"
    DELETE_REPO = "delete_repo"
