"""Route access policy: which requirement each (method, path) carries, and how it is evaluated."""

import re
from dataclasses import dataclass
from enum import Enum

from starlette.routing import compile_path

from bookstore.schemas.auth import CurrentUser
from bookstore.services.credentials import ADMINISTRATOR


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class Public:
    """No token needed."""


@dataclass(frozen=True)
class AnyAuthenticated:
    """A valid token, any role."""


@dataclass(frozen=True)
class RequiresRole:
    """A valid token whose roles include name."""

    name: str


Requirement = Public | AnyAuthenticated | RequiresRole

PUBLIC = Public()
ANY_AUTHENTICATED = AnyAuthenticated()
ADMIN_ONLY = RequiresRole(ADMINISTRATOR)


def authorize(requirement: Requirement, user: CurrentUser | None) -> Decision:
    """Decide whether user (None when no valid token was presented) meets requirement."""
    if isinstance(requirement, Public):
        return Decision.ALLOW
    if user is None:
        return Decision.DENY
    if isinstance(requirement, RequiresRole) and not user.has_role(requirement.name):
        return Decision.DENY
    return Decision.ALLOW


class RoutePolicy:
    """
    Table of {(method, path template) -> requirement}, paths relative to the API prefix.

    Templates use the router's syntax ("/books/{book_id}"). Requests matching
    no entry get the default requirement.
    """

    def __init__(
        self,
        rules: dict[tuple[str, str], Requirement],
        default: Requirement = ANY_AUTHENTICATED,
    ) -> None:
        self.rules = dict(rules)
        self.default = default
        self._compiled: list[tuple[str, re.Pattern[str], Requirement]] = [
            (method.upper(), compile_path(path)[0], requirement)
            for (method, path), requirement in self.rules.items()
        ]

    def requirement_for(self, method: str, path: str) -> Requirement:
        method = method.upper()
        if method == "HEAD":
            method = "GET"
        for rule_method, pattern, requirement in self._compiled:
            if rule_method == method and pattern.match(path):
                return requirement
        return self.default


ROUTE_POLICY = RoutePolicy(
    {
        ("GET", "/health"): PUBLIC,
        ("POST", "/users/register"): PUBLIC,
        ("POST", "/users/login"): PUBLIC,
        ("GET", "/authors"): PUBLIC,
        ("GET", "/authors/{author_id}"): PUBLIC,
        ("POST", "/authors"): ANY_AUTHENTICATED,
        ("PUT", "/authors/{author_id}"): ANY_AUTHENTICATED,
        ("DELETE", "/authors/{author_id}"): ANY_AUTHENTICATED,
        ("GET", "/books"): ANY_AUTHENTICATED,
        ("GET", "/books/{book_id}"): ANY_AUTHENTICATED,
        ("POST", "/books"): ADMIN_ONLY,
        ("PUT", "/books/{book_id}"): ADMIN_ONLY,
        ("DELETE", "/books/{book_id}"): ADMIN_ONLY,
    }
)
