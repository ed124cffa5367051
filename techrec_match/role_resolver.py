"""Role lookup interface used by the batch scorer.

The engine never owns role storage. Callers hand the batch scorer anything
that implements the ``RoleResolver`` protocol (a database repository, an API
client, ...) or a plain ``role_id -> Role | None`` callable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from .models import Role


@runtime_checkable
class RoleResolver(Protocol):
    """Pluggable role lookup.

    ``resolve`` returns ``None`` for unknown IDs. Any exception it raises is
    reported by the batch scorer as a processing error for that role only.
    """

    def resolve(self, role_id: str) -> Role | None:
        ...


class InMemoryRoleResolver:
    """Resolve roles from a list the caller already holds."""

    def __init__(self, roles: Iterable[Role]) -> None:
        self._roles = {role.id: role for role in roles}

    def resolve(self, role_id: str) -> Role | None:
        return self._roles.get(role_id)

    def __len__(self) -> int:
        return len(self._roles)


class CombinedRoleResolver:
    """Ask several resolvers in order and return the first hit."""

    def __init__(self, resolvers: list[RoleResolver]) -> None:
        self.resolvers = resolvers

    def resolve(self, role_id: str) -> Role | None:
        for resolver in self.resolvers:
            role = resolver.resolve(role_id)
            if role is not None:
                return role
        return None


class _CallableResolver:
    def __init__(self, func: Callable[[str], Role | None]) -> None:
        self._func = func

    def resolve(self, role_id: str) -> Role | None:
        return self._func(role_id)


def as_resolver(obj: RoleResolver | Callable[[str], Role | None]) -> RoleResolver:
    """Accept a ``RoleResolver`` or a bare callable."""
    if isinstance(obj, RoleResolver):
        return obj
    if callable(obj):
        return _CallableResolver(obj)
    raise TypeError(f"Expected a RoleResolver or callable, got {type(obj).__name__}")
