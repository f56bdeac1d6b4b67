"""Policy sources — where the matcher gets its policy snapshot from.

The engine never owns policies.  It asks an injected :class:`PolicySource`
for the currently active set once per decision.  A source signals failure
by raising; :class:`PolicyLookupError` is the conventional type but the
matcher treats every failure the same way.

Example
-------
::

    source = StaticPolicySource([SecurityPolicy(policy_name="open-ui", preference_pattern="ui*")])
    policies = source.active_policies()
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Protocol, runtime_checkable

from preference_governance.policies.policy import SecurityPolicy


class PolicyLookupError(RuntimeError):
    """Raised by a policy source when the active policies cannot be fetched."""


@runtime_checkable
class PolicySource(Protocol):
    """Anything able to list the currently active security policies."""

    def active_policies(self) -> Sequence[SecurityPolicy]:
        """Return the active policies, or raise on failure."""
        ...


class StaticPolicySource:
    """An in-memory, immutable policy snapshot.

    Accepts :class:`SecurityPolicy` instances or plain dicts (converted
    with :meth:`SecurityPolicy.from_dict`).  Inactive records are kept but
    filtered out of :meth:`active_policies`.

    Parameters
    ----------
    policies:
        The policies making up the snapshot.
    """

    def __init__(
        self,
        policies: Iterable[SecurityPolicy | Mapping[str, object]] = (),
    ) -> None:
        self._policies: tuple[SecurityPolicy, ...] = tuple(
            p if isinstance(p, SecurityPolicy) else SecurityPolicy.from_dict(p)
            for p in policies
        )

    def active_policies(self) -> Sequence[SecurityPolicy]:
        return [p for p in self._policies if p.active]

    @property
    def policies(self) -> tuple[SecurityPolicy, ...]:
        """Every policy in the snapshot, active or not."""
        return self._policies

    def __len__(self) -> int:
        return len(self._policies)


class CallablePolicySource:
    """Adapts a store client function to the :class:`PolicySource` protocol.

    The wrapped callable may return policy objects or dicts; it signals
    failure by raising.
    """

    def __init__(
        self,
        fetch: Callable[[], Iterable[SecurityPolicy | Mapping[str, object]]],
    ) -> None:
        self._fetch = fetch

    def active_policies(self) -> Sequence[SecurityPolicy]:
        return StaticPolicySource(self._fetch()).active_policies()
