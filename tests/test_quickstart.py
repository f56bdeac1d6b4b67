"""Test that the quickstart API works for preference-governance."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import preference_governance as gov

    assert gov.__version__ == "0.1.0"


def test_quickstart_default_denies() -> None:
    from preference_governance import AccessControl, StaticPolicySource

    access = AccessControl(StaticPolicySource([]))
    result = access.authorize({"id": "u1", "role": "security_admin"}, "read", "ui.theme")
    assert result.allowed is False


def test_quickstart_policy_grants() -> None:
    from preference_governance import AccessControl, StaticPolicySource

    access = AccessControl(
        StaticPolicySource([{"policy_name": "ui", "preference_pattern": "ui*"}])
    )
    assert access.authorize({"id": "u1", "role": "read_only"}, "read", "ui.theme").allowed


def test_quickstart_validator() -> None:
    from preference_governance import validate_temperature

    assert validate_temperature("openai", 0.7).valid


def test_quickstart_matcher_accessible() -> None:
    from preference_governance import AccessControl, PolicyMatcher, StaticPolicySource

    access = AccessControl(StaticPolicySource())
    assert isinstance(access.matcher, PolicyMatcher)
