#!/usr/bin/env python3
"""Example: Quickstart — preference-governance

Minimal working example: define security policies, authorize preference
changes, check approval gates and validate LLM preference values.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install preference-governance
"""
from __future__ import annotations

import preference_governance as gov


def main() -> None:
    print(f"preference-governance version: {gov.__version__}")

    # Step 1: Load a policy snapshot
    source = gov.PolicyLoader().load_from_dict({
        "policies": [
            {
                "policy_name": "ui-preferences",
                "preference_pattern": "ui*",
                "required_roles": ["user"],
            },
            {
                "policy_name": "llm-providers",
                "preference_pattern": "llm*",
                "required_roles": ["admin"],
                "approval_required": True,
                "approval_roles": ["security_admin"],
            },
        ]
    })
    access = gov.AccessControl(source)

    # Step 2: Authorize some changes
    user = gov.Actor(id="alice", role=gov.RoleLevel.USER)
    admin = gov.Actor(id="bob", role=gov.RoleLevel.ADMIN)
    for actor, key in [(user, "ui.theme"), (user, "llm.providers.primary"), (admin, "llm.providers.primary")]:
        decision = access.authorize(actor, "update", key)
        gate = "approval required" if access.requires_approval(key, "update") else "no approval"
        print(f"  {actor.id:<6} update {key:<24} -> {decision.reason} ({gate})")

    # Step 3: Validate the proposed values
    proposed = {
        "llm.providers.primary": "anthropic",
        "llm.anthropic.temperature": 1.2,
    }
    result = gov.validate_llm_preferences(proposed)
    print(f"\nProposed LLM preferences valid: {result.valid}")
    if not result.valid:
        print(f"  {result.error}")


if __name__ == "__main__":
    main()
