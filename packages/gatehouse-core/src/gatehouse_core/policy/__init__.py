"""Declarative policy bootstrap."""

from gatehouse_core.policy.bootstrap import PolicySummary, apply_policy, build_rbac

__all__ = ["PolicySummary", "apply_policy", "build_rbac"]
