"""Interfaces for host applications embedding Gatehouse."""

from gatehouse_core.interfaces.authorizer import Authorizer

__all__ = ["Authorizer"]
