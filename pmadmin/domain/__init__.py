"""Domain layer definitions."""

from .state import Link, MutationState, QueryState

__all__ = [
    "Link",
    "MutationState",
    "QueryState",
]
