"""Concrete token resolvers."""

from contentsync.auth.resolvers.anonymous import NoTokenResolver
from contentsync.auth.resolvers.env import EnvTokenResolver
from contentsync.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "NoTokenResolver", "StaticTokenResolver"]
