"""Authentication exports."""

from contentsync.auth.base import TokenResolver
from contentsync.auth.factory import create_token_resolver
from contentsync.auth.resolvers import EnvTokenResolver, NoTokenResolver, StaticTokenResolver

__all__ = ["EnvTokenResolver", "NoTokenResolver", "StaticTokenResolver", "TokenResolver", "create_token_resolver"]
