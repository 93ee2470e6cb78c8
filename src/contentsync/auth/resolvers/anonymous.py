"""Resolver for backends that accept unauthenticated requests."""

from __future__ import annotations

from contentsync.auth.base import TokenResolver


class NoTokenResolver(TokenResolver):
    async def resolve(self) -> None:
        return None
