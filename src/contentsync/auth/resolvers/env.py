"""Environment token resolver."""

from __future__ import annotations

import os

from contentsync.auth.base import TokenResolver
from contentsync.contracts.exceptions import AuthenticationError


class EnvTokenResolver(TokenResolver):
    def __init__(self, variable: str = "CONTENTSYNC_TOKEN") -> None:
        self.variable = variable

    async def resolve(self) -> str:
        token = (os.getenv(self.variable) or "").strip()
        if not token:
            raise AuthenticationError(f"{self.variable} is not set or empty")
        return token
