"""Token resolver factory."""

from __future__ import annotations

from contentsync.auth.base import TokenResolver
from contentsync.auth.resolvers import EnvTokenResolver, NoTokenResolver, StaticTokenResolver
from contentsync.contracts.config import ContentSyncConfig
from contentsync.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "none": NoTokenResolver,
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def create_token_resolver(config: ContentSyncConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "none":
        return NoTokenResolver()
    if auth_mode == "env":
        return EnvTokenResolver(config.token_env)
    return StaticTokenResolver(token=config.token or "")
