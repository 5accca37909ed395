"""Gateways between the sheet store and the authority."""

from .gateway import SyncGateway
from .http import HttpSyncGateway
from .local import CharacterSeedError, LocalAuthority

__all__ = [
    "CharacterSeedError",
    "HttpSyncGateway",
    "LocalAuthority",
    "SyncGateway",
]
