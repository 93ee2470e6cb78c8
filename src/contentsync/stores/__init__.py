"""Record store implementations."""

from contentsync.stores.factory import create_store, register
from contentsync.stores.http import HttpRecordStore, RetryingTransport
from contentsync.stores.json_file import JsonContentStore
from contentsync.stores.memory import InMemoryStore, StoreOperation

__all__ = [
    "HttpRecordStore",
    "InMemoryStore",
    "JsonContentStore",
    "RetryingTransport",
    "StoreOperation",
    "create_store",
    "register",
]
