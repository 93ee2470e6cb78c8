"""HTTP backend store."""

from contentsync.stores.http._retrying_transport import RetryingTransport
from contentsync.stores.http.store import HttpRecordStore

__all__ = ["HttpRecordStore", "RetryingTransport"]
