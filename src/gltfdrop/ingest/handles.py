"""Resource handle registry — revocable in-memory handles for raw bytes.

A ResourceHandle is the Python stand-in for a browser object URL: cheap to pass
around, but the registry keeps the backing bytes alive until the handle is
revoked. Packages own their handles and hand them back here on teardown.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Iterable
from dataclasses import dataclass

_URL_PREFIX = "blob:gltfdrop/"


class RevokedHandleError(KeyError):
    """Raised when reading a handle that was revoked or never issued here."""


@dataclass(frozen=True)
class ResourceHandle:
    id: str
    name: str
    content_type: str
    size: int

    @property
    def url(self) -> str:
        return f"{_URL_PREFIX}{self.id}"


class HandleRegistry:
    """Issues and revokes handles. Safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._live: dict[str, bytes] = {}

    def create(
        self, data: bytes, name: str, content_type: str = "application/octet-stream"
    ) -> ResourceHandle:
        """Register *data* and return a fresh handle for it."""
        handle = ResourceHandle(
            id=uuid.uuid4().hex,
            name=name,
            content_type=content_type,
            size=len(data),
        )
        with self._lock:
            self._live[handle.id] = bytes(data)
        return handle

    def read(self, handle: ResourceHandle) -> bytes:
        """Return the bytes behind *handle*.

        Raises:
            RevokedHandleError: if the handle is no longer live.
        """
        with self._lock:
            try:
                return self._live[handle.id]
            except KeyError:
                raise RevokedHandleError(handle.url) from None

    def revoke(self, handle: ResourceHandle) -> bool:
        """Release *handle*. Returns False if it was already revoked."""
        with self._lock:
            return self._live.pop(handle.id, None) is not None

    def revoke_all(self, handles: Iterable[ResourceHandle]) -> int:
        """Revoke every handle in *handles*; return how many were live."""
        return sum(1 for h in handles if self.revoke(h))

    def is_live(self, handle: ResourceHandle) -> bool:
        with self._lock:
            return handle.id in self._live

    def __len__(self) -> int:
        with self._lock:
            return len(self._live)
