from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Protocol
from urllib.parse import urljoin, urlsplit

import requests

from confloc.config import resolve_http_timeout
from confloc.paths import url_to_path
from confloc.urls import has_url_scheme

HTTP_SCHEMES = frozenset({"http", "https"})
logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    def locate_from_url(self, base_path: str | None, file_name: str) -> str | None:
        ...

    def get_input_stream(self, url: str) -> BinaryIO:
        ...


@dataclass(frozen=True)
class DefaultStorageBackend:
    """Backend for ``file:`` URLs and plain HTTP(S) resources."""

    timeout_seconds: int = 10

    def _exists(self, url: str) -> bool:
        scheme = urlsplit(url).scheme.lower()
        if scheme == "file":
            path = url_to_path(url)
            return path is not None and path.exists()
        if scheme in HTTP_SCHEMES:
            response = requests.head(url, allow_redirects=True, timeout=self.timeout_seconds)
            return response.ok
        return False

    def locate_from_url(self, base_path: str | None, file_name: str) -> str | None:
        if base_path is None:
            return file_name if has_url_scheme(file_name) else None
        if not has_url_scheme(base_path):
            return None

        url = urljoin(base_path, file_name)
        if not has_url_scheme(url):
            return None
        try:
            if self._exists(url):
                return url
        except (OSError, requests.RequestException) as exc:
            logger.debug("Could not check %s: %s", url, exc)
        return None

    def get_input_stream(self, url: str) -> BinaryIO:
        scheme = urlsplit(url).scheme.lower()
        if scheme == "file":
            path = url_to_path(url)
            if path is None or not path.exists():
                raise FileNotFoundError(f"File not found: {url}")
            return path.open("rb")
        if scheme in HTTP_SCHEMES:
            response = requests.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
            return io.BytesIO(response.content)
        raise ValueError(f"Unsupported URL scheme for reading: {scheme or 'none'}")


DEFAULT_STORAGE_BACKEND = DefaultStorageBackend(timeout_seconds=resolve_http_timeout())


__all__ = ["DEFAULT_STORAGE_BACKEND", "DefaultStorageBackend", "HTTP_SCHEMES", "StorageBackend"]
