from __future__ import annotations

from dataclasses import dataclass

from confloc.search import locate
from confloc.storage import DEFAULT_STORAGE_BACKEND, StorageBackend
from confloc.urls import base_path_of, file_name_of


@dataclass(frozen=True)
class FileLocator:
    """Where a configuration resource lives and how to reach it.

    ``base_path``, ``file_name`` and ``source_url`` describe the same
    resource redundantly. Once a URL is known it is authoritative; the other
    two are derived from it by ``fully_initialized_locator``.
    """

    base_path: str | None = None
    file_name: str | None = None
    source_url: str | None = None
    storage_backend: StorageBackend | None = None
    encoding: str | None = None


class FileLocatorBuilder:
    def __init__(self, src: FileLocator | None = None):
        self._base_path = src.base_path if src is not None else None
        self._file_name = src.file_name if src is not None else None
        self._source_url = src.source_url if src is not None else None
        self._storage_backend = src.storage_backend if src is not None else None
        self._encoding = src.encoding if src is not None else None

    def base_path(self, value: str | None) -> FileLocatorBuilder:
        self._base_path = value
        return self

    def file_name(self, value: str | None) -> FileLocatorBuilder:
        self._file_name = value
        return self

    def source_url(self, value: str | None) -> FileLocatorBuilder:
        self._source_url = value
        return self

    def storage_backend(self, value: StorageBackend | None) -> FileLocatorBuilder:
        self._storage_backend = value
        return self

    def encoding(self, value: str | None) -> FileLocatorBuilder:
        self._encoding = value
        return self

    def build(self) -> FileLocator:
        return FileLocator(
            base_path=self._base_path,
            file_name=self._file_name,
            source_url=self._source_url,
            storage_backend=self._storage_backend,
            encoding=self._encoding,
        )


def file_locator(src: FileLocator | None = None) -> FileLocatorBuilder:
    """Start a builder, copying every field of ``src`` when one is given.

    ::

        other = file_locator(loc).file_name("other.xml").build()
    """
    return FileLocatorBuilder(src)


def resolve_storage_backend(locator: FileLocator | None) -> StorageBackend:
    if locator is not None and locator.storage_backend is not None:
        return locator.storage_backend
    return DEFAULT_STORAGE_BACKEND


def is_location_defined(locator: FileLocator | None) -> bool:
    return locator is not None and (locator.file_name is not None or locator.source_url is not None)


def is_fully_initialized(locator: FileLocator | None) -> bool:
    if locator is None:
        return False
    return (
        locator.base_path is not None
        and locator.file_name is not None
        and locator.source_url is not None
    )


def _locator_from_url(src: FileLocator, url: str) -> FileLocator:
    return (
        file_locator(src)
        .source_url(url)
        .file_name(file_name_of(url))
        .base_path(base_path_of(url))
        .build()
    )


def fully_initialized_locator(locator: FileLocator | None) -> FileLocator | None:
    """Complete ``locator`` so that base path, file name and URL are all set.

    - No location at all: returns None.
    - Already fully initialized: returned as is. The three fields are not
      checked against each other, so a caller may deliberately keep one of
      them stale.
    - Source URL set: base path and file name are derived from it.
    - Otherwise the resource is searched for. When nothing is found the
      input comes back unchanged and may still be incomplete.
    """
    if not is_location_defined(locator):
        return None

    if is_fully_initialized(locator):
        return locator

    if locator.source_url is not None:
        return _locator_from_url(locator, locator.source_url)

    url = locate(resolve_storage_backend(locator), locator.base_path, locator.file_name)
    if url is None:
        return locator
    return _locator_from_url(locator, url)


def locate_locator(locator: FileLocator | None) -> str | None:
    """Return the URL of the resource ``locator`` points to, if it can be found."""
    if locator is None:
        return None
    if locator.source_url is not None:
        return locator.source_url
    return locate(resolve_storage_backend(locator), locator.base_path, locator.file_name)


__all__ = [
    "FileLocator",
    "FileLocatorBuilder",
    "file_locator",
    "fully_initialized_locator",
    "is_fully_initialized",
    "is_location_defined",
    "locate_locator",
    "resolve_storage_backend",
]
