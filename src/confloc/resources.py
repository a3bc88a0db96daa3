from __future__ import annotations

import importlib.resources
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Protocol

from confloc.config import resolve_resource_path
from confloc.paths import path_to_url

logger = logging.getLogger(__name__)


class ResourceLoader(Protocol):
    def get_resource(self, name: str) -> str | None:
        ...


_context_loader: ContextVar[ResourceLoader | None] = ContextVar("confloc_context_loader", default=None)


def _resource_parts(name: str) -> list[str] | None:
    # Resource names are "/"-separated and relative to the loader root.
    if not name or os.path.isabs(name):
        return None
    parts = [part for part in name.split("/") if part and part != "."]
    if not parts or ".." in parts:
        return None
    return parts


@dataclass(frozen=True)
class DirectoryResourceLoader:
    roots: tuple[Path, ...]

    def get_resource(self, name: str) -> str | None:
        parts = _resource_parts(name)
        if parts is None:
            return None
        for root in self.roots:
            candidate = root.joinpath(*parts)
            if candidate.exists():
                return path_to_url(candidate)
        return None


@dataclass(frozen=True)
class PackageResourceLoader:
    """Looks resources up inside an importable package's directory."""

    package: str

    def get_resource(self, name: str) -> str | None:
        parts = _resource_parts(name)
        if parts is None:
            return None
        try:
            root = importlib.resources.files(self.package)
        except ModuleNotFoundError:
            logger.debug("Resource package %s is not importable", self.package)
            return None
        resource = root.joinpath(*parts)
        # Zipped packages have no file URL.
        if isinstance(resource, Path) and resource.exists():
            return path_to_url(resource)
        return None


def get_context_loader() -> ResourceLoader | None:
    return _context_loader.get()


@contextmanager
def use_context_loader(loader: ResourceLoader | None) -> Iterator[ResourceLoader | None]:
    token = _context_loader.set(loader)
    try:
        yield loader
    finally:
        _context_loader.reset(token)


def system_loader() -> DirectoryResourceLoader:
    roots = list(resolve_resource_path())
    for entry in sys.path:
        root = Path(entry or os.curdir)
        if root.is_dir():
            roots.append(root)
    return DirectoryResourceLoader(roots=tuple(roots))


__all__ = [
    "DirectoryResourceLoader",
    "PackageResourceLoader",
    "ResourceLoader",
    "get_context_loader",
    "system_loader",
    "use_context_loader",
]
