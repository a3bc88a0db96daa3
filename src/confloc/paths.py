from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import urljoin, urlsplit
from urllib.request import pathname2url, url2pathname

from confloc.urls import FILE_SCHEME, has_url_scheme

_CURRENT_DIR_PREFIXES = ("./", "." + os.sep)


class MalformedLocationError(ValueError):
    """A path or URL could not be built from the given location parts."""


def construct_file(base_path: str | None, file_name: str) -> str:
    """Join ``base_path`` and ``file_name`` into a platform path string.

    Absolute file names and missing base paths leave ``file_name`` as it is.
    A separator is only added when ``base_path`` does not already end in one,
    and a leading ``./`` on the file name is dropped. Pure string work; the
    filesystem is never consulted.
    """
    if not base_path or os.path.isabs(file_name):
        return file_name

    parts = [base_path]
    if not base_path.endswith(os.sep):
        parts.append(os.sep)
    if file_name.startswith(_CURRENT_DIR_PREFIXES):
        parts.append(file_name[2:])
    else:
        parts.append(file_name)
    return "".join(parts)


def path_to_url(path: str | os.PathLike[str]) -> str:
    raw = os.fspath(path)
    if not raw or "\x00" in raw:
        raise MalformedLocationError(f"Cannot build a URL from path {raw!r}")

    absolute = os.path.abspath(raw)
    try:
        url_path = pathname2url(absolute)
    except (OSError, ValueError) as exc:
        raise MalformedLocationError(f"Cannot build a URL from path {raw!r}: {exc}") from exc

    if os.path.isdir(absolute) and not url_path.endswith("/"):
        url_path += "/"
    return FILE_SCHEME + url_path


def url_to_path(url: str | None) -> Path | None:
    if url is None:
        return None
    parts = urlsplit(url)
    if parts.scheme.lower() != "file":
        return None
    return Path(url2pathname(parts.path))


def get_file(base_path: str | None, file_name: str) -> Path | None:
    """Map a base path and file name onto a local file, if there is one.

    Either part may be a URL. Absolute file names win; otherwise URL
    combinations are tried before falling back to plain path joining. URLs
    of non-file schemes yield None.
    """
    if os.path.isabs(file_name):
        return Path(file_name)

    url: str | None = None
    if has_url_scheme(base_path):
        url = urljoin(base_path, file_name)
    elif has_url_scheme(file_name):
        url = file_name

    if url is not None:
        return url_to_path(url)
    return Path(construct_file(base_path, file_name))


__all__ = [
    "MalformedLocationError",
    "construct_file",
    "get_file",
    "path_to_url",
    "url_to_path",
]
