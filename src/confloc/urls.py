from __future__ import annotations

from urllib.parse import urlsplit

FILE_SCHEME = "file:"
_FILE_AUTHORITY_PREFIX = "file://"
URL_SCHEMES = frozenset({"file", "http", "https", "jar", "ftp"})


def has_url_scheme(value: str | None) -> bool:
    """True if ``value`` starts with one of the fetchable ``URL_SCHEMES``.

    ``app:dev.properties`` and ``C:\\config`` parse with a scheme too, but
    they are file names.
    """
    if not value:
        return False
    try:
        scheme = urlsplit(value).scheme
    except ValueError:
        return False
    return scheme.lower() in URL_SCHEMES


def _url_path(url: str) -> str:
    return urlsplit(url).path


def base_path_of(url: str | None) -> str | None:
    """Return the part of ``url`` before its file name.

    ``http://xyz.net/foo/bar.xml`` yields ``http://xyz.net/foo/``. Local
    ``file:/x`` URLs come back in their ``file:///x`` form so that base path
    and file name always recombine to the same string. URLs that already
    denote a directory are returned whole.
    """
    if url is None:
        return None

    s = url
    if s.startswith(FILE_SCHEME) and not s.startswith(_FILE_AUTHORITY_PREFIX):
        s = _FILE_AUTHORITY_PREFIX + s[len(FILE_SCHEME):]

    if s.endswith("/") or not _url_path(url):
        return s
    return s[: s.rfind("/") + 1]


def file_name_of(url: str | None) -> str | None:
    """Return the leaf of the URL path, or None for directory references."""
    if url is None:
        return None

    path = _url_path(url)
    if not path or path.endswith("/"):
        return None
    return path[path.rfind("/") + 1:]


__all__ = ["FILE_SCHEME", "URL_SCHEMES", "base_path_of", "file_name_of", "has_url_scheme"]
