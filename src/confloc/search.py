from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterator, Literal

from confloc.config import resolve_home_dir
from confloc.paths import construct_file, path_to_url
from confloc.resources import get_context_loader, system_loader
from confloc.storage import StorageBackend

StrategyName = Literal[
    "direct",
    "absolute",
    "base_path",
    "home",
    "context_resource",
    "system_resource",
]
Outcome = Literal["found", "missing", "skipped", "error"]

_HIT_MESSAGES: dict[StrategyName, str] = {
    "direct": "Loading configuration from the URL %s",
    "absolute": "Loading configuration from the absolute path %s",
    "base_path": "Loading configuration from the path %s",
    "home": "Loading configuration from the home path %s",
    "context_resource": "Loading configuration from the context resource path %s",
    "system_resource": "Loading configuration from the system resource path %s",
}
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyAttempt:
    strategy: StrategyName
    outcome: Outcome
    detail: str | None = None


@dataclass(frozen=True)
class LocateResult:
    url: str | None
    attempts: tuple[StrategyAttempt, ...] = ()

    @property
    def found(self) -> bool:
        return self.url is not None

    @property
    def found_by(self) -> StrategyName | None:
        for attempt in self.attempts:
            if attempt.outcome == "found":
                return attempt.strategy
        return None

    def outcome_of(self, strategy: StrategyName) -> Outcome | None:
        for attempt in self.attempts:
            if attempt.strategy == strategy:
                return attempt.outcome
        return None


def _existing_file_url(path: str) -> str | None:
    if os.path.exists(path):
        return path_to_url(path)
    return None


def _strategies(
    backend: StorageBackend,
    base_path: str | None,
    file_name: str,
) -> Iterator[tuple[StrategyName, bool, Callable[[], str | None]]]:
    yield "direct", True, lambda: backend.locate_from_url(base_path, file_name)
    yield "absolute", os.path.isabs(file_name), lambda: _existing_file_url(file_name)
    yield "base_path", True, lambda: _existing_file_url(construct_file(base_path, file_name))
    yield "home", True, lambda: _existing_file_url(construct_file(str(resolve_home_dir()), file_name))

    context_loader = get_context_loader()
    yield (
        "context_resource",
        context_loader is not None,
        lambda: context_loader.get_resource(file_name) if context_loader is not None else None,
    )
    yield "system_resource", True, lambda: system_loader().get_resource(file_name)


def search(backend: StorageBackend, base_path: str | None, file_name: str | None) -> LocateResult:
    """Run the location strategies in order and stop at the first hit.

    Failures inside a strategy are logged and recorded as ``"error"``
    attempts; the search then moves on. A missing ``file_name`` can never be
    located, so it returns at once without touching anything.
    """
    logger.debug("locate(): base is %s, name is %s", base_path, file_name)
    if file_name is None:
        return LocateResult(url=None)

    attempts: list[StrategyAttempt] = []
    for strategy, applicable, lookup in _strategies(backend, base_path, file_name):
        if not applicable:
            attempts.append(StrategyAttempt(strategy, "skipped"))
            continue
        try:
            url = lookup()
        except (OSError, ValueError, RuntimeError) as exc:
            logger.warning("Could not obtain URL using %s strategy: %s", strategy, exc)
            attempts.append(StrategyAttempt(strategy, "error", str(exc)))
            continue
        if url is None:
            attempts.append(StrategyAttempt(strategy, "missing"))
            continue
        logger.debug(_HIT_MESSAGES[strategy], url)
        attempts.append(StrategyAttempt(strategy, "found", url))
        return LocateResult(url=url, attempts=tuple(attempts))

    return LocateResult(url=None, attempts=tuple(attempts))


def locate(backend: StorageBackend, base_path: str | None, file_name: str | None) -> str | None:
    return search(backend, base_path, file_name).url


__all__ = [
    "LocateResult",
    "Outcome",
    "StrategyAttempt",
    "StrategyName",
    "locate",
    "search",
]
