from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Generic, Mapping, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class JoinResult(Generic[T]):
    """Outcome of :func:`join_all`: one entry per job, either a result or an error."""

    results: dict[str, T] = field(default_factory=dict)
    errors: dict[str, BaseException] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def first_error(self, kind: type = BaseException) -> Optional[BaseException]:
        for err in self.errors.values():
            if isinstance(err, kind):
                return err
        return None


def join_all(jobs: Mapping[str, Callable[[], T]], *, max_workers: Optional[int] = None) -> JoinResult[T]:
    """Run named jobs concurrently and wait until every one of them settled."""
    if not jobs:
        return JoinResult()

    results: dict[str, T] = {}
    errors: dict[str, BaseException] = {}
    with ThreadPoolExecutor(max_workers=max_workers or len(jobs), thread_name_prefix="portal-join") as executor:
        futures = {executor.submit(fn): name for name, fn in jobs.items()}
        wait(futures)

    for future, name in futures.items():
        try:
            results[name] = future.result()
        except Exception as e:
            logger.warning("Job %s failed: %s", name, e)
            errors[name] = e

    return JoinResult(results=results, errors=errors)
