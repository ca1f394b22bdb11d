"""
Explicit outcome of a data fetch, so fallbacks are chosen by the caller
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a fetched value or the error that prevented it"""
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "FetchResult[T]":
        return cls(error=error)


async def fetch(source: str, loader: Callable[[], Awaitable[T]]) -> FetchResult[T]:
    """Run a loader and capture any failure as a FetchResult"""
    try:
        return FetchResult.success(await loader())
    except Exception as e:
        logger.warning(f"Fetching {source} failed: {e}")
        return FetchResult.failure(f"{source}: {e}")
