from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FallbackResult(Generic[T]):
    """
    Результат операции с запасным вариантом.

    degraded=True означает, что вместо основного результата подставлено
    значение по умолчанию; reason объясняет почему.
    """

    value: T
    degraded: bool = False
    reason: str | None = None

    @classmethod
    def ok(cls, value: T) -> "FallbackResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, reason: str) -> "FallbackResult[T]":
        return cls(value=value, degraded=True, reason=reason)
