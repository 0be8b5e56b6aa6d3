from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pii_enrichment.enrichment.exceptions import ConfigurationError

T = TypeVar("T")


@dataclass(frozen=True)
class Validated(Generic[T]):
    """Either a value or the list of every problem found while building it."""

    value: T | None = None
    errors: tuple[str, ...] = ()

    @classmethod
    def ok(cls, value: T) -> "Validated[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, *errors: str) -> "Validated[T]":
        return cls(errors=tuple(errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the value or raise ``ConfigurationError`` with all errors."""
        if self.errors or self.value is None:
            raise ConfigurationError(list(self.errors) or ["no value"])
        return self.value


def collect(results: Iterable[Validated[T]]) -> Validated[list[T]]:
    """Combine results, keeping every error rather than the first."""
    values: list[T] = []
    errors: list[str] = []
    for result in results:
        if result.errors:
            errors.extend(result.errors)
        elif result.value is not None:
            values.append(result.value)
    if errors:
        return Validated.fail(*errors)
    return Validated.ok(values)
