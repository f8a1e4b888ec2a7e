"""Aggregation of several errors into one."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Errors(Exception):
    """Several errors reported together."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__()

    def __str__(self) -> str:
        message = ""
        for err in self.errors:
            if message:
                message += ", "
            message += str(err)
        return message

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def err(self) -> BaseException | None:
        """Collapse to ``None``, a single error, or an aggregate."""
        return new_errors(*self.errors)


def new_errors(*errors: BaseException | None) -> BaseException | None:
    """Drop ``None`` entries; return ``None``, the only error, or :class:`Errors`."""
    present = [err for err in errors if err is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return Errors(present)