"""Ordered severity levels: name/index lookup and verbosity stepping."""
from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from hierlog.core.exceptions import UnknownLevelError

LevelLike = Union[str, int]

UNSET = -1
"""Index used for "no level set"."""

DEFAULT_LEVELS: Tuple[str, ...] = ("TRACE", "DEBUG", "INFO", "WARN", "ERROR", "CRITICAL")

DEFAULT_LEVEL_COLORS = {
    "TRACE": "1;30",
    "DEBUG": "37",
    "INFO": "32",
    "WARN": "33",
    "ERROR": "31",
    "CRITICAL": "1;31",
}
"""ANSI SGR parameters per level, used by the console handler."""


class LevelRegistry:
    """Immutable, ordered list of level names (lowest severity first)."""

    def __init__(self, names: Iterable[str] = DEFAULT_LEVELS) -> None:
        normalized = tuple(str(name).upper() for name in names)
        if not normalized:
            raise ValueError("A level registry needs at least one level")
        if len(set(normalized)) != len(normalized):
            raise ValueError(f"Duplicate level names in {list(normalized)!r}")
        self._names: Tuple[str, ...] = normalized

    @property
    def names(self) -> Sequence[str]:
        return self._names

    @property
    def lowest(self) -> str:
        return self._names[0]

    @property
    def highest(self) -> str:
        return self._names[-1]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __contains__(self, level: object) -> bool:
        try:
            self.index_of(level)  # type: ignore[arg-type]
        except UnknownLevelError:
            return False
        return True

    def __repr__(self) -> str:
        return f"LevelRegistry({list(self._names)!r})"

    def index_of(self, level: LevelLike) -> int:
        """
        Resolve a level name or index to its index.

        Integers in range are returned as-is. Strings are matched exactly first,
        then uppercased. Anything else raises UnknownLevelError.
        """
        if isinstance(level, int) and not isinstance(level, bool):
            if 0 <= level < len(self._names):
                return level
        elif isinstance(level, str):
            if level in self._names:
                return self._names.index(level)
            upper = level.upper()
            if upper in self._names:
                return self._names.index(upper)
        raise UnknownLevelError(
            f"Unknown log level: {level!r}. Known levels: {list(self._names)}",
            details={"level": level},
        )

    def name_of(self, index: Optional[int]) -> Optional[str]:
        """Return the level name for index, or None when out of range. Never raises."""
        if not isinstance(index, int) or isinstance(index, bool):
            return None
        if 0 <= index < len(self._names):
            return self._names[index]
        return None

    def step_down(self, level: LevelLike) -> Optional[str]:
        """The next less severe level, or None below the lowest one."""
        return self.name_of(self.index_of(level) - 1)

    def step_up(self, level: LevelLike) -> str:
        """The next more severe level, clamped at the highest one."""
        idx = min(self.index_of(level) + 1, len(self._names) - 1)
        return self._names[idx]
