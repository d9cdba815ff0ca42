"""
Platform label tables and the regular expressions derived from them.

A `LabelTables` object bundles the OS and architecture alias maps with the
package and archive extension maps. It is built once at startup and passed
by reference to the classifier, the aggregator and the selector, so none of
them depend on module level state.

Two kinds of patterns are derived from the tables:

- The global split pattern: one alternation with every OS and arch alias,
  used to cut a filename at its first platform token.
- Boundary patterns: one per canonical label, requiring each alias to be
  followed by a filename separator or the end of the string, so that "arm"
  does not match the start of "arm64.exe".

In both, aliases are sorted longest first (then alphabetically). Python's
`re` tries alternatives left to right, so without this ordering a short alias
such as "arm" or "x86" would win over "arm64" or "x86_64" at the same
position.
"""

import re
import threading
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from constants import (
    ARCH_ALIASES,
    ARCHIVE_EXTENSIONS,
    FILENAME_SEPARATORS,
    OS_ALIASES,
    PACKAGE_EXTENSIONS,
)
from core.exceptions import LabelTableError


class PatternCache:
    """
    Thread-safe cache of compiled regular expressions keyed by pattern string.

    A miss compiles and stores the pattern, a hit returns the stored object.
    Two threads missing on the same pattern at once may both compile it; the
    last one stored wins and both results are equivalent.
    """

    def __init__(self) -> None:
        self._patterns: dict[str, re.Pattern[str]] = {}
        self._lock = threading.Lock()

    def get(self, pattern: str) -> re.Pattern[str]:
        with self._lock:
            compiled = self._patterns.get(pattern)
        if compiled is not None:
            return compiled

        compiled = re.compile(pattern)
        with self._lock:
            self._patterns[pattern] = compiled
        return compiled

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._patterns


def sort_longest_first(aliases: Iterable[str]) -> list[str]:
    """Sort aliases by descending length, then lexicographically."""
    return sorted(aliases, key=lambda a: (-len(a), a))


@dataclass(frozen=True)
class LabelTables:
    """
    Immutable platform vocabulary with its compiled-pattern cache.

    Attributes:
        os_aliases: Canonical OS label -> every alias it is published under.
        arch_aliases: Canonical arch label -> every alias it is published under.
        package_extensions: Package type -> file extensions (no leading dot).
        archive_extensions: Archive type -> file extensions (no leading dot).
        separators: Characters separating the tokens of a filename.

    Raises:
        LabelTableError: If two canonical labels of the same axis share an
            alias (compared case-insensitively), or if an extension is
            registered both as a package and as an archive.
    """

    os_aliases: Mapping[str, tuple[str, ...]]
    arch_aliases: Mapping[str, tuple[str, ...]]
    package_extensions: Mapping[str, tuple[str, ...]]
    archive_extensions: Mapping[str, tuple[str, ...]]
    separators: tuple[str, ...] = FILENAME_SEPARATORS
    cache: PatternCache = field(
        default_factory=PatternCache, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        _check_disjoint("OS", self.os_aliases)
        _check_disjoint("arch", self.arch_aliases)

        package_exts = {
            e.lower() for exts in self.package_extensions.values() for e in exts
        }
        archive_exts = {
            e.lower() for exts in self.archive_extensions.values() for e in exts
        }
        shared = package_exts & archive_exts
        if shared:
            raise LabelTableError(
                f"Extensions registered as both package and archive: {sorted(shared)}"
            )

    @classmethod
    def from_defaults(cls) -> "LabelTables":
        """Build the tables from the constants shipped with drop."""
        return cls(
            os_aliases=OS_ALIASES,
            arch_aliases=ARCH_ALIASES,
            package_extensions=PACKAGE_EXTENSIONS,
            archive_extensions=ARCHIVE_EXTENSIONS,
        )

    def resolve_os(self, label: str) -> str:
        """
        Return the canonical OS label for an alias, or "" if unknown.

        Example:
            >>> LabelTables.from_defaults().resolve_os("macOS")
            'darwin'
        """
        return _resolve(self.os_aliases, label)

    def resolve_arch(self, label: str) -> str:
        """
        Return the canonical arch label for an alias, or "" if unknown.

        Example:
            >>> LabelTables.from_defaults().resolve_arch("AMD64")
            'x86_64'
        """
        return _resolve(self.arch_aliases, label)

    def split_pattern_string(self) -> str:
        everything = [a for aliases in self.arch_aliases.values() for a in aliases]
        everything += [a for aliases in self.os_aliases.values() for a in aliases]
        ordered = sort_longest_first(everything)
        return "(?i)(" + "|".join(re.escape(a) for a in ordered) + ")"

    def global_split_pattern(self) -> re.Pattern[str]:
        """
        Compiled alternation of every OS and arch alias.

        The pattern has a single capturing group, so `pattern.split(name)`
        returns the text chunks interleaved with the tokens found.
        """
        return self.cache.get(self.split_pattern_string())

    def boundary_pattern(self, aliases: Iterable[str]) -> re.Pattern[str]:
        """
        Compiled pattern matching any of `aliases` as a whole filename token.

        Each alias must be immediately followed by one of the separators or by
        the end of the string. Group 1 holds the alias text that matched.
        """
        ordered = sort_longest_first(aliases)
        seps = "".join(re.escape(s) for s in sorted(self.separators))
        pattern = (
            "(?i)(" + "|".join(re.escape(a) for a in ordered) + f")(?=[{seps}]|$)"
        )
        return self.cache.get(pattern)

    def os_patterns(self) -> Iterator[tuple[str, re.Pattern[str]]]:
        """Yield (canonical OS label, boundary pattern) in table order."""
        for label, aliases in self.os_aliases.items():
            yield label, self.boundary_pattern(aliases)

    def arch_patterns(self) -> Iterator[tuple[str, re.Pattern[str]]]:
        """Yield (canonical arch label, boundary pattern) in table order."""
        for label, aliases in self.arch_aliases.items():
            yield label, self.boundary_pattern(aliases)


def _resolve(table: Mapping[str, tuple[str, ...]], label: str) -> str:
    needle = label.strip().lower()
    if not needle:
        return ""
    for canonical, aliases in table.items():
        if needle in (a.lower() for a in aliases):
            return canonical
    return ""


def _check_disjoint(axis: str, table: Mapping[str, tuple[str, ...]]) -> None:
    seen: dict[str, str] = {}
    for canonical, aliases in table.items():
        for alias in aliases:
            key = alias.lower()
            owner = seen.get(key)
            if owner is not None and owner != canonical:
                raise LabelTableError(
                    f"{axis} alias '{key}' is listed under both "
                    f"'{owner}' and '{canonical}'"
                )
            seen[key] = canonical
