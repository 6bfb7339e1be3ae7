"""Format registry.

The registry is the ordered catalog of FormatEntry values the detector
walks through. Order is priority: the first institution entry that
matches wins, and the generic entry is always last.

Registries are immutable. Adding a format builds a new registry, so a
registry handed to a running detector never changes underneath it.
"""

from collections.abc import Iterable, Iterator

from statement_import.parsers.formats import GENERIC_FORMAT, FormatEntry
from statement_import.parsers.refinements import INSTITUTION_FORMATS


class FormatRegistry:
    """Ordered, validated collection of statement formats.

    Example:
        >>> registry = default_registry()
        >>> registry.get("itau").display_name
        'Banco Itaú'
        >>> registry.generic.id
        'generic'
    """

    def __init__(self, entries: Iterable[FormatEntry]):
        """Build a registry and check its invariants.

        Args:
            entries: Format entries in priority order (generic anywhere;
                it is always moved to the end)

        Raises:
            ValueError: On duplicate ids, a missing or repeated generic
                entry, or an institution entry without detection rules
        """
        entries = list(entries)
        generics = [entry for entry in entries if entry.is_generic]
        if len(generics) != 1:
            raise ValueError(
                f"Registry needs exactly one generic entry, got {len(generics)}"
            )

        seen: set[str] = set()
        for entry in entries:
            if entry.id in seen:
                raise ValueError(f"Duplicate format id: {entry.id!r}")
            seen.add(entry.id)
            if not entry.is_generic and not (
                entry.detection_keywords or entry.detection_patterns
            ):
                raise ValueError(
                    f"Format {entry.id!r} has no detection keywords or patterns"
                )

        self._institutions: tuple[FormatEntry, ...] = tuple(
            entry for entry in entries if not entry.is_generic
        )
        self._generic = generics[0]
        self._by_id = {entry.id: entry for entry in entries}

    def __iter__(self) -> Iterator[FormatEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, format_id: object) -> bool:
        return format_id in self._by_id

    @property
    def entries(self) -> tuple[FormatEntry, ...]:
        """All entries in priority order, generic last."""
        return self._institutions + (self._generic,)

    @property
    def institution_entries(self) -> tuple[FormatEntry, ...]:
        return self._institutions

    @property
    def generic(self) -> FormatEntry:
        return self._generic

    def get(self, format_id: str) -> FormatEntry | None:
        """Get an entry by id (None when unknown)."""
        return self._by_id.get(format_id)

    def ids(self) -> list[str]:
        """Get format ids in priority order."""
        return [entry.id for entry in self.entries]

    def supported_formats(self) -> list[dict]:
        """Describe every entry for listings (UI pickers, API)."""
        return [
            {
                "id": entry.id,
                "name": entry.display_name,
                "separator": entry.field_separator,
                "has_header_row": entry.has_header_row,
            }
            for entry in self.entries
        ]

    def extend(self, *entries: FormatEntry) -> "FormatRegistry":
        """Return a new registry with extra formats ahead of the current ones.

        New entries take priority over the existing institution entries;
        the generic entry stays last.
        """
        return FormatRegistry(list(entries) + list(self.entries))


def default_registry() -> FormatRegistry:
    """Build the registry of shipped formats."""
    return FormatRegistry(INSTITUTION_FORMATS + (GENERIC_FORMAT,))
