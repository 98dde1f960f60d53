# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DICOM data dictionary binding

Resolves tags to metadata entries (name, keyword, VR, VM) supplied by an
external registry. The registry is injected as a TagMetadataProvider; this
module never loads a dictionary on its own.

DictionaryBinding memoizes lookups in a card-keyed cache owned by the
binding, so DicomTag values stay immutable and can be shared between
threads. Tags that the registry does not know resolve to sentinel entries
instead of raising.

Copyright 2025 DNAi inc.
"""

import fnmatch
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Protocol, Tuple, Union

from dicomtag.mask import FULL_MASK, DicomTagMask
from dicomtag.tag import DicomTag


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionaryEntry:
    """
    Metadata for one DICOM data element, or one family of repeating elements.

    Attributes:
        tag: Tag of the element (wildcard nibbles zeroed for masked entries)
        name: Human-readable name, e.g. "Patient's Name"
        keyword: Keyword, e.g. "PatientName"
        vrs: Allowed value representations, preferred first
        vm: Value multiplicity, e.g. "1" or "1-n"
        retired: True if the element is retired from the standard
        mask: Nibble mask for repeating-group entries, FULL_MASK otherwise
        private_creator: Owning vendor for private dictionary entries
    """
    tag: DicomTag
    name: str
    keyword: str = ""
    vrs: Tuple[str, ...] = field(default_factory=tuple)
    vm: str = "1"
    retired: bool = False
    mask: int = FULL_MASK
    private_creator: str = ""

    @property
    def default_vr(self) -> str:
        return self.vrs[0] if self.vrs else "UN"

    @property
    def tag_mask(self) -> DicomTagMask:
        return DicomTagMask(self.tag.card, self.mask)

    @property
    def display_tag(self) -> str:
        """Tag text with wildcard nibbles shown as 'x', e.g. (50xx,0005)."""
        text = str(self.tag_mask).lower()
        return f"({text})"

    def matches(self, tag: DicomTag) -> bool:
        return (tag.card & self.mask) == (self.tag.card & self.mask)

    def __str__(self):
        label = f"{self.display_tag} {self.default_vr} {self.name}"
        if self.retired:
            label += " (Retired)"
        return label


UNKNOWN_ENTRY = DictionaryEntry(
    tag=DicomTag(0x0000, 0x0000),
    name="Unknown",
    keyword="Unknown",
    vrs=("UN",),
    vm="1-n",
    mask=0x00000000,
)

GROUP_LENGTH_ENTRY = DictionaryEntry(
    tag=DicomTag(0x0000, 0x0000),
    name="Group Length",
    keyword="GroupLength",
    vrs=("UL",),
    mask=0x0000FFFF,
)

PRIVATE_CREATOR_ENTRY = DictionaryEntry(
    tag=DicomTag(0x0000, 0x0000),
    name="Private Creator",
    keyword="PrivateCreator",
    vrs=("LO",),
    mask=0x0000FF00,
)


class TagMetadataProvider(Protocol):
    """Registry interface: return the entry for a tag, or None if unknown."""

    def lookup(self, tag: DicomTag) -> Optional[DictionaryEntry]:
        ...


def fallback_entry(tag: DicomTag) -> DictionaryEntry:
    """
    Get the sentinel entry for a tag the registry does not know.

    Group length elements and private creator elements are recognised
    structurally; everything else is UNKNOWN_ENTRY.
    """
    if tag.element == 0x0000:
        return GROUP_LENGTH_ENTRY
    if tag.is_private and 0x0010 <= tag.element <= 0x00FF:
        return PRIVATE_CREATOR_ENTRY
    return UNKNOWN_ENTRY


CacheKey = Union[int, Tuple[int, str]]


class DictionaryBinding:
    """
    Lazy, memoized link from tags to entries of an injected registry.

    The provider is called at most once per card (per card and private
    creator for tags that carry one). Misses are cached as their sentinel
    entry.

    Lookups run under a reentrant lock, so a provider may resolve other
    tags through the same binding while it is being called.
    """

    def __init__(self, provider: TagMetadataProvider):
        self._provider = provider
        self._cache: Dict[CacheKey, DictionaryEntry] = {}
        self._lock = threading.RLock()

    @property
    def provider(self) -> TagMetadataProvider:
        return self._provider

    @staticmethod
    def _cache_key(tag: DicomTag) -> CacheKey:
        if tag.private_creator:
            return (tag.card, tag.private_creator)
        return tag.card

    def entry(self, tag: DicomTag) -> DictionaryEntry:
        """
        Get the dictionary entry for a tag.

        Args:
            tag: Tag to resolve

        Returns:
            Registry entry, or a sentinel entry if the registry has none
        """
        key = self._cache_key(tag)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

            try:
                found = self._provider.lookup(tag)
            except KeyError:
                found = None
            if found is None:
                found = fallback_entry(tag)
                logger.debug("No dictionary entry for %s, using %r", tag, found.name)

            self._cache[key] = found
            return found

    def name(self, tag: DicomTag) -> str:
        return self.entry(tag).name

    def describe(self, tag: DicomTag) -> str:
        """One-line description, e.g. "(0010,0010) PN Patient's Name"."""
        entry = self.entry(tag)
        text = f"{str(tag).upper()} {entry.default_vr} {entry.name}"
        if entry.retired:
            text += " (Retired)"
        return text

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


class StaticDictionary:
    """
    In-memory TagMetadataProvider built from caller-supplied entries.

    Exact entries are keyed by (card, private creator). Entries with a
    partial mask (repeating groups, private blocks) are checked in the
    order they were added after an exact miss.
    """

    def __init__(self, entries: Optional[List[DictionaryEntry]] = None):
        self._exact: Dict[Tuple[int, str], DictionaryEntry] = {}
        self._masked: List[DictionaryEntry] = []
        self._entries: List[DictionaryEntry] = []
        for entry in entries or ():
            self.add(entry)

    def add(self, entry: DictionaryEntry) -> None:
        """Register an entry; a later exact entry replaces an earlier one."""
        self._entries.append(entry)
        if entry.mask == FULL_MASK:
            self._exact[(entry.tag.card, entry.private_creator)] = entry
        else:
            self._masked.append(entry)

    def lookup(self, tag: DicomTag) -> Optional[DictionaryEntry]:
        """
        Find the entry for a tag.

        Private tags are matched on their private creator. A private data
        element (gggg,bbee) is also found through the creator's block-relative
        entry (gggg,xxee), since the block number varies between datasets.

        Args:
            tag: Tag to look up

        Returns:
            Matching entry, or None if there is none
        """
        creator = tag.private_creator if tag.is_private else ""
        entry = self._exact.get((tag.card, creator))
        if entry is not None:
            return entry

        for candidate in self._masked:
            if candidate.private_creator == creator and candidate.matches(tag):
                return candidate
        return None

    def search(self, query: str) -> List[DictionaryEntry]:
        """
        Find entries by tag prefix or by name.

        A query made of hex digits and 'x' (commas allowed) is treated as a
        tag pattern, right-padded with 'x', so "0010" finds group 0010.
        Anything else is matched case-insensitively against entry names
        with '*' and '?' wildcards and an implicit trailing '*'.

        Args:
            query: Tag pattern or name pattern

        Returns:
            Matching entries in registration order
        """
        pattern = query.replace(',', '').strip().lower()
        query_mask = DicomTagMask.parse(pattern.ljust(8, 'x')) if len(pattern) <= 8 else None
        if query_mask is not None:
            return [
                entry for entry in self._entries
                if (entry.tag.card & query_mask.mask) == (query_mask.card & entry.mask)
            ]

        name_pattern = query.lower() + '*'
        return [
            entry for entry in self._entries
            if fnmatch.fnmatchcase(entry.name.lower(), name_pattern)
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)
