# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Tag ordering

Total order over DICOM tags by card (unsigned 32-bit comparison), and an
ordered tag-keyed container in the style of a dataset's attribute list.

Copyright 2025 DNAi inc.
"""

import bisect
import functools
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from dicomtag.exceptions import InvalidTagError
from dicomtag.mask import DicomTagMask
from dicomtag.tag import DicomTag, TagLike


def compare_by_card(a: DicomTag, b: DicomTag) -> int:
    """
    Compare two tags by card.

    Returns:
        -1 if a sorts before b, 1 if after, 0 if the cards are equal
    """
    return (a.card > b.card) - (a.card < b.card)


def card_key(tag: DicomTag) -> int:
    """Sort key for tags: the card."""
    return tag.card


TAG_ORDER = functools.cmp_to_key(compare_by_card)


def sort_tags(tags: Iterable[DicomTag]) -> List[DicomTag]:
    """Return the tags as a list in ascending card order (stable)."""
    return sorted(tags, key=card_key)


class TagIndex:
    """
    Mapping of DICOM tags to values, iterated in ascending card order.

    Keys may be given as anything DicomTag.coerce accepts. The stored key is
    the first DicomTag seen for a card, so its private creator is kept.
    Iteration works on a snapshot of the cards; tags deleted before they
    are reached are skipped.
    """

    def __init__(self, items: Optional[Union[Dict[TagLike, Any], Iterable[Tuple[TagLike, Any]]]] = None):
        self._cards: List[int] = []
        self._tags: Dict[int, DicomTag] = {}
        self._values: Dict[int, Any] = {}
        if items:
            if isinstance(items, dict):
                items = items.items()
            for key, value in items:
                self[key] = value

    def __setitem__(self, key: TagLike, value: Any) -> None:
        tag = DicomTag.coerce(key)
        if tag.card not in self._values:
            bisect.insort(self._cards, tag.card)
            self._tags[tag.card] = tag
        self._values[tag.card] = value

    def __getitem__(self, key: TagLike) -> Any:
        card = DicomTag.coerce(key).card
        try:
            return self._values[card]
        except KeyError:
            raise KeyError(f"Tag not in index: {DicomTag.from_card(card)}") from None

    def __delitem__(self, key: TagLike) -> None:
        card = DicomTag.coerce(key).card
        if card not in self._values:
            raise KeyError(f"Tag not in index: {DicomTag.from_card(card)}")
        self._remove_card(card)

    def __contains__(self, key) -> bool:
        try:
            card = DicomTag.coerce(key).card
        except InvalidTagError:
            return False
        return card in self._values

    def __iter__(self) -> Iterator[DicomTag]:
        for card in list(self._cards):
            if card in self._tags:
                yield self._tags[card]

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self):
        body = ", ".join(f"{tag}: {value!r}" for tag, value in self.items())
        return f"TagIndex({{{body}}})"

    def get(self, key: TagLike, default: Any = None) -> Any:
        try:
            return self[key]
        except (KeyError, InvalidTagError):
            return default

    def items(self) -> Iterator[Tuple[DicomTag, Any]]:
        for card in list(self._cards):
            if card in self._tags:
                yield self._tags[card], self._values[card]

    def masked_tags(self, mask: DicomTagMask) -> Iterator[DicomTag]:
        """
        Yield the tags in the index that match a mask, in card order.

        Args:
            mask: Tag mask to test against
        """
        for card in list(self._cards):
            if card in self._tags and mask.is_match(card):
                yield self._tags[card]

    def remove_masked(self, mask: DicomTagMask) -> int:
        """
        Remove every tag that matches a mask.

        Args:
            mask: Tag mask selecting the tags to remove

        Returns:
            Number of tags removed
        """
        doomed = [tag.card for tag in self.masked_tags(mask)]
        for card in doomed:
            self._remove_card(card)
        return len(doomed)

    def _remove_card(self, card: int) -> None:
        index = bisect.bisect_left(self._cards, card)
        del self._cards[index]
        del self._tags[card]
        del self._values[card]
