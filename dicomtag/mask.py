# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DICOM tag masks

A mask is an 8-nibble tag pattern in which 'x' stands for any hex digit,
e.g. "50xx,0005" for every curve group or "xxxx,0000" for every group
length element. Wildcards always span a whole nibble.

Copyright 2025 DNAi inc.
"""

from typing import Iterable, Iterator, Optional, Union

from dicomtag.exceptions import MalformedMaskError
from dicomtag.tag import DicomTag


FULL_MASK = 0xFFFFFFFF

_HEX_VALUES = {c: int(c, 16) for c in '0123456789abcdef'}


class DicomTagMask:
    """
    Pattern over the 8 hex nibbles of a tag card.

    Attributes:
        card: Fixed nibbles of the pattern, wildcard nibbles zeroed
        mask: 0xF for each fixed nibble, 0x0 for each wildcard nibble
    """

    __slots__ = ('_card', '_mask')

    def __init__(self, card: int, mask: int = FULL_MASK):
        """
        Create a mask from raw card and mask values.

        Args:
            card: Tag card; nibbles outside the mask are cleared
            mask: Nibble mask, every nibble 0x0 or 0xF

        Raises:
            MalformedMaskError: If a value is out of range or a mask nibble
                is neither 0x0 nor 0xF
        """
        for value in (card, mask):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= FULL_MASK:
                raise MalformedMaskError(value)
        for shift in range(0, 32, 4):
            if (mask >> shift) & 0xF not in (0x0, 0xF):
                raise MalformedMaskError(f"{mask:08x}")
        object.__setattr__(self, '_card', card & mask)
        object.__setattr__(self, '_mask', mask)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._card, self._mask))

    @classmethod
    def parse(cls, pattern: str) -> Optional['DicomTagMask']:
        """
        Parse a mask pattern such as "(50xx,1003)", "50xx,1003" or "50xx1003".

        Parentheses, commas and surrounding whitespace are ignored and the
        pattern is case-insensitive. Malformed patterns return None.

        Args:
            pattern: Mask pattern text

        Returns:
            Parsed mask, or None if the pattern is malformed
        """
        if not isinstance(pattern, str):
            return None
        text = pattern.strip().replace('(', '').replace(')', '').replace(',', '').lower()
        if len(text) != 8:
            return None

        card = 0
        mask = 0
        for char in text:
            card <<= 4
            mask <<= 4
            if char == 'x':
                continue
            value = _HEX_VALUES.get(char)
            if value is None:
                return None
            card |= value
            mask |= 0xF
        return cls(card, mask)

    @classmethod
    def from_string(cls, pattern: str) -> 'DicomTagMask':
        """
        Parse a mask pattern, raising on malformed input.

        Raises:
            MalformedMaskError: If the pattern is malformed
        """
        mask = cls.parse(pattern)
        if mask is None:
            raise MalformedMaskError(pattern)
        return mask

    @classmethod
    def from_tag(cls, tag: DicomTag) -> 'DicomTagMask':
        """Create a full mask matching exactly one tag."""
        return cls(tag.card, FULL_MASK)

    @property
    def card(self) -> int:
        return self._card

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def is_full_mask(self) -> bool:
        return self._mask == FULL_MASK

    @property
    def tag(self) -> DicomTag:
        """Tag formed by the fixed nibbles, wildcards read as 0."""
        return DicomTag.from_card(self._card)

    def is_match(self, tag: Union[DicomTag, int]) -> bool:
        """
        Test whether a tag belongs to the family this mask describes.

        Args:
            tag: DicomTag or raw card

        Returns:
            True if every fixed nibble of the mask equals the tag's nibble
        """
        card = tag if isinstance(tag, int) else tag.card
        return (card & self._mask) == self._card

    def filter(self, tags: Iterable[DicomTag]) -> Iterator[DicomTag]:
        """Yield the tags that match this mask."""
        for tag in tags:
            if self.is_match(tag):
                yield tag

    def __eq__(self, other):
        if not isinstance(other, DicomTagMask):
            return NotImplemented
        return self._card == other._card and self._mask == other._mask

    def __hash__(self):
        return hash((self._card, self._mask))

    def __str__(self):
        digits = []
        for shift in range(28, -4, -4):
            if (self._mask >> shift) & 0xF:
                digits.append(f"{(self._card >> shift) & 0xF:X}")
            else:
                digits.append('X')
        return ''.join(digits[:4]) + ',' + ''.join(digits[4:])

    def __repr__(self):
        return f"DicomTagMask('{self}')"


GROUP_LENGTH_MASK = DicomTagMask.from_string('xxxx,0000')
CURVE_DATA_MASK = DicomTagMask.from_string('50xx,xxxx')
OVERLAY_DATA_MASK = DicomTagMask.from_string('60xx,xxxx')
