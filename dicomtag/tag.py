# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DICOM data element tag

A tag identifies one data element by its 16-bit group and 16-bit element
numbers. The 32-bit card, (group << 16) | element, is the form used for
hashing, ordering and binary encoding.

Tags are immutable values. Equality and hashing use the card only; the
private creator string travels with the tag as metadata.

Copyright 2025 DNAi inc.
"""

import functools
from typing import Optional, Tuple, Union

from dicomtag.exceptions import InvalidTagError, MalformedTagError


_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')

TagLike = Union['DicomTag', int, Tuple[int, int], str]


def _parse_hex4(text: str) -> Optional[int]:
    """Parse exactly four hex digits, or return None."""
    if len(text) != 4 or not all(c in _HEX_DIGITS for c in text):
        return None
    return int(text, 16)


@functools.total_ordering
class DicomTag:
    """
    Immutable DICOM tag (group, element) with an optional private creator.

    Odd group numbers are reserved for vendor-private data elements. In a
    private group, elements 0x0010-0x00FF hold private creator IDs and
    elements 0x1000-0xFFFF are data elements whose block number is
    element >> 8.
    """

    __slots__ = ('_group', '_element', '_card', '_private_creator')

    def __init__(self, group: int, element: int, private_creator: Optional[str] = None):
        """
        Create a tag from its group and element numbers.

        Args:
            group: Group number (0x0000-0xFFFF)
            element: Element number (0x0000-0xFFFF)
            private_creator: Owning vendor for private tags, "" when absent

        Raises:
            InvalidTagError: If group or element is out of range
        """
        for label, value in (('group', group), ('element', element)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTagError(f"DICOM tag {label} must be an int, got {value!r}")
            if not 0 <= value <= 0xFFFF:
                raise InvalidTagError(f"DICOM tag {label} out of range: {value:#x}")
        object.__setattr__(self, '_group', group)
        object.__setattr__(self, '_element', element)
        object.__setattr__(self, '_card', (group << 16) | element)
        object.__setattr__(self, '_private_creator', private_creator or "")

    @classmethod
    def from_card(cls, card: int, private_creator: Optional[str] = None) -> 'DicomTag':
        """
        Create a tag by decomposing a 32-bit card.

        Raises:
            InvalidTagError: If card is not an unsigned 32-bit int
        """
        if isinstance(card, bool) or not isinstance(card, int) or not 0 <= card <= 0xFFFFFFFF:
            raise InvalidTagError(f"DICOM tag card out of range: {card!r}")
        return cls(card >> 16, card & 0xFFFF, private_creator)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._group, self._element, self._private_creator))

    @property
    def group(self) -> int:
        return self._group

    @property
    def element(self) -> int:
        return self._element

    @property
    def card(self) -> int:
        return self._card

    @property
    def private_creator(self) -> str:
        """Private creator ID carried with this tag (informational only)."""
        return self._private_creator

    @property
    def is_private(self) -> bool:
        return self.is_private_group(self._group)

    @property
    def private_group(self) -> int:
        """
        Private block number this element belongs to.

        Returns 0 for public tags. For elements below 0xFF00 the block is
        the low byte of the element, otherwise the high byte.
        """
        if not self.is_private:
            return 0
        if self._element < 0xFF00:
            return self._element & 0x00FF
        return (self._element & 0xFF00) >> 8

    @staticmethod
    def is_private_group(group: int) -> bool:
        return (group & 1) == 1

    @staticmethod
    def get_card(group: int, element: int) -> int:
        return ((group & 0xFFFF) << 16) | (element & 0xFFFF)

    @staticmethod
    def private_creator_tag(group: int, element: int) -> 'DicomTag':
        """
        Get the creator element that reserves the block of a private element.

        A private data element (gggg,bbxx) is owned by the vendor recorded
        at (gggg,00bb).

        Args:
            group: Private group number
            element: Private data element number

        Returns:
            Tag of the private creator element
        """
        return DicomTag(group, element >> 8)

    def with_private_creator(self, private_creator: str) -> 'DicomTag':
        """Return a copy of this tag carrying a different private creator."""
        return DicomTag(self._group, self._element, private_creator)

    def __eq__(self, other):
        if not isinstance(other, DicomTag):
            return NotImplemented
        return self._card == other._card

    def __lt__(self, other):
        if not isinstance(other, DicomTag):
            return NotImplemented
        return self._card < other._card

    def __hash__(self):
        return hash(self._card)

    def __str__(self):
        return f"({self._group:04x},{self._element:04x})"

    def __repr__(self):
        if self._private_creator:
            return (f"DicomTag(0x{self._group:04x}, 0x{self._element:04x}, "
                    f"{self._private_creator!r})")
        return f"DicomTag(0x{self._group:04x}, 0x{self._element:04x})"

    def to_hex(self) -> str:
        """Return the 8-digit lowercase hex form, e.g. '00100010'."""
        return f"{self._card:08x}"

    @classmethod
    def parse(cls, text: str) -> Optional['DicomTag']:
        """
        Parse tag text in (gggg,eeee), gggg,eeee or ggggeeee form.

        Hex digits are case-insensitive. Malformed text is an expected
        outcome and returns None instead of raising.

        Args:
            text: Tag text

        Returns:
            Parsed tag, or None if the text is not a tag
        """
        if not isinstance(text, str):
            return None

        text = text.strip()
        if text.startswith('('):
            text = text[1:]
        if text.endswith(')'):
            text = text[:-1]

        parts = text.split(',')
        if len(parts) == 2:
            group_text, element_text = parts[0].strip(), parts[1].strip()
        elif len(text) == 8:
            group_text, element_text = text[:4], text[4:]
        else:
            return None

        group = _parse_hex4(group_text)
        element = _parse_hex4(element_text)
        if group is None or element is None:
            return None
        return cls(group, element)

    @classmethod
    def from_string(cls, text: str) -> 'DicomTag':
        """
        Parse tag text, raising on malformed input.

        Raises:
            MalformedTagError: If the text is not a tag
        """
        tag = cls.parse(text)
        if tag is None:
            raise MalformedTagError(text)
        return tag

    @classmethod
    def coerce(cls, value: TagLike) -> 'DicomTag':
        """
        Convert a tag, card, (group, element) pair or tag text to a DicomTag.

        Args:
            value: Value to convert

        Returns:
            DicomTag equal to the value

        Raises:
            InvalidTagError: If the value cannot be converted
        """
        if isinstance(value, DicomTag):
            return value
        if isinstance(value, str):
            tag = cls.parse(value)
            if tag is None:
                raise InvalidTagError(f"Cannot convert {value!r} to a DICOM tag")
            return tag
        if isinstance(value, tuple) and len(value) == 2:
            return cls(value[0], value[1])
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_card(value)
        raise InvalidTagError(f"Cannot convert {value!r} to a DICOM tag")
