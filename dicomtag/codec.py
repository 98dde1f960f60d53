# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Binary tag encoding

In a DICOM stream a tag is written as the group number followed by the
element number, each an unsigned 16-bit integer in the byte order of the
transfer syntax. Keyed stores use the 32-bit card instead.

Copyright 2025 DNAi inc.
"""

import struct

from dicomtag.exceptions import TagDecodeError
from dicomtag.tag import DicomTag


def pack_tag(tag: DicomTag, big_endian: bool = False) -> bytes:
    """
    Encode a tag as it appears in a DICOM stream.

    Args:
        tag: Tag to encode
        big_endian: True for Explicit VR Big Endian streams

    Returns:
        4 bytes: group then element
    """
    byte_order = '>' if big_endian else '<'
    return struct.pack(f'{byte_order}HH', tag.group, tag.element)


def unpack_tag(data: bytes, offset: int = 0, big_endian: bool = False) -> DicomTag:
    """
    Decode a tag from a DICOM stream.

    Args:
        data: Buffer holding the encoded tag
        offset: Position of the group number in the buffer
        big_endian: True for Explicit VR Big Endian streams

    Returns:
        Decoded tag

    Raises:
        TagDecodeError: If fewer than 4 bytes remain at offset
    """
    if offset < 0 or offset + 4 > len(data):
        raise TagDecodeError(
            f"Need 4 bytes for a DICOM tag at offset {offset}, buffer has {len(data)}"
        )
    byte_order = '>' if big_endian else '<'
    group, element = struct.unpack_from(f'{byte_order}HH', data, offset)
    return DicomTag(group, element)


def card_to_bytes(tag: DicomTag) -> bytes:
    """Encode the card as a big-endian unsigned 32-bit integer."""
    return struct.pack('>I', tag.card)


def card_from_bytes(data: bytes) -> DicomTag:
    """
    Decode a tag from a big-endian 32-bit card.

    Raises:
        TagDecodeError: If data is not exactly 4 bytes
    """
    if len(data) != 4:
        raise TagDecodeError(f"DICOM tag card must be 4 bytes, got {len(data)}")
    return DicomTag.from_card(struct.unpack('>I', data)[0])


def private_block_card(tag: DicomTag) -> int:
    # (gggg,bb00): changes whenever a run of private elements enters another creator block
    return tag.card & 0xFFFFFF00
