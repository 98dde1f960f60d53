# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
dicomtag - DICOM tag identity, parsing and masks

Immutable (group, element) tag values with text round-tripping, a
nibble-wildcard mask for matching repeating groups and other tag families,
and a memoized binding from tags to an injected data dictionary.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from dicomtag.tag import DicomTag
from dicomtag.mask import (
    DicomTagMask,
    FULL_MASK,
    GROUP_LENGTH_MASK,
    CURVE_DATA_MASK,
    OVERLAY_DATA_MASK,
)
from dicomtag.ordering import (
    TAG_ORDER,
    TagIndex,
    card_key,
    compare_by_card,
    sort_tags,
)
from dicomtag.dictionary import (
    DictionaryBinding,
    DictionaryEntry,
    StaticDictionary,
    TagMetadataProvider,
    UNKNOWN_ENTRY,
    GROUP_LENGTH_ENTRY,
    PRIVATE_CREATOR_ENTRY,
    fallback_entry,
)
from dicomtag.codec import (
    pack_tag,
    unpack_tag,
    card_to_bytes,
    card_from_bytes,
    private_block_card,
)
from dicomtag.exceptions import (
    DicomTagError,
    MalformedTagError,
    MalformedMaskError,
    InvalidTagError,
    TagDecodeError,
)

__all__ = [
    "DicomTag",
    "DicomTagMask",
    "FULL_MASK",
    "GROUP_LENGTH_MASK",
    "CURVE_DATA_MASK",
    "OVERLAY_DATA_MASK",
    "TAG_ORDER",
    "TagIndex",
    "card_key",
    "compare_by_card",
    "sort_tags",
    "DictionaryBinding",
    "DictionaryEntry",
    "StaticDictionary",
    "TagMetadataProvider",
    "UNKNOWN_ENTRY",
    "GROUP_LENGTH_ENTRY",
    "PRIVATE_CREATOR_ENTRY",
    "fallback_entry",
    "pack_tag",
    "unpack_tag",
    "card_to_bytes",
    "card_from_bytes",
    "private_block_card",
    "DicomTagError",
    "MalformedTagError",
    "MalformedMaskError",
    "InvalidTagError",
    "TagDecodeError",
]
