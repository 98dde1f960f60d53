# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for dicomtag

Malformed text is normally reported by returning None from the parse
functions. These exceptions are raised by the strict constructors and by
callers passing values that can never be a tag.

Copyright 2025 DNAi inc.
"""


class DicomTagError(Exception):
    """
    Base exception for all dicomtag errors.

    All dicomtag exceptions inherit from this class, allowing
    catch-all error handling for any tag-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MalformedTagError(DicomTagError, ValueError):
    """
    Raised when tag text cannot be parsed by a strict constructor.

    This exception is raised when:
    - Text is not in (gggg,eeee), gggg,eeee or ggggeeee form
    - A group or element field is not exactly 4 hex digits
    """
    def __init__(self, text: object):
        self.text = text
        super().__init__(f"Malformed DICOM tag: {text!r}")


class MalformedMaskError(DicomTagError, ValueError):
    """
    Raised when a tag mask pattern cannot be parsed by a strict constructor.

    This exception is raised when:
    - The pattern does not reduce to exactly 8 characters
    - A character is neither a hex digit nor the wildcard 'x'
    - A raw mask has a nibble other than 0x0 or 0xF
    """
    def __init__(self, pattern: object):
        self.pattern = pattern
        super().__init__(f"Malformed DICOM tag mask: {pattern!r}")


class InvalidTagError(DicomTagError, ValueError):
    """
    Raised when a value can never be a DICOM tag.

    This exception is raised when:
    - Group or element is outside 0x0000-0xFFFF
    - A card is outside the unsigned 32-bit range
    - A value of an unsupported type is coerced to a tag
    """
    pass


class TagDecodeError(DicomTagError):
    """
    Raised when a binary tag cannot be decoded.

    This exception is raised when fewer than 4 bytes remain at the
    requested offset.
    """
    pass
