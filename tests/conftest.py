"""
Shared test fixtures for dicomtag tests.
Provides a small in-memory dictionary and a provider that counts lookups.
"""

import pytest

from dicomtag.dictionary import DictionaryEntry, StaticDictionary
from dicomtag.tag import DicomTag


PATIENT_NAME = DictionaryEntry(
    DicomTag(0x0010, 0x0010), "Patient's Name", "PatientName", ("PN",), "1")
PATIENT_ID = DictionaryEntry(
    DicomTag(0x0010, 0x0020), "Patient ID", "PatientID", ("LO",), "1")
SOP_CLASS_UID = DictionaryEntry(
    DicomTag(0x0008, 0x0016), "SOP Class UID", "SOPClassUID", ("UI",), "1")
CURVE_DIMENSIONS = DictionaryEntry(
    DicomTag(0x5000, 0x0005), "Curve Dimensions", "CurveDimensions", ("US",), "1",
    retired=True, mask=0xFF00FFFF)
GE_SUITE_ID = DictionaryEntry(
    DicomTag(0x0009, 0x1002), "Suite ID", "SuiteID", ("SH",), "1",
    mask=0xFFFF00FF, private_creator="GEMS_IDEN_01")


class CountingProvider:
    """TagMetadataProvider wrapper that records every lookup."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def lookup(self, tag):
        self.calls.append(tag)
        return self.inner.lookup(tag)


@pytest.fixture
def entries():
    return [PATIENT_NAME, PATIENT_ID, SOP_CLASS_UID, CURVE_DIMENSIONS, GE_SUITE_ID]


@pytest.fixture
def static_dictionary(entries):
    return StaticDictionary(entries)


@pytest.fixture
def counting_provider(static_dictionary):
    return CountingProvider(static_dictionary)
