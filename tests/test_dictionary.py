"""Tests for dictionary entries, the memoized binding and StaticDictionary."""

import threading

import pytest

from dicomtag import (
    GROUP_LENGTH_ENTRY,
    PRIVATE_CREATOR_ENTRY,
    UNKNOWN_ENTRY,
    DicomTag,
    DictionaryBinding,
    DictionaryEntry,
    StaticDictionary,
    fallback_entry,
)

from conftest import CURVE_DIMENSIONS, GE_SUITE_ID, PATIENT_ID, PATIENT_NAME, SOP_CLASS_UID


class TestDictionaryEntry:
    def test_default_vr(self):
        assert PATIENT_NAME.default_vr == "PN"
        assert DictionaryEntry(DicomTag(0x0011, 0x1010), "x").default_vr == "UN"

    def test_display_tag(self):
        assert PATIENT_NAME.display_tag == "(0010,0010)"
        assert CURVE_DIMENSIONS.display_tag == "(50xx,0005)"
        assert GROUP_LENGTH_ENTRY.display_tag == "(xxxx,0000)"

    def test_matches_masked(self):
        assert CURVE_DIMENSIONS.matches(DicomTag(0x5004, 0x0005))
        assert not CURVE_DIMENSIONS.matches(DicomTag(0x5004, 0x0006))

    def test_str(self):
        assert str(PATIENT_NAME) == "(0010,0010) PN Patient's Name"
        assert str(CURVE_DIMENSIONS) == "(50xx,0005) US Curve Dimensions (Retired)"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PATIENT_NAME.name = "other"


class TestFallback:
    def test_group_length(self):
        assert fallback_entry(DicomTag(0x0028, 0x0000)) is GROUP_LENGTH_ENTRY

    def test_private_creator(self):
        assert fallback_entry(DicomTag(0x0029, 0x0010)) is PRIVATE_CREATOR_ENTRY
        assert fallback_entry(DicomTag(0x0029, 0x00FF)) is PRIVATE_CREATOR_ENTRY

    def test_unknown(self):
        assert fallback_entry(DicomTag(0x0029, 0x1010)) is UNKNOWN_ENTRY
        assert fallback_entry(DicomTag(0x0028, 0x0010)) is UNKNOWN_ENTRY
        assert UNKNOWN_ENTRY.default_vr == "UN"


class TestDictionaryBinding:
    def test_resolves_entry(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        assert binding.entry(DicomTag(0x0010, 0x0010)) is PATIENT_NAME
        assert binding.name(DicomTag(0x0010, 0x0020)) == "Patient ID"

    def test_memoizes_per_card(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        first = binding.entry(DicomTag(0x0010, 0x0010))
        second = binding.entry(DicomTag.parse("(0010,0010)"))
        assert first is second
        assert len(counting_provider.calls) == 1
        assert len(binding) == 1

    def test_miss_is_cached_sentinel(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        tag = DicomTag(0x0011, 0x1010)
        assert binding.entry(tag) is UNKNOWN_ENTRY
        assert binding.entry(tag) is UNKNOWN_ENTRY
        assert len(counting_provider.calls) == 1

    def test_miss_recognises_structure(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        assert binding.entry(DicomTag(0x0010, 0x0000)) is GROUP_LENGTH_ENTRY
        assert binding.entry(DicomTag(0x0009, 0x0010)) is PRIVATE_CREATOR_ENTRY

    def test_provider_key_error_is_a_miss(self):
        class RaisingProvider:
            def lookup(self, tag):
                raise KeyError(tag.card)

        binding = DictionaryBinding(RaisingProvider())
        assert binding.entry(DicomTag(0x0010, 0x0010)) is UNKNOWN_ENTRY

    def test_private_creator_is_part_of_cache_key(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        ge = binding.entry(DicomTag(0x0009, 0x1002, "GEMS_IDEN_01"))
        other = binding.entry(DicomTag(0x0009, 0x1002, "SIEMENS CSA HEADER"))
        assert ge is GE_SUITE_ID
        assert other is UNKNOWN_ENTRY
        assert len(counting_provider.calls) == 2

    def test_clear(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        binding.entry(DicomTag(0x0010, 0x0010))
        binding.clear()
        assert len(binding) == 0
        binding.entry(DicomTag(0x0010, 0x0010))
        assert len(counting_provider.calls) == 2

    def test_describe(self, static_dictionary):
        binding = DictionaryBinding(static_dictionary)
        assert binding.describe(DicomTag(0x0010, 0x0010)) == "(0010,0010) PN Patient's Name"
        assert binding.describe(DicomTag(0x5002, 0x0005)) == "(5002,0005) US Curve Dimensions (Retired)"
        assert binding.describe(DicomTag(0x0011, 0x1010)) == "(0011,1010) UN Unknown"

    def test_concurrent_first_access_calls_provider_once(self, counting_provider):
        binding = DictionaryBinding(counting_provider)
        tag = DicomTag(0x0010, 0x0020)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(binding.entry(tag))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(result is PATIENT_ID for result in results)
        assert len(counting_provider.calls) == 1

    def test_provider_may_resolve_through_binding(self, static_dictionary):
        class CreatorAwareProvider:
            """Looks up the creator element before the private element itself."""

            def __init__(self):
                self.binding = None
                self.creator_names = []

            def lookup(self, tag):
                if tag.is_private and tag.element > 0x00FF:
                    creator = DicomTag.private_creator_tag(tag.group, tag.element)
                    self.creator_names.append(self.binding.name(creator))
                return static_dictionary.lookup(tag)

        provider = CreatorAwareProvider()
        binding = DictionaryBinding(provider)
        provider.binding = binding

        assert binding.entry(DicomTag(0x0009, 0x1002, "GEMS_IDEN_01")) is GE_SUITE_ID
        assert provider.creator_names == [PRIVATE_CREATOR_ENTRY.name]
        assert len(binding) == 2

    def test_provider_property(self, static_dictionary):
        assert DictionaryBinding(static_dictionary).provider is static_dictionary


class TestStaticDictionary:
    def test_exact_lookup(self, static_dictionary):
        assert static_dictionary.lookup(DicomTag(0x0008, 0x0016)).keyword == "SOPClassUID"

    def test_masked_lookup(self, static_dictionary):
        assert static_dictionary.lookup(DicomTag(0x50FE, 0x0005)) is CURVE_DIMENSIONS

    def test_private_lookup_needs_creator(self, static_dictionary):
        assert static_dictionary.lookup(DicomTag(0x0009, 0x1002)) is None
        assert static_dictionary.lookup(DicomTag(0x0009, 0x1002, "GEMS_IDEN_01")) is GE_SUITE_ID

    def test_private_lookup_any_block(self, static_dictionary):
        assert static_dictionary.lookup(DicomTag(0x0009, 0x1102, "GEMS_IDEN_01")) is GE_SUITE_ID
        assert static_dictionary.lookup(DicomTag(0x0009, 0x1103, "GEMS_IDEN_01")) is None

    def test_miss(self, static_dictionary):
        assert static_dictionary.lookup(DicomTag(0x0028, 0x0010)) is None

    def test_later_exact_entry_replaces(self, static_dictionary):
        static_dictionary.add(DictionaryEntry(DicomTag(0x0010, 0x0010), "Renamed", vrs=("PN",)))
        assert static_dictionary.lookup(DicomTag(0x0010, 0x0010)).name == "Renamed"

    def test_len_and_iter(self, static_dictionary, entries):
        assert len(static_dictionary) == len(entries)
        assert list(static_dictionary) == entries

    def test_search_by_group(self, static_dictionary):
        found = static_dictionary.search("0010")
        assert found == [PATIENT_NAME, PATIENT_ID]

    def test_search_by_full_tag(self, static_dictionary):
        assert static_dictionary.search("0010,0020") == [PATIENT_ID]

    def test_search_matches_masked_entries(self, static_dictionary):
        assert static_dictionary.search("5012,0005") == [CURVE_DIMENSIONS]

    def test_search_by_name(self, static_dictionary):
        assert static_dictionary.search("patient") == [PATIENT_NAME, PATIENT_ID]
        assert static_dictionary.search("*uid") == [SOP_CLASS_UID]
        assert static_dictionary.search("*UID*") == [SOP_CLASS_UID]

    def test_search_name_single_char_wildcard(self, static_dictionary):
        assert static_dictionary.search("Patient I?") == [PATIENT_ID]

    def test_search_nothing(self, static_dictionary):
        assert static_dictionary.search("Nonexistent Thing") == []
