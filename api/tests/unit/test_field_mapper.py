"""
Tests unitarios para el FieldMapper y slugify.
"""
from __future__ import annotations

import pytest

from classes_sync.application.services.field_mapper import (
    FieldMapper,
    FieldMapping,
    as_numeric_string,
    fields_fingerprint,
    slugify,
)
from classes_sync.domain.entities.records import SourceRecord
from classes_sync.shared.exceptions.sync import MappingError


class TestSlugify:
    """Tests para slugify."""

    def test_punctuation_is_collapsed_and_trimmed(self) -> None:
        assert slugify("Intro to Welding!!") == "intro-to-welding"

    def test_blank_string_gives_empty_slug(self) -> None:
        assert slugify("  ") == ""

    def test_none_gives_empty_slug(self) -> None:
        assert slugify(None) == ""

    def test_runs_of_separators_collapse(self) -> None:
        assert slugify("--Basic   Safety -- 101--") == "basic-safety-101"

    @pytest.mark.parametrize("text", ["Ladder Use", "OSHA 10: Construction", "ÁREA de Trabajo", "a"])
    def test_slugify_is_stable_on_its_output(self, text: str) -> None:
        once = slugify(text)
        assert slugify(once) == once

    def test_non_ascii_letters_become_separators(self) -> None:
        assert slugify("Señal") == "se-al"


class TestAsNumericString:
    """Tests para los campos numericos como string."""

    @pytest.mark.parametrize("value", [None, 0, "", 0.0])
    def test_missing_or_zero_is_zero_string(self, value) -> None:
        assert as_numeric_string(value) == "0"

    def test_whole_float_has_no_decimal_suffix(self) -> None:
        assert as_numeric_string(12.0) == "12"

    def test_decimal_float_is_kept(self) -> None:
        assert as_numeric_string(49.5) == "49.5"

    def test_int_and_string_values(self) -> None:
        assert as_numeric_string(20) == "20"
        assert as_numeric_string("35") == "35"


class TestFieldMapper:
    """Tests para FieldMapper.map."""

    def test_maps_full_record(self, record_factory) -> None:
        record = record_factory(
            "rec1",
            "Basic Safety",
            Description="Intro course",
            Date="2025-03-01",
            **{"End Time": "17:00", "Number of seats": 20, "Price - Member": 49.5},
        )

        mapped = FieldMapper().map(record)

        assert mapped == {
            "name": "Basic Safety",
            "description": "Intro course",
            "date": "2025-03-01",
            "end-time": "17:00",
            "number-of-seats": "20",
            "price-member": "49.5",
            "slug": "basic-safety",
            "sourceRecordId": "rec1",
        }

    def test_missing_fields_get_empty_defaults(self) -> None:
        mapped = FieldMapper().map(SourceRecord(id="rec2", fields={}))

        assert mapped["name"] == ""
        assert mapped["description"] == ""
        assert mapped["end-time"] == ""
        assert mapped["number-of-seats"] == "0"
        assert mapped["price-member"] == "0"
        assert mapped["slug"] == ""
        assert mapped["sourceRecordId"] == "rec2"

    def test_always_includes_slug_and_back_reference(self, record_factory) -> None:
        mapper = FieldMapper(id_field="airtablerecordid")
        mapped = mapper.map(record_factory("rec3", "Ladder Use"))

        assert mapped["slug"] == "ladder-use"
        assert mapped["airtablerecordid"] == "rec3"
        assert "sourceRecordId" not in mapped

    def test_does_not_mutate_record(self, record_factory) -> None:
        record = record_factory("rec4", "Forklift", Extra="x")
        before = dict(record.fields)
        FieldMapper().map(record)
        assert record.fields == before

    def test_target_fields_lists_every_mapped_key(self, record_factory) -> None:
        mapper = FieldMapper()
        mapped = mapper.map(record_factory("rec5", "Crane"))
        assert sorted(mapper.target_fields) == sorted(mapped.keys())

    def test_broken_transform_raises_mapping_error(self, record_factory) -> None:
        def _boom(value):
            raise ValueError("bad value")

        mapper = FieldMapper([FieldMapping("Name", "name", _boom)])

        with pytest.raises(MappingError) as exc_info:
            mapper.map(record_factory("rec6", "Anything"))

        assert exc_info.value.record_id == "rec6"


class TestFieldsFingerprint:
    """Tests para fields_fingerprint."""

    def test_key_order_does_not_matter(self) -> None:
        assert fields_fingerprint({"a": 1, "b": "x"}) == fields_fingerprint({"b": "x", "a": 1})

    def test_restricting_keys_ignores_extra_fields(self) -> None:
        mapped = {"name": "A", "slug": "a"}
        stored = {"name": "A", "slug": "a", "_archived": False}
        assert fields_fingerprint(mapped, mapped.keys()) == fields_fingerprint(stored, mapped.keys())

    def test_value_change_changes_fingerprint(self) -> None:
        assert fields_fingerprint({"name": "A"}) != fields_fingerprint({"name": "B"})
