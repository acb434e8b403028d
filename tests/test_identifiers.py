"""Identifier resolver tests.

Covers:
  - temporary ids replaced from the pre-generated pool
  - permanent ids preserved across edits
  - conditional references rewritten across the whole list
  - on-demand minting when the pool is short
  - duplicate permanent ids
  - generator failures propagating
"""

import pytest

from helpers.fakes import FailingIdGenerator, FixedIdGenerator, SequenceIdGenerator

from assignment_questions.identifiers import (
    IdentifierResolver,
    UuidIdGenerator,
    is_temporary_id,
)
from assignment_questions.intake import normalize_drafts


def _resolve(raw, generator=None):
    generator = generator or SequenceIdGenerator()
    return IdentifierResolver(generator).resolve(normalize_drafts(raw))


def _ids(resolution):
    return [d.resolved_id for d in resolution.drafts]


# =====================================================================
# Temporary-id detection
# =====================================================================


class TestIsTemporary:
    @pytest.mark.parametrize(
        "identifier",
        ["#12", "new-3", "temp_frontend_id_0", "csv_question_4", "", None],
    )
    def test_temporary(self, identifier):
        assert is_temporary_id(identifier)

    @pytest.mark.parametrize("identifier", ["9f8e7d", "q-perm", "newsletter"])
    def test_permanent(self, identifier):
        assert not is_temporary_id(identifier)

    def test_custom_prefixes(self):
        assert is_temporary_id("tmp:1", prefixes=("tmp:",))
        assert not is_temporary_id("#1", prefixes=("tmp:",))


class TestUuidIdGenerator:
    def test_unique_hex(self):
        ids = UuidIdGenerator().generate_ids(50)
        assert len(set(ids)) == 50
        assert all(len(i) == 32 for i in ids)

    def test_zero(self):
        assert UuidIdGenerator().generate_ids(0) == []

    def test_negative(self):
        with pytest.raises(ValueError):
            UuidIdGenerator().generate_ids(-1)

    def test_single(self):
        assert len(UuidIdGenerator().generate_id()) == 32


# =====================================================================
# Resolution
# =====================================================================


class TestIdentifierResolver:
    def test_pool_requested_once(self):
        generator = SequenceIdGenerator()
        _resolve([{"_uid": "#1"}, {"_uid": "#2"}, {"_uid": "#3"}], generator)
        assert generator.batch_calls == [3]
        assert generator.single_calls == 0

    def test_temporary_ids_minted_from_pool(self):
        result = _resolve([{"_uid": "#1"}, {"id": "new-2"}, {}])
        assert _ids(result) == ["id-1", "id-2", "id-3"]

    def test_permanent_id_preserved(self):
        result = _resolve([{"_uid": "#1"}, {"_uid": "q-perm"}, {"id": "local-perm"}])
        assert _ids(result) == ["id-1", "q-perm", "local-perm"]

    def test_client_id_beats_local_id(self):
        result = _resolve([{"_uid": "q-perm", "id": "new-1"}])
        assert _ids(result) == ["q-perm"]
        assert result.id_map == {"new-1": "q-perm"}

    def test_reference_rewritten(self):
        result = _resolve([
            {"_uid": "new-1", "label": "A"},
            {"_uid": "new-2", "conditional": {"field": "new-1", "value": "Yes"}},
        ])
        assert result.drafts[1].conditional.field == "id-1"
        assert result.id_map == {"new-1": "id-1", "new-2": "id-2"}

    def test_earlier_draft_reference_rewritten(self):
        """Rewrites reach drafts that were already given their id."""
        result = _resolve([
            {"_uid": "#child", "conditional": {"field": "#parent", "value": "Yes"}},
            {"_uid": "#parent"},
        ])
        assert result.drafts[0].conditional.field == "id-2"

    def test_reference_by_local_id_rewritten(self):
        result = _resolve([
            {"_uid": "keep-me", "id": "new-1"},
            {"conditionalQuestionId": "new-1", "conditionalQuestionValue": "Yes"},
        ])
        assert result.drafts[1].conditional.field == "keep-me"

    def test_reference_to_permanent_id_unchanged(self):
        result = _resolve([
            {"_uid": "q-perm"},
            {"_uid": "#2", "conditional": {"field": "q-perm", "value": "Yes"}},
        ])
        assert result.drafts[1].conditional.field == "q-perm"

    def test_unknown_reference_left_alone(self):
        result = _resolve([{"_uid": "#1", "conditional": {"field": "#ghost", "value": "x"}}])
        assert result.drafts[0].conditional.field == "#ghost"

    def test_placeholder_recorded_in_id_map(self):
        result = _resolve([{"label": "no ids"}])
        assert result.id_map == {"temp_frontend_id_0": "id-1"}

    def test_short_pool_falls_back_to_single_minting(self):
        generator = SequenceIdGenerator(short_by=2)
        result = _resolve([{"_uid": "#1"}, {"_uid": "#2"}, {"_uid": "#3"}], generator)
        assert _ids(result) == ["id-1", "id-2", "id-3"]
        assert generator.single_calls == 2

    def test_empty_pool_slot_replaced(self):
        result = _resolve([{"_uid": "#1"}, {"_uid": "#2"}], FixedIdGenerator(["", "x-2", "x-3"]))
        # Slot 0 is blank, so the first draft is minted on demand
        assert _ids(result) == ["x-3", "x-2"]

    def test_duplicate_permanent_id(self):
        result = _resolve([
            {"_uid": "dup", "label": "first"},
            {"_uid": "dup", "label": "second"},
            {"_uid": "#3", "conditional": {"field": "dup", "value": "Yes"}},
        ])
        assert _ids(result) == ["dup", "id-2", "id-3"]
        # References keep pointing at the first owner of the id
        assert result.drafts[2].conditional.field == "dup"
        [anomaly] = result.anomalies
        assert anomaly.kind == "duplicate_identifier"
        assert anomaly.question_id == "dup"

    def test_ids_unique(self):
        raw = [{"_uid": "#1"}, {"_uid": "a"}, {"_uid": "a"}, {}, {"id": "new-9"}]
        ids = _ids(_resolve(raw))
        assert len(set(ids)) == len(ids)

    def test_generator_failure_propagates(self):
        with pytest.raises(RuntimeError, match="id service unavailable"):
            _resolve([{"_uid": "#1"}], FailingIdGenerator())

    def test_generator_exhausted(self):
        """A generator that keeps returning nothing fails loudly."""
        with pytest.raises(RuntimeError):
            _resolve([{"_uid": "#1"}], FixedIdGenerator([]))

    def test_input_not_mutated(self):
        drafts = normalize_drafts([{"_uid": "#1"}])
        IdentifierResolver(SequenceIdGenerator()).resolve(drafts)
        assert drafts[0].resolved_id is None
