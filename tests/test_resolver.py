"""End-to-end QuestionGraphResolver tests.

Exercises the full intake → reorder → identifiers → numbering → projection
chain against the properties every resolution must hold, plus the
degraded paths that must not raise.
"""

import pytest

from helpers.fakes import FailingIdGenerator, FixedIdGenerator, SequenceIdGenerator

from assignment_questions.resolver import QuestionGraphResolver


def _by_label(result):
    return {q.label: q for q in result.questions}


# =====================================================================
# Core properties
# =====================================================================


class TestProperties:
    MIXED = [
        {"_uid": "#5", "label": "E", "conditional": {"field": "#2", "value": "Yes"}},
        {"_uid": "perm-a", "label": "A"},
        {"_uid": "#2", "label": "B", "component": "radio", "options": "Yes;No"},
        {"id": "new-7", "label": "C", "conditionalQuestionId": "perm-a", "conditionalQuestionValue": "No"},
        {"label": "D"},
        {"_uid": "#9", "label": "F", "conditional": {"field": "missing", "value": "x"}},
    ]

    def test_totality(self, resolver):
        assert len(resolver.resolve(self.MIXED).questions) == len(self.MIXED)

    def test_ids_unique(self, resolver):
        ids = [q.id for q in resolver.resolve(self.MIXED).questions]
        assert len(set(ids)) == len(ids)

    def test_stable_id_preserved(self, resolver):
        assert _by_label(resolver.resolve(self.MIXED))["A"].id == "perm-a"

    def test_dependency_direction(self, resolver):
        questions = resolver.resolve(self.MIXED).questions
        order_by_id = {q.id: q.order for q in questions}
        for q in questions:
            if q.conditional is not None:
                assert order_by_id[q.conditional.field] < q.order

    def test_orders_are_sequential(self, resolver):
        questions = resolver.resolve(self.MIXED).questions
        assert [q.order for q in questions] == list(range(1, len(questions) + 1))

    def test_mixed_numbering(self, resolver):
        result = resolver.resolve(self.MIXED)
        numbers = {q.label: q.question_number for q in result.questions}
        # E is moved after B; F's parent never appears
        assert [q.label for q in result.questions] == ["A", "B", "E", "C", "D", "F"]
        assert numbers == {"A": "1", "B": "2", "E": "2a", "C": "1a", "D": "3", "F": "0a"}
        assert [a.kind for a in result.anomalies] == ["unknown_parent"]


class TestNumberingProperties:
    def test_top_level(self, resolver):
        result = resolver.resolve([{"label": "A"}, {"label": "B"}, {"label": "C"}])
        assert [q.question_number for q in result.questions] == ["1", "2", "3"]
        assert [q.label for q in result.questions] == ["A", "B", "C"]

    def test_conditional_sub_numbering(self, resolver):
        result = resolver.resolve([
            {"label": "first"},
            {"_uid": "#p", "label": "second"},
            {"label": "x", "conditional": {"field": "#p", "value": "Yes"}},
            {"label": "y", "conditionalQuestionId": "#p", "conditionalQuestionValue": "No"},
        ])
        assert [q.question_number for q in result.questions] == ["1", "2", "2a", "2b"]

    def test_sub_index_overflow(self, resolver):
        raw = [{"_uid": "#p", "label": "parent"}]
        raw += [{"label": f"c{i}", "conditional": {"field": "#p", "value": "Yes"}} for i in range(27)]
        numbers = [q.question_number for q in resolver.resolve(raw).questions]
        assert numbers[1:27] == [f"1{c}" for c in "abcdefghijklmnopqrstuvwxyz"]
        assert numbers[27] == "127"

    def test_orphan_reference(self, resolver):
        result = resolver.resolve([{"label": "A"}, {"label": "B", "conditional": {"field": "nope", "value": "1"}}])
        assert result.questions[1].question_number.startswith("0")

    def test_chained_forward_reference_degrades(self, resolver):
        result = resolver.resolve([
            {"_uid": "#c", "label": "C", "conditional": {"field": "#b", "value": "Yes"}},
            {"_uid": "#b", "label": "B", "conditional": {"field": "#a", "value": "Yes"}},
            {"_uid": "#a", "label": "A"},
        ])
        assert [q.label for q in result.questions] == ["C", "A", "B"]
        assert [q.question_number for q in result.questions] == ["0a", "1", "1a"]
        # C's parent comes later, so its link is not stored
        assert result.questions[0].conditional is None
        assert result.questions[2].conditional.field == result.questions[1].id
        assert [a.kind for a in result.anomalies] == ["forward_parent"]


# =====================================================================
# References, options, metadata
# =====================================================================


class TestRewritesAndProjection:
    def test_reference_rewrite(self):
        resolver = QuestionGraphResolver(FixedIdGenerator(["perm-9", "perm-10"]))
        result = resolver.resolve([
            {"_uid": "new-1", "label": "A"},
            {"_uid": "new-2", "label": "B", "conditional": {"field": "new-1", "value": "Yes"}},
        ])
        assert result.questions[0].id == "perm-9"
        assert result.questions[1].conditional.field == "perm-9"

    def test_options_normalised(self, resolver):
        result = resolver.resolve([{"component": "radio", "options": "Yes;No; Maybe"}])
        assert [o.label for o in result.questions[0].options] == ["Yes", "No", "Maybe"]

    def test_last_completion_date_wins(self, resolver):
        result = resolver.resolve([
            {"_uid": "d1", "component": "completionDate"},
            {"_uid": "s1", "component": "schoolSelector"},
            {"_uid": "d2", "component": "completionDate"},
        ])
        assert result.completion_date_id == "d2"
        assert result.school_selector_id == "s1"
        assert result.completion_time_id is None

    def test_projection_uses_permanent_ids(self, resolver):
        result = resolver.resolve([{"_uid": "#t", "component": "completionTime"}])
        assert result.completion_time_id == "id-1"


# =====================================================================
# Input handling & failures
# =====================================================================


class TestInputHandling:
    def test_none(self, resolver):
        result = resolver.resolve(None)
        assert result.questions == []
        assert result.school_selector_id is None

    def test_non_list(self, resolver):
        with pytest.raises(ValueError):
            resolver.resolve("not a list")

    @pytest.mark.parametrize(
        "draft",
        [
            {"label": 5},
            {"category": 3},
            {"assignedToEmail": ["a@x.org", 7]},
            {"criticality": 2},
            {"_uid": {"x": 1}},
        ],
    )
    def test_malformed_pass_through_still_resolves(self, resolver, draft):
        result = resolver.resolve([{"_uid": "p"}, draft])
        assert len(result.questions) == 2
        assert [q.question_number for q in result.questions] == ["1", "2"]

    def test_malformed_pass_through_values_kept(self, resolver):
        result = resolver.resolve([{"label": 5, "assignedToEmail": ["a@x.org", 7], "criticality": 2}])
        [q] = result.questions
        assert q.label == "5"
        assert q.assigned_to_email == ["a@x.org", "7"]
        assert q.criticality == "2"

    def test_generator_failure_propagates(self):
        with pytest.raises(RuntimeError):
            QuestionGraphResolver(FailingIdGenerator()).resolve([{"label": "A"}])

    def test_default_generator(self):
        result = QuestionGraphResolver().resolve([{"label": "A"}, {"label": "B"}])
        assert all(len(q.id) == 32 for q in result.questions)

    def test_resolver_reusable(self):
        resolver = QuestionGraphResolver(SequenceIdGenerator())
        first = resolver.resolve([{"label": "A"}, {"label": "B"}])
        second = resolver.resolve([{"label": "A"}, {"label": "B"}])
        assert [q.question_number for q in first.questions] == ["1", "2"]
        assert [q.question_number for q in second.questions] == ["1", "2"]

    def test_edit_round_trip_keeps_ids(self, resolver):
        """Re-submitting stored questions keeps ids, order, and numbers."""
        first = resolver.resolve([
            {"_uid": "#p", "label": "P"},
            {"_uid": "#c", "label": "C", "conditional": {"field": "#p", "value": "Yes"}},
        ])
        resubmitted = [q.to_document() for q in first.questions]
        second = resolver.resolve(resubmitted)
        assert [q.id for q in second.questions] == [q.id for q in first.questions]
        assert [q.question_number for q in second.questions] == ["1", "1a"]
        assert second.questions[1].conditional.field == first.questions[0].id

    def test_anomalies_not_in_documents(self, resolver):
        result = resolver.resolve([{"label": "x", "conditional": {"field": "ghost", "value": "1"}}])
        assert result.anomalies
        assert all("anomalies" not in doc for doc in result.question_documents())
