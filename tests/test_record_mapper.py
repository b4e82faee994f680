"""
Tests for mapping model payloads onto rows
"""

import pytest

from interview_coach.core.errors import InvalidShape, PersistenceFailure
from interview_coach.models.feedback import InterviewFeedback
from interview_coach.models.question import InterviewQuestion
from interview_coach.services.record_mapper import persist_questions, persist_feedback

from conftest import question_payload, feedback_payload


class TestPersistQuestions:
    """Question rows follow array order"""

    @pytest.mark.parametrize("count", [1, 5, 8])
    def test_order_index_matches_array_position(self, db, interview, count):
        payload = question_payload(count)
        saved = persist_questions(db, interview.id, payload)

        assert [q.order_index for q in saved] == list(range(count))
        assert [q.question_text for q in saved] == [
            item["questionText"] for item in payload["questions"]
        ]

        stored = (
            db.query(InterviewQuestion)
            .filter(InterviewQuestion.session_id == interview.id)
            .order_by(InterviewQuestion.order_index)
            .all()
        )
        assert [q.question_text for q in stored] == [
            item["questionText"] for item in payload["questions"]
        ]

    def test_duplicates_are_kept(self, db, interview):
        payload = question_payload(1)
        payload["questions"].append(dict(payload["questions"][0]))
        saved = persist_questions(db, interview.id, payload)
        assert len(saved) == 2
        assert saved[0].question_text == saved[1].question_text

    def test_fields_mapped(self, db, interview):
        [question] = persist_questions(db, interview.id, question_payload(1))
        assert question.category == "Technical"
        assert question.key_points == ["point 1a", "point 1b"]
        assert question.evaluation_criteria == {
            "clarity": "Clear structure",
            "depth": "Concrete examples",
            "relevance": "Tied to the role",
        }

    def test_missing_difficulty_falls_back_to_session(self, db, interview):
        payload = {"questions": [{"questionText": "Q1", "category": "Behavioral"}]}
        [question] = persist_questions(db, interview.id, payload, default_difficulty="Hard")
        assert question.difficulty == "Hard"
        assert question.key_points == []
        assert question.evaluation_criteria is None

    def test_invalid_element_writes_nothing(self, db, interview):
        payload = question_payload(3)
        del payload["questions"][2]["questionText"]

        with pytest.raises(InvalidShape, match="Question 2"):
            persist_questions(db, interview.id, payload)
        assert db.query(InterviewQuestion).count() == 0

    def test_non_object_element_is_invalid_shape(self, db, interview):
        with pytest.raises(InvalidShape):
            persist_questions(db, interview.id, {"questions": ["What is Python?"]})

    def test_partial_evaluation_criteria_is_invalid_shape(self, db, interview):
        payload = question_payload(1)
        payload["questions"][0]["evaluationCriteria"] = {"clarity": "only this"}
        with pytest.raises(InvalidShape):
            persist_questions(db, interview.id, payload)

    def test_second_set_for_same_session_conflicts(self, db, interview):
        persist_questions(db, interview.id, question_payload(2))
        with pytest.raises(PersistenceFailure):
            persist_questions(db, interview.id, question_payload(2))
        assert db.query(InterviewQuestion).count() == 2


class TestPersistFeedback:
    """Feedback row creation"""

    def test_fields_mapped(self, db, interview):
        feedback = persist_feedback(db, interview.id, feedback_payload())
        assert feedback.overall_score == 7.5
        assert feedback.behavioral_score is None
        assert feedback.strengths == ["Clear structure", "Good examples"]
        assert feedback.question_analysis == [
            {
                "questionIndex": 0,
                "score": 8.0,
                "feedback": "Well reasoned.",
                "keyPointsCovered": ["point 1a"],
            }
        ]
        assert feedback.metrics_data["skillsAssessed"] == ["python"]

    @pytest.mark.parametrize("score", [-1, 10.5])
    def test_score_out_of_range_is_invalid_shape(self, db, interview, score):
        payload = feedback_payload()
        payload["overallScore"] = score
        with pytest.raises(InvalidShape, match="overallScore"):
            persist_feedback(db, interview.id, payload)
        assert db.query(InterviewFeedback).count() == 0

    def test_second_feedback_is_persistence_failure(self, db, interview):
        persist_feedback(db, interview.id, feedback_payload())
        with pytest.raises(PersistenceFailure):
            persist_feedback(db, interview.id, feedback_payload())
