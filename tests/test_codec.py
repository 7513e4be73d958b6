import json

import pytest

from academy.content import codec
from academy.errors import MalformedPayload
from academy.models.db.content import ContentType
from academy.models.quiz import QuizPayload


def _quiz_dict() -> dict:
    return {
        "questions": [
            {
                "id": "q1",
                "type": "SINGLE_CHOICE",
                "question": "2 + 2?",
                "options": ["3", "4"],
                "correctAnswers": [1],
            },
            {
                "id": "q2",
                "type": "MULTIPLE_CHOICE",
                "question": "Even numbers?",
                "options": ["1", "2", "4"],
                "correctAnswers": [1, 2],
                "explanation": "Divisible by two.",
            },
            {
                "id": "q3",
                "type": "TEXT_INPUT",
                "question": "Capital of France?",
                "correctAnswer": "Paris",
                "caseSensitive": False,
            },
            {
                "id": "q4",
                "type": "MATCHING",
                "question": "Match",
                "pairs": [{"left": "a", "right": "1"}, {"left": "b", "right": "2"}],
            },
            {
                "id": "q5",
                "type": "FILL_BLANKS",
                "question": "Fill in",
                "text": "The [ ] is [ ].",
                "answers": ["sky", "blue"],
            },
            {
                "id": "q6",
                "type": "TRUE_FALSE",
                "question": "Water is wet",
                "options": ["True", "False"],
                "correctAnswers": [0],
            },
        ],
        "shuffleQuestions": True,
        "passingScore": 80,
    }


@pytest.mark.parametrize("content_type", ["TEXT", "VIDEO", "AUDIO", "H5P"])
def test_string_payloads_stored_verbatim(content_type: str) -> None:
    value = "<p>Hello</p>" if content_type == "TEXT" else "https://youtu.be/dQw4w9WgXcQ"
    assert codec.encode(content_type, value) == value
    assert codec.decode(content_type, value) == value


def test_string_payload_rejects_non_string() -> None:
    with pytest.raises(TypeError):
        codec.encode(ContentType.TEXT, {"a": 1})


def test_quiz_round_trip_preserves_every_variant() -> None:
    payload = QuizPayload.model_validate(_quiz_dict())
    raw = codec.encode(ContentType.QUIZ, payload)

    decoded = codec.decode(ContentType.QUIZ, raw)

    assert decoded == payload
    assert [q.type for q in decoded.questions] == [
        "SINGLE_CHOICE",
        "MULTIPLE_CHOICE",
        "TEXT_INPUT",
        "MATCHING",
        "FILL_BLANKS",
        "TRUE_FALSE",
    ]
    assert decoded.shuffleQuestions is True
    assert decoded.passingScore == 80


def test_quiz_encode_accepts_dict_and_json_string() -> None:
    from_dict = codec.encode_quiz(_quiz_dict())
    from_string = codec.encode_quiz(json.dumps(_quiz_dict()))
    assert from_dict == from_string
    assert codec.LEGACY_QUIZ_MARKER in from_dict


def test_passing_score_defaults_to_seventy() -> None:
    payload = codec.decode_quiz('{"questions": []}')
    assert payload.passingScore == 70
    assert payload.shuffleQuestions is False


def test_numeric_question_ids_are_coerced() -> None:
    data = _quiz_dict()
    data["questions"][0]["id"] = 17
    payload = codec.decode_quiz(json.dumps(data))
    assert payload.questions[0].id == "17"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not json",
        "{}",
        '{"questions": [{"id": "q", "type": "UNKNOWN", "question": "?"}]}',
        '{"questions": [{"id": "q", "type": "SINGLE_CHOICE", "question": "?", "options": ["a", "b"], "correctAnswers": [0, 1]}]}',
        '{"questions": [{"id": "q", "type": "SINGLE_CHOICE", "question": "?", "options": ["a", "b"], "correctAnswers": [5]}]}',
        '{"questions": [{"id": "q", "type": "FILL_BLANKS", "question": "?", "text": "one [ ] blank", "answers": ["a", "b"]}]}',
        '{"questions": [], "passingScore": 150}',
    ],
)
def test_malformed_quiz_raises(raw: str) -> None:
    with pytest.raises(MalformedPayload):
        codec.decode_quiz(raw)


def test_sniff_legacy_quiz_in_text() -> None:
    raw = json.dumps(_quiz_dict(), separators=(",", ":"))
    payload = codec.sniff_legacy_quiz(raw)
    assert payload is not None
    assert len(payload.questions) == 6


def test_sniff_ignores_plain_html_and_broken_json() -> None:
    assert codec.sniff_legacy_quiz("<p>No quiz here</p>") is None
    assert codec.sniff_legacy_quiz('<p>"questions":[ oops</p>') is None
    assert codec.sniff_legacy_quiz(None) is None
