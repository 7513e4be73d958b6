import importlib.util
import json
from pathlib import Path

import pytest

from academy.cli import main, run_quiz
from academy.models.db import CourseContent
from academy.models.quiz import QuizPayload
from academy.quiz import QuizRuntime

QUIZ = {
    "questions": [
        {
            "id": "q1",
            "type": "SINGLE_CHOICE",
            "question": "2 + 2?",
            "options": ["3", "4"],
            "correctAnswers": [1],
            "explanation": "Basic arithmetic.",
        },
        {
            "id": "q2",
            "type": "TEXT_INPUT",
            "question": "Language of this course?",
            "correctAnswer": "Python",
        },
        {
            "id": "q3",
            "type": "FILL_BLANKS",
            "question": "Complete the sentence",
            "text": "Lists are [ ] and tuples are [ ].",
            "answers": ["mutable", "immutable"],
        },
    ],
    "passingScore": 60,
}


def _scripted(answers: list[str]):
    replies = iter(answers)
    return lambda prompt: next(replies)


def test_run_quiz_with_scripted_answers() -> None:
    runtime = QuizRuntime(QuizPayload.model_validate(QUIZ))
    output: list[str] = []

    passed = run_quiz(runtime, ask=_scripted(["2", " python ", "mutable", "wrong"]), say=output.append)

    assert passed is True
    assert runtime.result.correct_count == 2
    assert "Basic arithmetic." in output
    assert any(line.startswith("\nScore: 66.7%") for line in output)


def test_run_quiz_ignores_out_of_range_choice() -> None:
    runtime = QuizRuntime(QuizPayload.model_validate(QUIZ))

    passed = run_quiz(runtime, ask=_scripted(["9", "Java", "x", "y"]), say=lambda line: None)

    assert passed is False
    assert runtime.result.score == 0


def test_progress_toggle_and_show(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    store = tmp_path / "visited_pages.json"
    tree = tmp_path / "tree.json"
    tree.write_text(
        json.dumps(
            [{"id": "m1", "title": "Basics", "order": 1, "subContents": [{"id": "s1", "title": "Variables", "order": 1}]}]
        ),
        encoding="utf-8",
    )

    assert main(["progress", "toggle", "c1", "s1", "--store", str(store)]) == 0
    assert main(["progress", "show", "c1", "--tree", str(tree), "--store", str(store)]) == 0

    out = capsys.readouterr().out
    assert "s1: visited" in out
    assert "[x] Basics (1/1)" in out
    assert "Course complete" in out


def test_quiz_command_rejects_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "quiz.json"
    path.write_text('{"questions": "nope"}', encoding="utf-8")
    assert main(["quiz", str(path)]) == 1


def _load_migration_script():
    path = Path(__file__).resolve().parent.parent / "scripts" / "migrate_text_quizzes.py"
    spec = importlib.util.spec_from_file_location("migrate_text_quizzes", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_migration_retags_legacy_quizzes(db, make_node) -> None:
    migration = _load_migration_script()
    legacy = make_node("Old quiz", 1, content=json.dumps(QUIZ, separators=(",", ":")))
    broken = make_node("Looks like one", 2, content='{"questions":[{"id": 1}]}')
    plain = make_node("Plain", 3, content="<p>Hello</p>")

    assert migration.migrate(db, dry_run=True) == (1, 1)
    db.expire_all()
    assert db.get(CourseContent, legacy.id).type == "TEXT"

    assert migration.migrate(db) == (1, 1)
    db.expire_all()
    assert db.get(CourseContent, legacy.id).type == "QUIZ"
    assert db.get(CourseContent, broken.id).type == "TEXT"
    assert db.get(CourseContent, plain.id).content == "<p>Hello</p>"
