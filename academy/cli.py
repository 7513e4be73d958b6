"""Command line entry point: take quizzes, track local progress, run the server."""
import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Callable

import uvicorn

from academy.content import codec
from academy.content.tree import tree_from_json
from academy.errors import MalformedPayload
from academy.logging_setup import setup_console_logging
from academy.progress import LocalVisitedStore, ProgressTracker
from academy.quiz import Phase, QuizRuntime
from academy.utils.json_utils import read_json_file

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]
Say = Callable[[str], None]


def _ask_index(ask: Ask, prompt: str, count: int) -> int | None:
    raw = ask(prompt).strip()
    if not raw.isdigit() or not 1 <= int(raw) <= count:
        return None
    return int(raw) - 1


def read_answer(question, ask: Ask, say: Say, rng: random.Random):
    """Prompt for an answer in the shape the scorer expects."""
    say(question.question)
    kind = question.type

    if kind in ("SINGLE_CHOICE", "TRUE_FALSE", "MULTIPLE_CHOICE"):
        for number, option in enumerate(question.options, start=1):
            say(f"  {number}) {option}")
        if kind != "MULTIPLE_CHOICE":
            return _ask_index(ask, "Your choice: ", len(question.options))
        raw = ask("Your choices (comma separated): ")
        picked = []
        for part in raw.split(","):
            part = part.strip()
            if part.isdigit() and 1 <= int(part) <= len(question.options):
                picked.append(int(part) - 1)
        return picked

    if kind == "TEXT_INPUT":
        return ask("Your answer: ")

    if kind == "MATCHING":
        rights = [pair.right for pair in question.pairs]
        rng.shuffle(rights)
        for number, right in enumerate(rights, start=1):
            say(f"  {number}) {right}")
        answer = {}
        for index, pair in enumerate(question.pairs):
            choice = _ask_index(ask, f"{pair.left} -> ", len(rights))
            if choice is not None:
                answer[index] = rights[choice]
        return answer

    if kind == "FILL_BLANKS":
        say(question.text)
        return [ask(f"Blank {number}: ") for number in range(1, len(question.answers) + 1)]

    raise ValueError(f"unsupported question type: {kind}")


def run_quiz(runtime: QuizRuntime, ask: Ask = input, say: Say = print) -> bool:
    """Drive one attempt on the terminal. Returns True when passed."""
    rng = random.Random()
    while runtime.phase is not Phase.RESULTS:
        question = runtime.current_question
        say(f"\nQuestion {runtime.index + 1}/{runtime.total}")
        correct = runtime.submit(read_answer(question, ask, say, rng))
        say("Correct!" if correct else "Incorrect.")
        if question.explanation:
            say(question.explanation)
        runtime.next()

    result = runtime.result
    say(f"\nScore: {result.score:.1f}% ({result.correct_count}/{result.total})")
    say("Passed!" if result.passed else f"Not passed, {result.passing_score}% required.")
    return result.passed


def cmd_quiz(args: argparse.Namespace) -> int:
    try:
        payload = codec.decode_quiz(args.file.read_text(encoding="utf-8"))
    except MalformedPayload as exc:
        logger.error("Cannot load quiz from %s: %s", args.file, exc)
        return 1
    if not payload.questions:
        print("This quiz has no questions yet.")
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    runtime = QuizRuntime(payload, rng=rng)
    while True:
        passed = run_quiz(runtime)
        if passed or input("Retry? [y/N] ").strip().lower() != "y":
            return 0 if passed else 2
        runtime.retry()


def cmd_progress(args: argparse.Namespace) -> int:
    tracker = ProgressTracker(LocalVisitedStore(args.store) if args.store else None)

    if args.action == "toggle":
        visited = tracker.toggle_visited(args.course, args.content)
        print(f"{args.content}: {'visited' if visited else 'not visited'}")
        return 0

    tree = tree_from_json(read_json_file(args.tree, []))
    for topic in tree:
        status = tracker.topic_status(args.course, topic)
        mark = "x" if status.completed else ("~" if status.partially_completed else " ")
        print(f"[{mark}] {topic.title} ({status.visited}/{status.total})")
        for child in topic.children:
            seen = "x" if tracker.is_visited(args.course, child.id) else " "
            print(f"    [{seen}] {child.title}")
    complete = tracker.is_course_complete(args.course, tree)
    print("Course complete, certificate available." if complete else "Course not complete yet.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run("academy.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="academy", description="Course content platform tools")
    sub = parser.add_subparsers(dest="command", required=True)

    quiz = sub.add_parser("quiz", help="Take a quiz from a JSON payload file")
    quiz.add_argument("file", type=Path, help="Quiz payload JSON")
    quiz.add_argument("--seed", type=int, default=None, help="Seed for question shuffling")
    quiz.set_defaults(func=cmd_quiz)

    progress = sub.add_parser("progress", help="Show or change local visited pages")
    progress.add_argument("action", choices=("show", "toggle"))
    progress.add_argument("course", help="Course id")
    progress.add_argument("content", nargs="?", help="Content id (toggle)")
    progress.add_argument(
        "--tree",
        type=Path,
        help="JSON saved from GET /api/courses/{id}/contents (show)",
    )
    progress.add_argument("--store", type=Path, default=None, help="Progress file path")
    progress.set_defaults(func=cmd_progress)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if args.command == "progress":
        if args.action == "toggle" and not args.content:
            parser.error("progress toggle needs a content id")
        if args.action == "show" and not args.tree:
            parser.error("progress show needs --tree")
    return args


def main(argv: list[str] | None = None) -> int:
    setup_console_logging()
    args = parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
