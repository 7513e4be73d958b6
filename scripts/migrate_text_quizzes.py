#!/usr/bin/env python3
"""
Data migration script to retag quizzes stored in TEXT content nodes.

Older editors saved quiz JSON into nodes of type TEXT. This script:
1. Finds TEXT nodes whose content carries the ``"questions":[`` marker
2. Parses each one as a quiz payload
3. Rewrites valid ones as QUIZ nodes with normalized JSON
4. Leaves unparseable ones untouched and reports them

Usage:
    python scripts/migrate_text_quizzes.py [--dry-run]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from academy.content.codec import LEGACY_QUIZ_MARKER, sniff_legacy_quiz
from academy.database import SessionLocal
from academy.logging_setup import setup_console_logging
from academy.models.db.content import ContentType, CourseContent

logger = logging.getLogger("migrate_text_quizzes")


def find_candidates(db: DbSession) -> list[CourseContent]:
    """TEXT nodes that look like they hold a quiz."""
    stmt = select(CourseContent).where(
        CourseContent.type == ContentType.TEXT.value,
        CourseContent.content.contains(LEGACY_QUIZ_MARKER),
    )
    return list(db.execute(stmt).scalars())


def migrate(db: DbSession, dry_run: bool = False) -> tuple[int, int]:
    """Convert legacy quizzes. Returns (converted, skipped)."""
    converted = skipped = 0
    for node in find_candidates(db):
        payload = sniff_legacy_quiz(node.content)
        if payload is None:
            logger.warning("Skipping content %s: marker present but not a valid quiz", node.id)
            skipped += 1
            continue
        logger.info("Converting content %s (%s) to QUIZ", node.id, node.title)
        if not dry_run:
            node.type = ContentType.QUIZ.value
            node.content = payload.model_dump_json()
        converted += 1

    if dry_run:
        db.rollback()
    else:
        db.commit()
    return converted, skipped


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--dry-run", action="store_true", help="Report without writing")
    args = parser.parse_args()

    setup_console_logging()
    db = SessionLocal()
    try:
        converted, skipped = migrate(db, dry_run=args.dry_run)
    finally:
        db.close()

    print(f"Converted: {converted}")
    print(f"Skipped: {skipped}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
