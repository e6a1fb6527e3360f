#!/usr/bin/env python3
"""
Quiz Exporter: stored quiz → question sheet + answer key text files

Usage:
    python scripts/export_quiz.py <quiz_id>                    # Write to current directory
    python scripts/export_quiz.py <quiz_id> --out=/tmp/quizzes
    python scripts/export_quiz.py <quiz_id> --no-header --no-footer
"""

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import UUID

from sqlalchemy import select

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from teachassist.core.database import AsyncSessionLocal, close_db
from teachassist.core.models import Quiz
from teachassist.core.schemas import QuizQuestion
from teachassist.quizzes.document import render_documents


async def export_quiz(quiz_id: UUID, out_dir: Path, *, header: bool, footer: bool) -> list[Path]:
    """Write both renderings of ``quiz_id`` into ``out_dir``."""
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(Quiz).where(Quiz.id == quiz_id))
        quiz = result.scalar_one_or_none()

    if quiz is None:
        raise LookupError(f"Quiz not found with ID: {quiz_id}")

    documents = render_documents(
        topic=quiz.topic,
        difficulty=quiz.difficulty,
        questions=[QuizQuestion.model_validate(q) for q in quiz.questions],
        include_header=header,
        include_footer=footer,
    )

    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, content in (
        (documents.questions_filename, documents.student),
        (documents.answers_filename, documents.answer_key),
    ):
        path = out_dir / filename
        path.write_text(content, encoding="utf-8")
        written.append(path)
    return written


async def main() -> int:
    parser = argparse.ArgumentParser(description="Export a stored quiz as text files")
    parser.add_argument("quiz_id", type=UUID, help="Quiz UUID")
    parser.add_argument("--out", type=Path, default=Path("."), help="Output directory")
    parser.add_argument("--no-header", action="store_true", help="Omit the title block")
    parser.add_argument("--no-footer", action="store_true", help="Omit the closing block")
    args = parser.parse_args()

    try:
        paths = await export_quiz(
            args.quiz_id, args.out, header=not args.no_header, footer=not args.no_footer
        )
    except LookupError as e:
        print(f"❌ {e}")
        return 1
    finally:
        await close_db()

    for path in paths:
        print(f"✅ Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
