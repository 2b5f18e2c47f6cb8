from __future__ import annotations

import argparse
import asyncio
import csv
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert

from millionaire.core.config import get_settings
from millionaire.db.models.game_questions import GameQuestion
from millionaire.db.models.questions import Question
from millionaire.db.session import SessionLocal
from millionaire.game.constants import QUESTION_LEVELS

REQUIRED_COLUMNS = {
    "level",
    "question",
    "option_1",
    "option_2",
    "option_3",
    "option_4",
    "correct_option_id",
}


@dataclass(slots=True)
class ImportSummary:
    total_rows_read: int = 0
    total_rows_imported: int = 0
    skipped_not_ready: int = 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import question CSV files into questions.")
    parser.add_argument("--input-dir", type=Path, default=Path("questions"))
    parser.add_argument(
        "--replace-all",
        action="store_true",
        help="Delete questions that no game uses before import.",
    )
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args(argv)


def _norm(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value).strip().lower())


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        fieldnames = set(reader.fieldnames or [])
        missing = sorted(REQUIRED_COLUMNS - fieldnames)
        if missing:
            missing_str = ", ".join(missing)
            raise ValueError(f"{path.name}: missing required columns: {missing_str}")
        return [dict(row) for row in reader]


def build_records(
    input_dir: Path,
    *,
    now_utc: datetime,
) -> tuple[list[dict[str, Any]], ImportSummary, Counter[int]]:
    if not input_dir.exists():
        raise ValueError(f"input directory does not exist: {input_dir}")

    summary = ImportSummary()
    by_level = Counter[int]()
    records: list[dict[str, Any]] = []
    seen_texts: set[str] = set()

    files = sorted(p for p in input_dir.iterdir() if p.is_file() and p.suffix.lower() == ".csv")
    for path in files:
        rows = _read_csv(path)
        summary.total_rows_read += len(rows)
        for row_index, row in enumerate(rows, start=2):
            source_status = _norm(row.get("status", "ready"))
            if source_status not in {"", "ready", "active"}:
                summary.skipped_not_ready += 1
                continue

            question_text = (row.get("question") or "").strip()
            if not question_text:
                raise ValueError(f"{path.name}:{row_index}: empty question")
            if _norm(question_text) in seen_texts:
                raise ValueError(f"{path.name}:{row_index}: duplicate question in import set")
            seen_texts.add(_norm(question_text))

            raw_level = (row.get("level") or "").strip()
            if not raw_level.isdigit() or int(raw_level) not in QUESTION_LEVELS:
                raise ValueError(f"{path.name}:{row_index}: invalid level={raw_level!r}")

            options = [
                (row.get("option_1") or "").strip(),
                (row.get("option_2") or "").strip(),
                (row.get("option_3") or "").strip(),
                (row.get("option_4") or "").strip(),
            ]
            if not all(options):
                raise ValueError(f"{path.name}:{row_index}: all options must be non-empty")
            if len({_norm(option) for option in options}) != len(options):
                raise ValueError(f"{path.name}:{row_index}: options must be distinct")

            raw_correct_option = (row.get("correct_option_id") or "").strip()
            if raw_correct_option not in {"0", "1", "2", "3"}:
                raise ValueError(
                    f"{path.name}:{row_index}: invalid correct_option_id={raw_correct_option!r}"
                )

            level = int(raw_level)
            records.append(
                {
                    "level": level,
                    "text": question_text,
                    "option_1": options[0],
                    "option_2": options[1],
                    "option_3": options[2],
                    "option_4": options[3],
                    "correct_option_id": int(raw_correct_option),
                    "status": "ACTIVE",
                    "created_at": now_utc,
                    "updated_at": now_utc,
                }
            )
            by_level[level] += 1

    summary.total_rows_imported = len(records)
    return records, summary, by_level


def missing_levels(by_level: Counter[int]) -> list[int]:
    return [level for level in QUESTION_LEVELS if by_level.get(level, 0) <= 0]


def _chunks(rows: list[dict[str, Any]], size: int) -> list[list[dict[str, Any]]]:
    return [rows[index : index + size] for index in range(0, len(rows), size)]


async def _persist_records(records: list[dict[str, Any]], *, replace_all: bool) -> None:
    if not records:
        raise ValueError("no importable rows found")

    batch_size = max(1, int(get_settings().question_import_batch_size))
    async with SessionLocal.begin() as session:
        if replace_all:
            used_question_ids = select(GameQuestion.question_id)
            await session.execute(delete(Question).where(Question.id.not_in(used_question_ids)))

        for chunk in _chunks(records, batch_size):
            stmt = pg_insert(Question).values(chunk)
            stmt = stmt.on_conflict_do_update(
                index_elements=[Question.text],
                set_={
                    "level": stmt.excluded.level,
                    "option_1": stmt.excluded.option_1,
                    "option_2": stmt.excluded.option_2,
                    "option_3": stmt.excluded.option_3,
                    "option_4": stmt.excluded.option_4,
                    "correct_option_id": stmt.excluded.correct_option_id,
                    "status": stmt.excluded.status,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await session.execute(stmt)


async def _run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    records, summary, by_level = build_records(args.input_dir, now_utc=datetime.now(timezone.utc))

    if not args.dry_run:
        await _persist_records(records, replace_all=args.replace_all)

    level_stats = ", ".join(f"{level}={count}" for level, count in sorted(by_level.items()))
    print(  # noqa: T201
        "questions_import "
        f"rows_read={summary.total_rows_read} "
        f"rows_imported={summary.total_rows_imported} "
        f"skipped_not_ready={summary.skipped_not_ready} "
        f"replace_all={args.replace_all} "
        f"dry_run={args.dry_run}"
    )
    print(f"questions_import_by_level {level_stats}")  # noqa: T201
    gaps = missing_levels(by_level)
    if gaps:
        print(f"questions_import_missing_levels {','.join(str(level) for level in gaps)}")  # noqa: T201
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
