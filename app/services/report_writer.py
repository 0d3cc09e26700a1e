"""
Daily Report Writer

Renders a batch of predictions as plain text and writes it to
<REPORT_FOLDER>/<MM-dd-yyyy>.txt. Writes are best-effort: an I/O failure is
logged as a ``report_write_failed`` event and never raised to the caller.
"""

import logging
import threading
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Optional

from app import config
from app.schemas.predictions import PredictionResult
from app.utils.logging import get_logger, log_event

logger = get_logger(__name__)

# One lock per report date, kept for the life of the process; a season is a
# few hundred dates at most.
_locks_guard = threading.Lock()
_date_locks: Dict[date, threading.Lock] = {}


def _lock_for(report_date: date) -> threading.Lock:
    with _locks_guard:
        lock = _date_locks.get(report_date)
        if lock is None:
            lock = threading.Lock()
            _date_locks[report_date] = lock
        return lock


def report_path_for(report_date: date, folder: Optional[str] = None) -> Path:
    folder = folder or config.REPORT_FOLDER
    return Path(folder) / f"{report_date.strftime(config.REPORT_DATE_FORMAT)}.txt"


def render_block(result: PredictionResult) -> str:
    lines = [
        f"{result.home_team} Vs. {result.away_team}",
        f"Winner: {result.predicted_winner} ({result.american_odds})",
    ]
    if result.notes:
        lines.append(f"Notes: {result.notes}")
    lines.append("")
    return "\n".join(lines) + "\n"


def render_report(results: Iterable[PredictionResult]) -> str:
    return "".join(render_block(r) for r in results)


def write_daily_report(
    results: Iterable[PredictionResult],
    report_date: date,
    folder: Optional[str] = None
) -> Optional[Path]:
    """
    Overwrite the report for ``report_date``.

    Returns:
        Path written, or None when the write failed
    """
    path = report_path_for(report_date, folder)
    content = render_report(results)

    with _lock_for(report_date):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            log_event(
                logger, logging.ERROR, "report_write_failed",
                f"Failed to write prediction file {path}: {e}",
                report_date=report_date.isoformat(),
                path=str(path),
                error=str(e),
            )
            return None

    logger.info(f"Wrote predictions report {path}")
    return path
