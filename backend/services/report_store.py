"""
In-memory store for user reports.

One store lives for the whole process: created empty at startup, reports are
added on submission and removed by id. Nothing is persisted.
"""

import logging
import time
from typing import Dict, List, Optional

from models import Report

logger = logging.getLogger(__name__)


class ReportStore:
    """Insertion-ordered report mapping keyed by report id"""

    def __init__(self):
        self._reports: Dict[int, Report] = {}
        self._last_id = 0

    def _next_id(self) -> int:
        # Millisecond ids, matching what browser clients generate themselves
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        while candidate in self._reports:
            candidate += 1
        self._last_id = candidate
        return candidate

    def add(self, report: Report) -> Report:
        """Store a report, assigning an id when the submitter did not send one"""
        if report.id is None or report.id in self._reports:
            if report.id is not None:
                logger.warning(f"Report id {report.id} already in use; assigning a new id")
            report = report.model_copy(update={"id": self._next_id()})
        self._reports[report.id] = report
        return report

    def remove(self, report_id: int) -> Optional[Report]:
        """Remove and return the report with this id, or None if absent"""
        return self._reports.pop(report_id, None)

    def list(self) -> List[Report]:
        return list(self._reports.values())

    def count(self) -> int:
        return len(self._reports)

    def clear(self):
        self._reports.clear()


# Global store instance
report_store = ReportStore()


def get_report_store() -> ReportStore:
    return report_store
