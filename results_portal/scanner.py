import logging
import threading
from dataclasses import dataclass, field

from . import config
from .client import get_student_data
from .errors import ResultsError, ScanInProgressError, ValidationError

logger = logging.getLogger(__name__)


def generate_index_number(school_code, level_code, exam_year, seq):
    """Index number for class position ``seq``, e.g. 123456OLC0012025."""
    return f"{school_code}{level_code.upper()}{seq:03d}{exam_year}"


@dataclass
class ScanResult:
    school_code: str
    level_code: str
    exam_year: str
    students: list = field(default_factory=list)
    school_name: str = ""
    probes: int = 0

    def matches(self, school_code, level_code, exam_year):
        return (self.school_code, self.level_code, self.exam_year) == (
            school_code, level_code, exam_year)


class ClassScanner:
    """Walks a class's index numbers until the results run out.

    Positions are probed one at a time from 1. A probe either finds a
    student or counts as empty; the scan ends after ``max_students``
    positions or ``max_consecutive_empty`` empty probes in a row.
    """

    def __init__(self, lookup=get_student_data, max_students=None,
                 max_consecutive_empty=None):
        self.lookup = lookup
        self.max_students = config.MAX_STUDENTS if max_students is None else max_students
        self.max_consecutive_empty = (config.MAX_CONSECUTIVE_EMPTY
                                      if max_consecutive_empty is None
                                      else max_consecutive_empty)
        self.last_scan = None
        self._running = threading.Lock()

    @property
    def in_progress(self):
        return self._running.locked()

    def scan(self, school_code, level_code, exam_year):
        school_code = (school_code or "").strip()
        level_code = (level_code or "").strip()
        exam_year = (exam_year or "").strip()
        if not school_code or not level_code or not exam_year:
            raise ValidationError(
                "Please enter School Code, Level Code (OLC/PR), and Exam Year.")

        if not self._running.acquire(blocking=False):
            raise ScanInProgressError("A class scan is already running.")
        try:
            result = self._scan(school_code, level_code, exam_year)
        finally:
            self._running.release()

        self.last_scan = result
        return result

    def _scan(self, school_code, level_code, exam_year):
        result = ScanResult(school_code, level_code, exam_year)
        seq = 1
        empty_count = 0

        while empty_count < self.max_consecutive_empty and seq <= self.max_students:
            index_number = generate_index_number(school_code, level_code, exam_year, seq)
            try:
                student = self.lookup(index_number)
            except ResultsError as e:
                logger.debug("Probe %s failed: %s", index_number, e)
                student = None

            result.probes += 1
            if student is not None:
                logger.debug("Found %s: %s", index_number, student.student_names)
                result.students.append(student)
                empty_count = 0
            else:
                empty_count += 1
            seq += 1

        # sort() is stable, so ties keep their scan order.
        result.students.sort(key=lambda s: s.sort_key, reverse=True)
        if result.students:
            result.school_name = result.students[0].attended_school or ""

        logger.info("Scanned %s%s..%s: %d students in %d probes",
                    school_code, level_code.upper(), exam_year,
                    len(result.students), result.probes)
        return result
