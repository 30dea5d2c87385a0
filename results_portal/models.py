from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Number


def is_found(payload):
    """A payload counts as a result only when it carries a student name."""
    return isinstance(payload, dict) and bool(payload.get("studentNames"))


def _is_number(value):
    return isinstance(value, Number) and not isinstance(value, bool)


def format_percent(value):
    """Render a mark as '93.5%'. Non-numeric values render as '-'."""
    if not _is_number(value):
        return "-"
    try:
        # Exact binary value, ties up: same digits as JavaScript toFixed(1).
        rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError):
        return "-"
    return f"{rounded}%"


@dataclass(frozen=True)
class SubjectMark:
    subject_name: str
    subject_weighted_percent: object = None
    mark_percent: object = None
    letter_grade: str = None
    subject_id: str = None

    @classmethod
    def from_json(cls, data):
        subject = data.get("subject")
        if not isinstance(subject, dict):
            subject = {}
        return cls(
            subject_name=subject.get("subjectName"),
            subject_weighted_percent=data.get("subjectWeightedPercent"),
            mark_percent=data.get("markPercent"),
            letter_grade=data.get("letterGrade"),
            subject_id=data.get("subjectId"),
        )

    @property
    def display(self):
        """Cell text used in tables and exports, e.g. '93.5% (A)'."""
        grade = self.letter_grade if self.letter_grade is not None else "-"
        return f"{format_percent(self.mark_percent)} ({grade})"


@dataclass(frozen=True)
class StudentResult:
    student_names: str
    index_number: str = None
    national_id: str = None
    academic_year: str = None
    attended_school: str = None
    weighted_percent: object = None
    division: str = None
    combination: str = None
    placed_school_name: str = None
    placed_combination_name: str = None
    marks: tuple = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data):
        """Build a result from an API payload, or return None when it is empty."""
        if not is_found(data):
            return None

        raw_marks = data.get("rawMark")
        if not isinstance(raw_marks, list):
            raw_marks = []
        marks = tuple(SubjectMark.from_json(m) for m in raw_marks if isinstance(m, dict))

        return cls(
            student_names=data["studentNames"],
            index_number=data.get("studentIndexNumber"),
            national_id=data.get("studentNationalId"),
            academic_year=data.get("academicYear"),
            attended_school=data.get("attendedSchool"),
            weighted_percent=data.get("weightedPercent"),
            division=data.get("division"),
            combination=data.get("combination"),
            placed_school_name=data.get("placedSchoolName"),
            placed_combination_name=data.get("placedCombinationName"),
            marks=marks,
        )

    @property
    def sort_key(self):
        # Numeric strings count; missing or unparseable percentages rank as zero.
        try:
            return float(self.weighted_percent)
        except (TypeError, ValueError):
            return 0.0

    @property
    def weighted_display(self):
        """Weighted percent as reported, with a literal '%' suffix."""
        value = self.weighted_percent
        if value is None or value == "":
            return "-"
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return f"{value}%"

    def mark_for(self, subject_name):
        for mark in self.marks:
            if mark.subject_name == subject_name:
                return mark
        return None
