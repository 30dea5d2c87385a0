import csv
import io

from .errors import ValidationError

FIXED_HEADERS = [
    "Index Number",
    "Name",
    "Weighted %",
    "Division",
    "Placed School",
    "Placed Combination",
]


def subject_columns(students):
    """Every subject name seen across the class, in first-seen order."""
    subjects = []
    seen = set()
    for student in students:
        for mark in student.marks:
            name = mark.subject_name
            if isinstance(name, str) and name and name not in seen:
                seen.add(name)
                subjects.append(name)
    return subjects


def _text(value):
    return "" if value is None else str(value)


def build_rows(students):
    subjects = subject_columns(students)
    rows = [FIXED_HEADERS + subjects]

    for student in students:
        row = [
            _text(student.index_number),
            _text(student.student_names),
            student.weighted_display,
            _text(student.division),
            student.placed_school_name or "-",
            student.placed_combination_name or "-",
        ]
        for subject in subjects:
            mark = student.mark_for(subject)
            row.append(mark.display if mark else "-")
        rows.append(row)
    return rows


def to_csv(students):
    if not students:
        raise ValidationError("No class results to export.")

    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(build_rows(students))
    return output.getvalue()


def export_filename(school_code, level_code, exam_year):
    return f"class_results_{school_code}_{level_code}_{exam_year}.csv"
