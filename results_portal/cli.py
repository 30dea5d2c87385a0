import argparse
import logging

from . import config
from .errors import ResultsError
from .export import export_filename, to_csv
from .scanner import ClassScanner


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Fetch a whole class's results and save them as CSV")
    parser.add_argument("school_code", help="School code, e.g. 123456")
    parser.add_argument("level_code", help="Level code: OLC or PR")
    parser.add_argument("exam_year", help="Exam year, e.g. 2025")
    parser.add_argument("--output", "-o", help="CSV file to write (default: class_results_<school>_<level>_<year>.csv)")
    parser.add_argument("--max-students", type=int, default=config.MAX_STUDENTS,
                        help="Highest class position to try")
    parser.add_argument("--max-empty", type=int, default=config.MAX_CONSECUTIVE_EMPTY,
                        help="Stop after this many empty positions in a row")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    scanner = ClassScanner(max_students=args.max_students, max_consecutive_empty=args.max_empty)
    print(f"Fetching: {args.school_code}{args.level_code.upper()}###{args.exam_year}")

    try:
        scan = scanner.scan(args.school_code, args.level_code, args.exam_year)
    except ResultsError as e:
        print(f"Failed: {e}")
        return 2

    if not scan.students:
        print("No results found for this class. Double-check school code, level and year.")
        return 1

    if scan.school_name:
        print(scan.school_name)
    for rank, student in enumerate(scan.students, 1):
        print(f"{rank:>3}. {student.index_number}  {student.student_names}  {student.weighted_display}")

    # Define the filename
    filename = args.output or export_filename(args.school_code, args.level_code, args.exam_year)
    with open(filename, mode='w', newline='', encoding='utf-8') as file:
        file.write(to_csv(scan.students))

    print(f"\nDone! Found {len(scan.students)} students. You can now open '{filename}' in Excel.")
    return 0

