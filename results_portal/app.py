import logging

from flask import Flask, Response, flash, redirect, render_template, request, url_for

from . import config
from .client import ADVANCED, LEVELS, ORDINARY, lookup_student
from .errors import LookupFailed, ScanInProgressError, ValidationError
from .export import export_filename, subject_columns, to_csv
from .models import format_percent
from .scanner import ClassScanner

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

CLASS = "CLASS"
TABS = LEVELS + (CLASS,)

# Grade -> badge class, for the report card and the class table
GRADE_COLORS = {
    "A": "grade-success",
    "S": "grade-primary",
    "D": "grade-warning",
    "C": "grade-accent",
    "F": "grade-destructive",
}

scanner = ClassScanner()


@app.template_filter("grade_color")
def grade_color(grade):
    return GRADE_COLORS.get(grade, "grade-muted")


app.add_template_filter(format_percent, "percent")


def _class_params(source):
    return (source.get("school_code", "").strip(),
            source.get("level_code", "").strip(),
            source.get("exam_year", "").strip())


@app.route('/')
def index():
    tab = request.args.get('tab', ADVANCED)
    if tab not in TABS:
        tab = ADVANCED
    return render_template('index.html', tab=tab)


@app.route('/results', methods=['POST'])
def results():
    level = request.form.get('level', ADVANCED)
    index_number = request.form.get('index_number', '')
    national_id = request.form.get('national_id', '')

    try:
        student = lookup_student(level, index_number, national_id)
    except ValidationError as e:
        flash(f"Missing Information: {e}", "error")
        return redirect(url_for('index', tab=level if level in TABS else ADVANCED))
    except LookupFailed as e:
        logger.warning("Lookup of %s failed: %s", index_number, e)
        flash(f"Error fetching results: {e}", "error")
        return redirect(url_for('index', tab=level))

    if student is None:
        flash("No Results Found. Please check your details and try again.", "error")
        return redirect(url_for('index', tab=level))

    flash("Results Retrieved! Your results have been successfully loaded.", "success")
    return render_template('report_card.html', student=student, grades=GRADE_COLORS)


@app.route('/report/<index_number>')
def report_card(index_number):
    # Linked from the class table; class rows only need the index number.
    try:
        student = lookup_student(ORDINARY, index_number)
    except LookupFailed as e:
        flash(f"Error fetching results: {e}", "error")
        return redirect(url_for('index', tab=ORDINARY))
    if student is None:
        flash("No Results Found. Please check your details and try again.", "error")
        return redirect(url_for('index', tab=ORDINARY))
    return render_template('report_card.html', student=student, grades=GRADE_COLORS)


def _run_scan(school_code, level_code, exam_year):
    """Run a class scan, flashing the outcome. Returns None when it did not run."""
    try:
        return scanner.scan(school_code, level_code, exam_year)
    except ValidationError as e:
        flash(f"Missing Information: {e}", "error")
    except ScanInProgressError as e:
        flash(f"Error fetching class results: {e}", "error")
    return None


@app.route('/class')
def class_results():
    school_code, level_code, exam_year = _class_params(request.args)
    scan = _run_scan(school_code, level_code, exam_year)
    if scan is None:
        return redirect(url_for('index', tab=CLASS))

    if scan.students:
        flash(f"Class Results Retrieved! Found results for {len(scan.students)} students.",
              "success")
    else:
        flash("No Results Found. No results found for this class. "
              "Double-check school code, level and year.", "error")

    return render_template('dashboard.html',
                           scan=scan,
                           students=scan.students,
                           subjects=subject_columns(scan.students))


@app.route('/export')
def export_csv():
    school_code, level_code, exam_year = _class_params(request.args)

    scan = scanner.last_scan
    if scan is None or not scan.matches(school_code, level_code, exam_year):
        scan = _run_scan(school_code, level_code, exam_year)
        if scan is None:
            return redirect(url_for('index', tab=CLASS))

    try:
        content = to_csv(scan.students)
    except ValidationError as e:
        flash(f"No Data: {e}", "error")
        return redirect(url_for('index', tab=CLASS))

    filename = export_filename(school_code, level_code, exam_year)
    return Response(
        content,
        mimetype="text/csv",
        headers={"Content-disposition": f"attachment; filename={filename}"}
    )


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL)
    app.run(debug=True)
