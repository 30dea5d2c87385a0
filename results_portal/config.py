import os

# Configuration
BASE_URL = os.environ.get(
    "RESULTS_API_BASE_URL",
    "https://secondary.sdms.gov.rw/api/results-publication",
).rstrip("/")

REQUEST_TIMEOUT = float(os.environ.get("RESULTS_REQUEST_TIMEOUT", "5"))

# Class scan limits. Index numbers are assumed to be densely allocated,
# so a run of empty positions means the class is exhausted.
MAX_STUDENTS = int(os.environ.get("RESULTS_MAX_STUDENTS", "1000"))
MAX_CONSECUTIVE_EMPTY = int(os.environ.get("RESULTS_MAX_CONSECUTIVE_EMPTY", "20"))

SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "results-portal-dev-key")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

HEADERS = {"Accept": "application/json"}
