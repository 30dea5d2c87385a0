import logging
import random
import time

import requests

from . import config
from .errors import LookupFailed, ValidationError
from .models import StudentResult

logger = logging.getLogger(__name__)

ADVANCED = "ADVANCED"
ORDINARY = "ORDINARY"
LEVELS = (ADVANCED, ORDINARY)

FIND_BY_INDEX = "findByIndex"
FIND_BY_INDEX_AND_NATIONAL_ID = "findByIndexAndNationalId"


def _cache_busters():
    return {"_t": int(time.time() * 1000), "_cb": random.random()}


def fetch_student(index_number, national_id=None):
    """Fetch one result from the results API.

    Uses the national-ID endpoint when ``national_id`` is given. Returns a
    ``StudentResult``, or ``None`` when the API answers without a student
    name. Raises ``LookupFailed`` when the request itself fails, the status
    is not a success, or the body is not JSON.
    """
    params = {"indexNumber": index_number}
    endpoint = FIND_BY_INDEX
    if national_id:
        params["nationalId"] = national_id
        endpoint = FIND_BY_INDEX_AND_NATIONAL_ID
    params.update(_cache_busters())

    url = f"{config.BASE_URL}/{endpoint}"
    try:
        response = requests.get(url, params=params, headers=config.HEADERS,
                                timeout=config.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise LookupFailed(str(e)) from e

    if not 200 <= response.status_code < 300:
        raise LookupFailed(f"Failed to fetch results (HTTP {response.status_code})")

    try:
        data = response.json()
    except ValueError as e:
        raise LookupFailed(f"Malformed response body: {e}") from e

    return StudentResult.from_json(data)


def lookup_student(level, index_number, national_id=None):
    """Individual lookup as done from the form.

    ORDINARY needs only the index number; ADVANCED also needs the national
    ID. Missing inputs raise ``ValidationError`` before any request.
    """
    if level not in LEVELS:
        raise ValidationError(f"Unknown level: {level}")
    index_number = (index_number or "").strip()
    national_id = (national_id or "").strip()
    if not index_number or (level == ADVANCED and not national_id):
        raise ValidationError("Please enter all required fields.")

    if level == ORDINARY:
        national_id = None
    result = fetch_student(index_number, national_id)
    if result is None:
        logger.info("No result for %s", index_number)
    return result


def get_student_data(index_number):
    """Probe used by the class scan: any failure is just 'no student'."""
    try:
        return fetch_student(index_number)
    except LookupFailed as e:
        logger.debug("Probe %s failed: %s", index_number, e)
        return None
