import pytest

from results_portal.models import StudentResult


def make_payload(name="Jane Doe", index="123456OLC0012025", percent=80.0,
                 marks=(), school="GS Example", **extra):
    payload = {
        "studentNames": name,
        "studentIndexNumber": index,
        "academicYear": "2025",
        "attendedSchool": school,
        "weightedPercent": percent,
        "division": "DIVISION I",
        "rawMark": [
            {
                "subject": {"subjectName": subject},
                "subjectWeightedPercent": mark,
                "markPercent": mark,
                "letterGrade": grade,
                "subjectId": str(i),
            }
            for i, (subject, mark, grade) in enumerate(marks)
        ],
    }
    payload.update(extra)
    return payload


def make_student(**kwargs):
    return StudentResult.from_json(make_payload(**kwargs))


class FakeResponse:
    def __init__(self, payload=None, status_code=200, body_error=None):
        self.payload = payload
        self.status_code = status_code
        self.body_error = body_error

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self.body_error:
            raise ValueError(self.body_error)
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get; queue responses in ``fake_get.responses``."""
    calls = []

    def get(url, params=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = get.responses.pop(0) if get.responses else FakeResponse({})
        if isinstance(response, Exception):
            raise response
        return response

    get.calls = calls
    get.responses = []
    monkeypatch.setattr("results_portal.client.requests.get", get)
    return get
