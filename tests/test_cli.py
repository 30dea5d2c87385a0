import csv

from conftest import FakeResponse, make_payload

from results_portal import cli


def test_writes_csv(tmp_path, fake_get, capsys):
    fake_get.responses.extend([
        FakeResponse(make_payload(name="First", percent=70.0)),
        FakeResponse(make_payload(name="Second", percent=85.0, index="123456OLC0022025")),
    ])
    output = tmp_path / "out.csv"

    status = cli.main(["123456", "olc", "2025", "--output", str(output), "--max-empty", "2"])

    assert status == 0
    assert len(fake_get.calls) == 4
    assert fake_get.calls[0]["params"]["indexNumber"] == "123456OLC0012025"
    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert [row[1] for row in rows[1:]] == ["Second", "First"]
    assert "Done! Found 2 students" in capsys.readouterr().out


def test_no_results(tmp_path, fake_get, capsys):
    status = cli.main(["123456", "OLC", "2025", "--output", str(tmp_path / "x.csv"),
                        "--max-empty", "3"])

    assert status == 1
    assert len(fake_get.calls) == 3
    assert not (tmp_path / "x.csv").exists()
    assert "No results found" in capsys.readouterr().out
