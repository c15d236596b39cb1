import json

from degree_audit_export.cli import main


AUDIT_HTML = """<html><body>
<div class="MuiPaper-root">
  <h2 data-key="content-label">Doe, Jane</h2>
  <p>Credits required: 120</p><p>Credits applied: 60</p>
</div>
<div class="MuiPaper-root">
  <h3 id="block-major">Major in Economics<span id="major_statusLabel">Complete</span></h3>
  <table>
    <tr><th>Course</th><th>Title</th><th>Grade</th><th>Credits</th><th>Term</th></tr>
    <tr><td>ECO 108</td><td>Introduction to Economics</td><td>A</td><td>3</td><td>FALL 2023</td></tr>
  </table>
</div>
</body></html>"""


def _saved_page(tmp_path):
    p = tmp_path / "audit.html"
    p.write_text(AUDIT_HTML, encoding="utf-8")
    return p


def test_audit_html_to_json(tmp_path, capsys):
    page = _saved_page(tmp_path)
    out = tmp_path / "result"
    assert main(["--audit-html", str(page), "-o", str(out)]) == 0

    data = json.loads((tmp_path / "result.json").read_text(encoding="utf-8"))
    assert data["student"]["name"] == "Doe, Jane"
    assert data["completedCourses"][0]["code"] == "ECO 108"

    printed = capsys.readouterr().out
    assert "Exported 1 course(s)" in printed
    assert "Credit progress: 50%" in printed


def test_include_metadata(tmp_path):
    page = _saved_page(tmp_path)
    out = tmp_path / "result.json"
    assert main(["--audit-html", str(page), "-o", str(out), "--include-metadata"]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["source"]["title"] == "audit"
    assert data["audit"]["requirements"][0]["name"] == "Major in Economics"


def test_csv_format(tmp_path):
    page = _saved_page(tmp_path)
    out = tmp_path / "result"
    assert main(["--audit-html", str(page), "-o", str(out), "-f", "csv"]) == 0
    assert (tmp_path / "result.csv").read_text(encoding="utf-8").startswith("bucket,code,title")


def test_summary_only(tmp_path, capsys):
    page = _saved_page(tmp_path)
    assert main(["--audit-html", str(page), "--summary", "-o", str(tmp_path / "x")]) == 0
    assert not (tmp_path / "x.json").exists()
    assert "Student: Doe, Jane" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main(["--audit-html", str(tmp_path / "nope.html")]) == 1
    assert "not found" in capsys.readouterr().err


def test_unparseable_file(tmp_path, capsys):
    page = tmp_path / "audit.html"
    page.write_text("   ", encoding="utf-8")
    assert main(["--audit-html", str(page)]) == 1
    assert "Error parsing Degree Works HTML" in capsys.readouterr().err


def test_no_mode(capsys):
    assert main([]) == 1
    assert "No mode specified" in capsys.readouterr().err


def test_fetch_requires_url(capsys):
    assert main(["--fetch-audit"]) == 1
    assert "--url" in capsys.readouterr().err
