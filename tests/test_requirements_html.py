from degree_audit_export.document import parse_document
from degree_audit_export.requirements_html import (
    clean_requirement_name,
    extract_requirements,
    find_card,
)


def _block(block_id: str, title: str, status: str, body: str) -> str:
    return f"""
    <div class="MuiPaper-root MuiPaper-elevation1">
      <div class="header">
        <h3 id="block-{block_id}">{title}<span id="{block_id}_statusLabel">{status}</span></h3>
      </div>
      <div class="body">{body}</div>
    </div>"""


class TestBlockHeadings:
    def test_block_heading_with_status_label(self):
        html = "<html><body>" + _block(
            "major",
            "Major in Economics",
            "Complete",
            "<p>Credits required: 48</p><p>Credits applied: 51</p>"
            "<p>Catalog year: fall 2022</p>",
        ) + "</body></html>"
        reqs = extract_requirements(parse_document(html))
        assert reqs == [
            {
                "id": "major_in_economics",
                "name": "Major in Economics",
                "status": "COMPLETE",
                "creditsRequired": 48,
                "creditsApplied": 51,
                "catalogYear": "Fall 2022",
            }
        ]

    def test_status_from_card_text_without_label(self):
        html = """<div class="MuiPaper-root">
          <h3 id="block-gen">General Education</h3>
          <p>Still needed: 1 Class in WRT 102</p>
        </div>"""
        reqs = extract_requirements(parse_document(html), "Fall 2021")
        assert len(reqs) == 1
        assert reqs[0]["status"] == "INCOMPLETE"
        assert reqs[0]["catalogYear"] == "Fall 2021"
        assert "creditsRequired" not in reqs[0]
        assert "creditsApplied" not in reqs[0]

    def test_not_complete_label_wins_over_card_text(self):
        html = _block(
            "upper",
            "Upper Division",
            "Not complete",
            "<p>CSE 416 IN-PROGRESS</p>",
        )
        reqs = extract_requirements(parse_document(html))
        assert reqs[0]["name"] == "Upper Division"
        assert reqs[0]["status"] == "INCOMPLETE"

    def test_in_progress_label(self):
        html = _block("core", "Core Courses", "In progress", "")
        reqs = extract_requirements(parse_document(html))
        assert reqs[0]["status"] == "IN-PROGRESS"


class TestTableHeaders:
    def test_th_requirement_and_card_classification(self):
        html = """<html><body>
        <div>
          <table>
            <tr><th>General Education Requirements</th></tr>
            <tr><td>When the in-progress classes are completed this requirement should be complete</td></tr>
          </table>
        </div>
        </body></html>"""
        reqs = extract_requirements(parse_document(html))
        assert [r["name"] for r in reqs] == ["General Education Requirements"]
        assert reqs[0]["status"] == "IN-PROGRESS"

    def test_degree_in_and_fall_through(self):
        html = """<div><table>
          <tr><th>Degree in Bachelor of Arts</th></tr>
          <tr><td>Requirement is complete</td></tr>
        </table></div>
        <div><table><tr><th>Fall Through Courses</th></tr></table></div>"""
        reqs = extract_requirements(parse_document(html))
        assert [r["name"] for r in reqs] == ["Degree in Bachelor of Arts", "Fall Through Courses"]
        assert reqs[0]["status"] == "COMPLETE"
        assert reqs[1]["status"] == "INCOMPLETE"

    def test_ordinary_headers_ignored(self):
        html = """<table><tr><th>Course</th><th>Title</th><th>Grade</th>
          <th>Credits</th><th>Term</th></tr></table>"""
        assert extract_requirements(parse_document(html)) == []

    def test_boilerplate_stripped_from_title(self):
        html = """<div><table>
          <tr><th>Writing Requirement Requirement is complete</th></tr>
        </table></div>"""
        reqs = extract_requirements(parse_document(html))
        assert reqs[0]["name"] == "Writing Requirement"
        assert reqs[0]["id"] == "writing_requirement"
        assert reqs[0]["status"] == "COMPLETE"

    def test_th_before_block_headings(self):
        html = _block("a", "Major Requirements", "Complete", "") + """
        <div><table><tr><th>Upper Division Credit Requirement</th></tr></table></div>"""
        reqs = extract_requirements(parse_document(html))
        assert [r["name"] for r in reqs] == [
            "Upper Division Credit Requirement",
            "Major Requirements",
        ]


class TestDeduplication:
    def test_repeated_halves_dropped(self):
        html = _block("se", "Software Engineering Software Engineering", "Complete", "")
        assert extract_requirements(parse_document(html)) == []

    def test_same_name_kept_once(self):
        html = (
            _block("major1", "Major Requirements", "Complete", "<p>Credits required: 40</p>")
            + _block("major2", "Major Requirements", "In progress", "<p>Credits required: 44</p>")
        )
        reqs = extract_requirements(parse_document(html))
        assert len(reqs) == 1
        assert reqs[0]["status"] == "COMPLETE"
        assert reqs[0]["creditsRequired"] == 40

    def test_names_unique(self):
        html = "".join(
            _block(f"b{i}", name, "Complete", "")
            for i, name in enumerate(["A Requirement", "B Requirement", "A Requirement"])
        )
        names = [r["name"] for r in extract_requirements(parse_document(html))]
        assert names == ["A Requirement", "B Requirement"]


def test_clean_requirement_name():
    assert clean_requirement_name("Not complete") == ""
    assert clean_requirement_name("Computer Networks Computer Networks") == ""
    assert clean_requirement_name("  Major   Requirements ") == "Major Requirements"


class TestFindCard:
    def test_paper_card(self):
        doc = parse_document(_block("x", "X Requirement", "Complete", ""))
        h3 = doc.select_one("h3")
        assert "MuiPaper-root" in find_card(h3).get("class")

    def test_class_token_must_match_exactly(self):
        doc = parse_document(
            '<div class="MuiPaper-rootless" id="outer"><div id="near">'
            '<table><tr><th>T</th></tr></table></div></div>'
        )
        th = doc.select_one("th")
        assert find_card(th).get("id") == "near"

    def test_nearest_div_fallback(self):
        doc = parse_document('<section><div id="d"><table><tr><th>T</th></tr></table></div></section>')
        th = doc.select_one("th")
        assert find_card(th).get("id") == "d"

    def test_node_itself_without_div(self):
        doc = parse_document("<table><tr><th>T</th></tr></table>")
        th = doc.select_one("th")
        assert find_card(th) == th

    def test_depth_limit(self):
        inner = '<th id="t">T</th>'
        html = f'<div class="MuiPaper-root" id="paper"><div id="near">' \
               f'<section><section><section><section><section><table><tr>{inner}</tr></table>' \
               f'</section></section></section></section></section></div></div>'
        doc = parse_document(html)
        th = doc.select_one("#t")
        # th, tr, table, 5 sections = 8 levels: the Paper card is out of reach
        assert find_card(th).get("id") == "near"
