from simpletodo.engine.document import LineDocument
from simpletodo.engine.migrator import insert_into_target, merge, prepare_incoming, section_end


def test_shared_parent_is_not_duplicated():
    merged = merge(["- [ ] Parent", "\t- [x] Child1"], ["- [ ] Parent", "\t- [ ] Child2"])
    assert merged == ["- [ ] Parent", "\t- [x] Child1", "\t- [ ] Child2"]


def test_first_occurrence_wins_including_status():
    assert merge(["- [x] A"], ["- [ ] A"]) == ["- [x] A"]


def test_content_must_match_exactly():
    assert merge(["- [ ] A"], ["- [ ] A "]) == ["- [ ] A", "- [ ] A "]
    assert merge(["- [ ] A"], ["\t- [ ] A"]) == ["- [ ] A", "\t- [ ] A"]


def test_grandchildren_are_renested():
    existing = ["- [ ] P", "\t- [ ] Q", "\t\t- [ ] R1"]
    incoming = ["- [ ] P", "\t- [ ] Q", "\t\t- [ ] R2", "- [ ] S"]
    assert merge(existing, incoming) == ["- [ ] P", "\t- [ ] Q", "\t\t- [ ] R1", "\t\t- [ ] R2", "- [ ] S"]


def test_new_child_lands_under_its_parent_not_at_the_end():
    merged = merge(["- [ ] A", "- [ ] B"], ["- [ ] A", "\t- [ ] A1"])
    assert merged == ["- [ ] A", "\t- [ ] A1", "- [ ] B"]


def test_non_task_lines_are_ignored_by_merge():
    assert merge(["- [ ] A", "note"], []) == ["- [ ] A"]


def test_prepare_incoming_resets_status():
    assert prepare_incoming(["- [/] x", "\t- [x] y", "\t- [ ] z"]) == ["- [ ] x", "\t- [ ] y", "\t- [ ] z"]


def test_section_end_runs_to_next_header():
    doc = LineDocument(["2024-01-02", "- [ ] a", "", "- [ ] b", "2024-01-01"])
    assert section_end(doc, 0) == 4
    assert section_end(LineDocument(["2024-01-02", "", "- [ ] a"]), 0) == 3


def test_blank_line_under_header_does_not_hide_existing_tasks():
    lines = ["2024-01-02", "", "- [ ] Project", "\t- [ ] Review", "", "2024-01-01"]
    out = insert_into_target(lines, "2024-01-02", ["- [ ] Project", "\t- [ ] Build"], 0, "unused")
    assert out == [
        "2024-01-02",
        "- [ ] Project",
        "\t- [ ] Review",
        "\t- [ ] Build",
        "",
        "2024-01-01",
    ]


def test_trailing_blank_of_last_section_is_kept():
    out = insert_into_target(["2024-01-02", ""], "2024-01-02", ["- [ ] a"], 0, "unused")
    assert out == ["2024-01-02", "- [ ] a", ""]


def test_new_section_appended_after_content():
    lines = ["2024-01-01", "- [x] done"]
    out = insert_into_target(lines, "2024-01-02", ["- [ ] Buy milk"], 2, "2024-01-02 Tue")
    assert out == ["2024-01-01", "- [x] done", "", "2024-01-02 Tue", "- [ ] Buy milk"]


def test_new_section_at_top_is_padded_below():
    lines = ["2024-01-01", "- [ ] x"]
    out = insert_into_target(lines, "2024-01-02", ["- [ ] a"], 0, "2024-01-02 Tue")
    assert out == ["2024-01-02 Tue", "- [ ] a", "", "2024-01-01", "- [ ] x"]


def test_existing_section_is_merged_in_place():
    lines = ["2024-01-03 Wed", "- [ ] Parent", "\t- [x] Child1", "2024-01-01", "- [x] old"]
    out = insert_into_target(lines, "2024-01-03", ["- [ ] Parent", "\t- [ ] Child2"], 0, "unused")
    assert out == [
        "2024-01-03 Wed",
        "- [ ] Parent",
        "\t- [x] Child1",
        "\t- [ ] Child2",
        "",
        "2024-01-01",
        "- [x] old",
    ]


def test_existing_section_gets_blank_line_before_header():
    lines = ["2024-01-01", "- [x] old", "2024-01-03"]
    out = insert_into_target(lines, "2024-01-03", ["- [ ] a"], 0, "unused")
    assert out == ["2024-01-01", "- [x] old", "", "2024-01-03", "- [ ] a"]


def test_other_lines_in_target_block_are_kept():
    lines = ["2024-01-03", "note line", "- [ ] a"]
    out = insert_into_target(lines, "2024-01-03", ["- [ ] b"], 0, "unused")
    assert out == ["2024-01-03", "- [ ] a", "- [ ] b", "note line"]
