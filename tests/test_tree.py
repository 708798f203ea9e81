from simpletodo.engine.tree import (
    TaskTreeParser,
    descendant_indices,
    is_leaf_line,
    nearest_ancestor_index,
)


def _tree(lines):
    parser = TaskTreeParser(lines)
    section = next(parser.iter_sections())
    return parser.parse_section(section)


def test_child_task_makes_parent_a_non_leaf():
    tree = _tree(["2024-01-01", "- [ ] A", "\t- [ ] B"])
    a, b = tree.nodes
    assert not a.is_leaf
    assert b.is_leaf
    assert b.parent == 0
    assert a.children == [1]


def test_sibling_at_same_indent_keeps_leaf():
    tree = _tree(["2024-01-01", "- [ ] A", "- [ ] C"])
    assert all(n.is_leaf for n in tree.nodes)
    assert all(n.parent is None for n in tree.nodes)


def test_leaf_check_only_looks_at_the_next_line():
    lines = ["- [ ] A", "", "\t- [ ] B"]
    assert is_leaf_line(lines, 0)
    assert not is_leaf_line(["- [ ] A", "  - [x] B"], 0)
    assert is_leaf_line(["- [ ] A"], 0)


def test_ancestor_chain_strictly_decreasing():
    tree = _tree(["2024-01-01", "- [ ] A", "\t- [x] B", "\t\t- [ ] C"])
    c = tree.node_at(3)
    chain = tree.ancestors(c)
    assert [n.content for n in chain] == ["B", "A"]
    depths = [c.depth] + [n.depth for n in chain]
    assert depths == sorted(depths, reverse=True)
    assert len(set(depths)) == len(depths)


def test_parent_is_nearest_shorter_indent():
    tree = _tree(["2024-01-01", "- [ ] A", "    - [ ] B", "  - [ ] C", "    - [ ] D"])
    assert tree.node_at(3).parent == tree.by_line[1]
    assert tree.node_at(4).parent == tree.by_line[3]


def test_iter_sections_bounds():
    lines = ["intro", "2024-01-01", "- [ ] a", "2024-01-02 Tue", "- [ ] b"]
    sections = list(TaskTreeParser(lines).iter_sections())
    assert [(s.date, s.header_index, s.end) for s in sections] == [
        ("2024-01-01", 1, 3),
        ("2024-01-02", 3, 5),
    ]
    later = list(TaskTreeParser(lines).iter_sections(start=2))
    assert [s.date for s in later] == ["2024-01-02"]


def test_ancestor_walk_stops_at_section_header():
    lines = ["- [ ] X", "2024-01-01", "\t- [ ] Y"]
    assert nearest_ancestor_index(lines, 2) is None


def test_ancestor_walk_skips_deleted_lines():
    lines = ["- [ ] P", "\t- [ ] Q", "\t\t- [ ] R"]
    assert nearest_ancestor_index(lines, 2) == 1
    assert nearest_ancestor_index(lines, 2, skip={1}) == 0


def test_descendants_stop_at_same_depth_or_header():
    lines = ["- [ ] P", "\t- [x] a", "note", "\t\t- [ ] b", "- [ ] Q", "\t- [ ] c"]
    assert descendant_indices(lines, 0) == [1, 3]
    assert descendant_indices(lines, 0, skip={1}) == [3]
    assert descendant_indices(["- [ ] P", "2024-01-01", "\t- [ ] x"], 0) == []
