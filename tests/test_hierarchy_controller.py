"""
Тесты для HierarchyController: полный проход панели иерархии.
"""

from hierview.controller import HierarchyController
from hierview.expanded import ExpandedState
from hierview.filter import NameFilter
from hierview.graph import EntityGraph
from hierview.selection import SelectionMode
from hierview.settings import HierarchySettings


def make_scene():
    """
    R1
    ├─ C1
    └─ C2
    R2
    """
    graph = EntityGraph()
    r1 = graph.spawn("R1")
    c1 = graph.spawn("C1", parent=r1)
    c2 = graph.spawn("C2", parent=r1)
    r2 = graph.spawn("R2")
    return graph, r1, c1, c2, r2


class TestEndToEnd:
    def test_click_then_shift_click(self):
        graph, r1, c1, c2, r2 = make_scene()
        expanded = ExpandedState([r1, c1, c2, r2])
        panel = HierarchyController(graph, expanded=expanded)

        panel.refresh()
        assert panel.hierarchy.visible_elements == [r1, c1, c2, r2]

        assert panel.click(c1)
        assert panel.selection.as_list() == [c1]

        assert panel.click(r2, shift=True)
        assert panel.selection.as_list() == [c1, c2, r2]
        assert panel.selection.last_action == (SelectionMode.REPLACE, c1)

    def test_selection_survives_refresh(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, expanded=ExpandedState([r1]))
        panel.refresh()
        panel.click(c2)

        panel.refresh()
        assert panel.selection.as_list() == [c2]

    def test_refresh_prunes_despawned_entities(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, expanded=ExpandedState([r1]))
        panel.refresh()
        panel.click(c1)
        panel.click(r2, ctrl=True)

        graph.despawn(r1)
        panel.refresh()

        assert panel.selection.as_list() == [r2]
        assert panel.hierarchy.visible_elements == [r2]


class TestClick:
    def test_click_on_hidden_row_is_ignored(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph)
        panel.refresh()

        assert not panel.click(c1)
        assert panel.selection.is_empty()

    def test_ctrl_wins_over_shift(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, expanded=ExpandedState([r1]))
        panel.refresh()

        panel.click(r1)
        panel.click(r2, ctrl=True, shift=True)
        assert panel.selection.as_list() == [r1, r2]

    def test_shift_range_skips_collapsed_children(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph)
        panel.refresh()

        panel.click(r1)
        panel.click(r2, shift=True)
        assert panel.selection.as_list() == [r1, r2]

    def test_range_uses_order_at_click_time(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph)
        panel.refresh()
        panel.click(r1)

        panel.toggle_expanded(r1)
        panel.click(r2, shift=True)
        assert panel.selection.as_list() == [r1, c1, c2, r2]


class TestExpandAndRows:
    def test_toggle_expanded_updates_visibility(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph)
        panel.refresh()
        assert panel.hierarchy.visible_elements == [r1, r2]

        assert panel.toggle_expanded(r1) is True
        assert panel.hierarchy.visible_elements == [r1, c1, c2, r2]

        assert panel.toggle_expanded(r1) is False
        assert panel.hierarchy.visible_elements == [r1, r2]

    def test_reveal_expands_ancestors(self):
        graph = EntityGraph()
        a = graph.spawn("A")
        b = graph.spawn("B", parent=a)
        c = graph.spawn("C", parent=b)
        panel = HierarchyController(graph)
        panel.refresh()

        assert panel.reveal(c)
        assert panel.hierarchy.visible_elements == [a, b, c]
        assert not panel.expanded.is_expanded(c)

    def test_reveal_unknown_entity(self):
        graph, *_ = make_scene()
        panel = HierarchyController(graph)
        panel.refresh()
        assert not panel.reveal("missing")

    def test_rows(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, expanded=ExpandedState([r1, r2]))
        panel.refresh()
        panel.click(c2)

        rows = panel.rows()
        assert [row.name for row in rows] == ["R1", "C1", "C2", "R2"]
        assert [row.depth for row in rows] == [0, 1, 1, 0]
        assert [row.has_children for row in rows] == [True, False, False, False]
        # R2 is flagged but has nothing to expand
        assert [row.expanded for row in rows] == [True, False, False, False]
        assert [row.selected for row in rows] == [False, False, True, False]

    def test_row_indent_from_settings(self):
        graph, r1, *_ = make_scene()
        settings = HierarchySettings(indent_per_depth=20.0)
        panel = HierarchyController(graph, expanded=ExpandedState([r1]), settings=settings)
        panel.refresh()

        indents = [panel.row_indent(row) for row in panel.rows()]
        assert indents == [0.0, 20.0, 20.0, 0.0]

    def test_row_height_from_settings(self):
        graph, *_ = make_scene()
        panel = HierarchyController(graph, settings=HierarchySettings(row_height_scale=2.0))
        assert panel.row_height(12.0) == 24.0

    def test_expand_roots_by_default_only_once(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, settings=HierarchySettings(expand_roots_by_default=True))
        panel.refresh()
        assert panel.hierarchy.visible_elements == [r1, c1, c2, r2]

        panel.toggle_expanded(r1)
        panel.refresh()
        assert panel.hierarchy.visible_elements == [r1, r2]


class TestFilter:
    def test_name_filter_as_root_filter(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, expanded=ExpandedState([r1]))
        panel.root_filter = NameFilter("c2").root_filter(graph)
        panel.refresh()

        assert panel.hierarchy.visible_elements == [r1, c1, c2]

    def test_plain_callable_as_root_filter(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, root_filter=lambda entity: entity == r2)
        panel.refresh()

        assert panel.hierarchy.visible_elements == [r2]


class TestStatePruning:
    def test_spawn_despawn_cycles_leave_no_state(self):
        graph = EntityGraph()
        panel = HierarchyController(graph, settings=HierarchySettings(expand_roots_by_default=True))

        for _ in range(50):
            entity = graph.spawn("Temp")
            panel.refresh()
            panel.click(entity)
            assert panel.expanded.is_expanded(entity)

            graph.despawn(entity)
            panel.refresh()

        assert len(panel.expanded) == 0
        assert len(panel._known_roots) == 0
        assert panel.selection.is_empty()

    def test_expanded_flags_of_live_entities_survive(self):
        graph, r1, c1, c2, r2 = make_scene()
        panel = HierarchyController(graph, expanded=ExpandedState([r1, c1]))
        panel.refresh()

        graph.despawn(c1)
        panel.refresh()

        assert panel.expanded.expanded_entities() == [r1]
        assert panel.hierarchy.visible_elements == [r1, c2, r2]
