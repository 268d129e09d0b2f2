"""Minimal demo that prints a scene hierarchy and walks through a few clicks."""

from __future__ import annotations

from hierview import EntityGraph, HierarchyController


def build_scene() -> EntityGraph:
    graph = EntityGraph()
    world = graph.spawn("World")
    graph.spawn(parent=world, components=["Camera"])
    lights = graph.spawn("Lights", parent=world)
    graph.spawn("Sun", parent=lights, components=["DirectionalLight"])
    graph.spawn("Lamp", parent=lights, components=["PointLight"])
    graph.spawn("Player", parent=world)
    graph.spawn("UI")
    return graph


def print_panel(panel: HierarchyController) -> None:
    for row in panel.rows():
        expander = " "
        if row.has_children:
            expander = "v" if row.expanded else ">"
        marker = "*" if row.selected else " "
        print(f"{marker} {'  ' * row.depth}{expander} {row.name}")
    print()


def main():
    graph = build_scene()
    panel = HierarchyController(graph)
    panel.refresh()
    print_panel(panel)

    world = panel.hierarchy.visible_elements[0]
    panel.toggle_expanded(world)
    print_panel(panel)

    rows = panel.rows()
    panel.click(rows[1].entity)
    panel.click(rows[3].entity, shift=True)
    print_panel(panel)

    panel.click(rows[-1].entity, ctrl=True)
    print_panel(panel)


if __name__ == "__main__":
    main()
