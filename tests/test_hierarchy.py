from __future__ import annotations

from pathlib import Path

from scripts_runner.hierarchy import (
    CategoryNode,
    HierarchyBuilder,
    ProjectNode,
    ScriptLeaf,
    child_items,
    root_items,
)
from scripts_runner.models import ScriptRecord
from scripts_runner.registry import ScriptRegistry


def script(name: str, project: str = "app", category: str | None = None) -> ScriptRecord:
    return ScriptRecord(
        name=name,
        command=f"echo {name}",
        category=category,
        project_name=project,
        project_path=Path("/work") / project,
    )


def test_empty_registry_has_no_roots() -> None:
    assert root_items([]) == []


def test_single_project_general_category_is_flattened() -> None:
    scripts = [script("a"), script("b", category="General"), script("c")]

    roots = root_items(scripts)

    assert roots == [ScriptLeaf(s) for s in scripts]


def test_single_project_with_categories_shows_categories() -> None:
    scripts = [
        script("compile", category="build"),
        script("unit", category="test"),
        script("bundle", category="build"),
    ]

    roots = root_items(scripts)

    assert roots == [CategoryNode("build", "app"), CategoryNode("test", "app")]
    build = child_items(scripts, roots[0])
    assert [leaf.script.name for leaf in build] == ["compile", "bundle"]


def test_single_non_default_category_is_not_collapsed() -> None:
    scripts = [script("a", category="deploy")]

    assert root_items(scripts) == [CategoryNode("deploy", "app")]


def test_general_is_shown_next_to_other_categories() -> None:
    scripts = [script("a"), script("b", category="ci")]

    assert root_items(scripts) == [CategoryNode("General", "app"), CategoryNode("ci", "app")]


def test_multiple_projects_show_project_nodes() -> None:
    scripts = [
        script("serve", project="api"),
        script("dev", project="web", category="run"),
        script("lint", project="web", category="check"),
        script("migrate", project="api"),
    ]

    roots = root_items(scripts)

    assert roots == [ProjectNode("api"), ProjectNode("web")]
    assert [leaf.script.name for leaf in child_items(scripts, roots[0])] == ["serve", "migrate"]
    web = child_items(scripts, roots[1])
    assert web == [CategoryNode("run", "web"), CategoryNode("check", "web")]
    assert [leaf.script.name for leaf in child_items(scripts, web[1])] == ["lint"]


def test_categories_are_scoped_to_their_project() -> None:
    scripts = [
        script("a", project="one", category="build"),
        script("b", project="two", category="build"),
        script("c", project="two", category="test"),
    ]

    one_build = child_items(scripts, CategoryNode("build", "one"))

    assert [leaf.script.name for leaf in one_build] == ["a"]


def test_leaves_have_no_children() -> None:
    scripts = [script("a")]

    assert child_items(scripts, ScriptLeaf(scripts[0])) == []


def test_builder_reads_current_registry(tmp_path: Path, write_scripts, root_for) -> None:
    root = root_for(tmp_path / "app")
    write_scripts(
        root.path,
        [
            {"name": "a", "command": "1"},
            {"name": "b", "command": "2"},
            {"name": "c", "command": "3"},
        ],
    )
    registry = ScriptRegistry([root])
    builder = HierarchyBuilder(registry)

    assert [node.script.name for node in builder.roots()] == ["a", "b", "c"]

    registry.update("a", ScriptRecord(name="a", command="1", category="build"))

    roots = builder.roots()
    assert roots == [CategoryNode("build", "app"), CategoryNode("General", "app")]
    assert [leaf.script.name for leaf in builder.children(roots[1])] == ["b", "c"]
