"""Project → category → script tree derived from the registry."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Union

from .config import DEFAULT_CATEGORY
from .models import ScriptRecord

if TYPE_CHECKING:
    from .registry import ScriptRegistry


@dataclass(frozen=True, slots=True)
class ProjectNode:
    name: str


@dataclass(frozen=True, slots=True)
class CategoryNode:
    name: str
    project: str


@dataclass(frozen=True, slots=True)
class ScriptLeaf:
    script: ScriptRecord


HierarchyNode = Union[ProjectNode, CategoryNode, ScriptLeaf]


def _project_key(script: ScriptRecord) -> str:
    return script.project_name or ""


def group_by_project(
    scripts: Sequence[ScriptRecord],
) -> dict[str, list[ScriptRecord]]:
    projects: dict[str, list[ScriptRecord]] = {}
    for script in scripts:
        projects.setdefault(_project_key(script), []).append(script)
    return projects


def group_by_category(scripts: Sequence[ScriptRecord]) -> dict[str, list[ScriptRecord]]:
    categories: dict[str, list[ScriptRecord]] = {}
    for script in scripts:
        categories.setdefault(script.effective_category, []).append(script)
    return categories


def _project_children(project: str, scripts: Sequence[ScriptRecord]) -> list[HierarchyNode]:
    categories = group_by_category(scripts)
    if len(categories) == 1 and DEFAULT_CATEGORY in categories:
        return [ScriptLeaf(script) for script in categories[DEFAULT_CATEGORY]]
    return [CategoryNode(name=name, project=project) for name in categories]


def root_items(scripts: Sequence[ScriptRecord]) -> list[HierarchyNode]:
    """Return the top-level nodes of the tree.

    A single project is not shown as a node; its categories are the roots, or
    its scripts when everything sits in the default category. Several projects
    are always shown as project nodes.
    """

    projects = group_by_project(scripts)
    if not projects:
        return []
    if len(projects) == 1:
        project, project_scripts = next(iter(projects.items()))
        return _project_children(project, project_scripts)
    return [ProjectNode(name=project) for project in projects]


def child_items(scripts: Sequence[ScriptRecord], node: HierarchyNode) -> list[HierarchyNode]:
    """Return the nodes shown when ``node`` is expanded."""

    if isinstance(node, ScriptLeaf):
        return []

    projects = group_by_project(scripts)
    if isinstance(node, ProjectNode):
        return _project_children(node.name, projects.get(node.name, []))

    project_scripts = projects.get(node.project, [])
    return [
        ScriptLeaf(script)
        for script in project_scripts
        if script.effective_category == node.name
    ]


class HierarchyBuilder:
    """Builds tree nodes from whatever the registry currently holds."""

    def __init__(self, registry: "ScriptRegistry") -> None:
        self.registry = registry

    def roots(self) -> list[HierarchyNode]:
        return root_items(self.registry.get_all())

    def children(self, node: HierarchyNode) -> list[HierarchyNode]:
        return child_items(self.registry.get_all(), node)


__all__ = [
    "CategoryNode",
    "HierarchyBuilder",
    "HierarchyNode",
    "ProjectNode",
    "ScriptLeaf",
    "child_items",
    "root_items",
]
