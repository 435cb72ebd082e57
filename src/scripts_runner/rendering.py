"""Rich renderables for the script hierarchy."""
from __future__ import annotations

from typing import Optional

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .hierarchy import CategoryNode, HierarchyBuilder, HierarchyNode, ProjectNode, ScriptLeaf
from .models import ScriptRecord


def node_label(node: HierarchyNode) -> Text:
    if isinstance(node, ProjectNode):
        return Text(f"{node.name or '(workspace)'}", style="bold cyan")
    if isinstance(node, CategoryNode):
        return Text(node.name, style="bold magenta")
    script = node.script
    label = Text(script.name, style="green")
    label.append(f"  {script.command}", style="dim")
    if script.description:
        label.append(f"  - {script.description}", style="italic")
    return label


def _add_branch(parent: Tree, builder: HierarchyBuilder, node: HierarchyNode) -> None:
    branch = parent.add(node_label(node))
    if isinstance(node, ScriptLeaf):
        return
    for child in builder.children(node):
        _add_branch(branch, builder, child)


def build_tree(builder: HierarchyBuilder, title: Optional[str] = None) -> Tree:
    """Expand the whole hierarchy into a :class:`rich.tree.Tree`."""

    tree = Tree(Text(title or "Scripts", style="bold"), guide_style="dim")
    for node in builder.roots():
        _add_branch(tree, builder, node)
    return tree


def build_table(scripts: tuple[ScriptRecord, ...]) -> Table:
    table = Table(title="Scripts", header_style="bold blue")
    table.add_column("Name")
    table.add_column("Command")
    table.add_column("Description")
    table.add_column("Category")
    table.add_column("Project")

    for script in scripts:
        table.add_row(
            script.name,
            script.command,
            script.description or "-",
            script.effective_category,
            script.project_name or "-",
        )
    return table


__all__ = ["build_table", "build_tree", "node_label"]
