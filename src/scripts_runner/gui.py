"""Simple Tkinter-based GUI for browsing and running scripts."""
from __future__ import annotations

import tkinter as tk
from tkinter import messagebox, ttk
from typing import Optional

from .config import APP_NAME
from .errors import ScriptsError
from .hierarchy import HierarchyBuilder, HierarchyNode, ScriptLeaf
from .models import ScriptRecord
from .registry import ScriptRegistry
from .rendering import node_label
from .runner import run_record
from .watcher import config_file_signature

_PLACEHOLDER = "__placeholder__"
POLL_INTERVAL_MS = 2000


class ScriptsRunnerGUI:
    """Tkinter window showing the script tree of a workspace."""

    def __init__(self, root: tk.Tk, registry: ScriptRegistry) -> None:
        self.root = root
        self.registry = registry
        self.builder = HierarchyBuilder(registry)
        self.root.title(f"{APP_NAME} - GUI")
        self.root.geometry("900x500")

        self._nodes: dict[str, HierarchyNode] = {}
        self._signature = config_file_signature(registry.roots)

        self._build_widgets()
        self.refresh_tree()
        self.root.after(POLL_INTERVAL_MS, self._poll_changes)

    # ------------------------------------------------------------------
    # UI construction helpers
    def _build_widgets(self) -> None:
        top_frame = ttk.Frame(self.root)
        top_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        columns = ("command", "description")
        self.tree = ttk.Treeview(top_frame, columns=columns, show="tree headings")
        self.tree.heading("#0", text="Script")
        self.tree.heading("command", text="Command")
        self.tree.heading("description", text="Description")
        self.tree.column("#0", width=250, anchor=tk.W)
        for col in columns:
            self.tree.column(col, width=300, anchor=tk.W)
        self.tree.pack(fill=tk.BOTH, expand=True)
        self.tree.bind("<<TreeviewOpen>>", self._on_open)
        self.tree.bind("<Double-1>", lambda event: self.run_selected())

        buttons_frame = ttk.Frame(top_frame)
        buttons_frame.pack(fill=tk.X, pady=(10, 0))

        buttons = (
            ("Run", self.run_selected),
            ("Add", self.open_add_dialog),
            ("Edit", self.open_edit_dialog),
            ("Delete", self.delete_selected),
            ("Refresh", self.reload),
            ("Create .scriptsrc", self.create_file),
        )
        for index, (text, command) in enumerate(buttons):
            button = ttk.Button(buttons_frame, text=text, command=command)
            button.pack(side=tk.LEFT, padx=(0 if index == 0 else 5, 0))

    # ------------------------------------------------------------------
    # Tree handling
    def refresh_tree(self) -> None:
        for item in self.tree.get_children():
            self.tree.delete(item)
        self._nodes.clear()
        for node in self.builder.roots():
            self._insert(node, parent="")

    def _insert(self, node: HierarchyNode, parent: str) -> None:
        if isinstance(node, ScriptLeaf):
            values = (node.script.command, node.script.description or "")
            item = self.tree.insert(parent, tk.END, text=node.script.name, values=values)
        else:
            item = self.tree.insert(parent, tk.END, text=node_label(node).plain, open=False)
            # Children are filled in when the node is opened.
            self.tree.insert(item, tk.END, iid=f"{item}{_PLACEHOLDER}", text="...")
        self._nodes[item] = node

    def _on_open(self, event: tk.Event) -> None:  # type: ignore[type-arg]
        item = self.tree.focus()
        placeholder = f"{item}{_PLACEHOLDER}"
        if not self.tree.exists(placeholder):
            return
        self.tree.delete(placeholder)
        for child in self.builder.children(self._nodes[item]):
            self._insert(child, parent=item)

    def _selected_script(self) -> Optional[ScriptRecord]:
        selection = self.tree.selection()
        if not selection:
            return None
        node = self._nodes.get(selection[0])
        return node.script if isinstance(node, ScriptLeaf) else None

    def reload(self) -> None:
        self.registry.request_reload()
        self._signature = config_file_signature(self.registry.roots)
        self.refresh_tree()

    def _poll_changes(self) -> None:
        signature = config_file_signature(self.registry.roots)
        if signature != self._signature:
            self.reload()
        self.root.after(POLL_INTERVAL_MS, self._poll_changes)

    # ------------------------------------------------------------------
    # Actions
    def run_selected(self) -> None:
        script = self._selected_script()
        if script is None:
            messagebox.showinfo("Information", "Select a script to run.", parent=self.root)
            return
        try:
            run_record(script)
        except ScriptsError as exc:
            messagebox.showerror("Error", str(exc), parent=self.root)

    def open_add_dialog(self) -> None:
        self._open_dialog("Add script", None)

    def open_edit_dialog(self) -> None:
        script = self._selected_script()
        if script is None:
            messagebox.showinfo("Information", "Select a script to edit.", parent=self.root)
            return
        self._open_dialog("Edit script", script)

    def _open_dialog(self, title: str, script: Optional[ScriptRecord]) -> None:
        dialog = tk.Toplevel(self.root)
        dialog.title(title)
        dialog.grab_set()

        form_fields = (
            ("Name", "name"),
            ("Command", "command"),
            ("Description (optional)", "description"),
            ("Category (optional)", "category"),
        )

        entries: dict[str, ttk.Entry] = {}
        for idx, (label, key) in enumerate(form_fields):
            ttk.Label(dialog, text=label).grid(row=idx, column=0, sticky=tk.W, padx=5, pady=5)
            entry = ttk.Entry(dialog, width=60)
            entry.grid(row=idx, column=1, padx=5, pady=5)
            if script is not None:
                entry.insert(0, getattr(script, key) or "")
            entries[key] = entry

        buttons_frame = ttk.Frame(dialog)
        buttons_frame.grid(row=len(form_fields), column=0, columnspan=2, pady=10)

        submit_btn = ttk.Button(
            buttons_frame,
            text="Save",
            command=lambda: self._save_script(dialog, entries, script),
        )
        submit_btn.pack(side=tk.LEFT, padx=5)

        cancel_btn = ttk.Button(buttons_frame, text="Cancel", command=dialog.destroy)
        cancel_btn.pack(side=tk.LEFT)

    def _save_script(
        self,
        dialog: tk.Toplevel,
        entries: dict[str, ttk.Entry],
        original: Optional[ScriptRecord],
    ) -> None:
        name = entries["name"].get().strip()
        command = entries["command"].get().strip()
        if not name or not command:
            messagebox.showerror("Error", "Name and command are required.", parent=dialog)
            return

        record = ScriptRecord(
            name=name,
            command=command,
            description=entries["description"].get().strip() or None,
            category=entries["category"].get().strip() or None,
        )
        try:
            if original is None:
                self.registry.add(record)
            else:
                self.registry.update(original.name, record)
        except ScriptsError as exc:
            messagebox.showerror("Error", f"Cannot save script: {exc}", parent=dialog)
            return

        dialog.destroy()
        self.refresh_tree()

    def delete_selected(self) -> None:
        script = self._selected_script()
        if script is None:
            messagebox.showinfo("Information", "Select a script to delete.", parent=self.root)
            return

        if not messagebox.askyesno(
            "Confirm", f"Delete script '{script.name}'?", parent=self.root
        ):
            return
        try:
            self.registry.delete(script.name)
        except ScriptsError as exc:
            messagebox.showerror("Error", f"Cannot delete script: {exc}", parent=self.root)
        self.refresh_tree()

    def create_file(self) -> None:
        try:
            path = self.registry.create_default_file()
        except ScriptsError as exc:
            messagebox.showerror("Error", f"Cannot create file: {exc}", parent=self.root)
            return
        messagebox.showinfo("Created", f"Created {path}.", parent=self.root)
        self.refresh_tree()


def launch_gui(registry: ScriptRegistry) -> None:
    """Display the GUI for ``registry`` until the window is closed."""

    root = tk.Tk()
    ScriptsRunnerGUI(root, registry)
    root.mainloop()


__all__ = ["launch_gui", "ScriptsRunnerGUI"]
