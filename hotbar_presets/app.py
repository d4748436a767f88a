"""Desktop editor for the barrel presets of a ``hotbar.nbt`` file.

The window lists the presets found at root slot 0 and shows the selected one
as a player inventory. Clicking a slot opens a small dialog that writes the
item back through :mod:`hotbar_presets.editing`; saving rebuilds the file
against the tree that was loaded, so protected entries and the other hotbar
rows are kept.
"""
from __future__ import annotations

import logging
import os
import tkinter as tk
from tkinter import filedialog, messagebox, simpledialog, ttk
from typing import Any, Dict, List as PyList, Optional

from .codec import load_preset_file, save_preset_file
from .editing import (
    UI_SLOT_COUNT,
    add_preset,
    check_hotbar,
    delete_item_at_ui_slot,
    item_at_ui_slot,
    move_item,
    move_preset,
    remove_preset,
    set_item_at_ui_slot,
)
from .errors import EditError, PresetCodecError
from .layout import (
    EQUIPMENT_SLOTS,
    INVENTORY_GRID,
    apply_enchantments,
    format_enchantments,
    format_slot_text,
    parse_enchantments,
    parse_int,
    slot_label,
)
from .models import MAX_COUNT, MIN_COUNT, Diagnostic, HotbarData, Item, Preset, PresetFile

logger = logging.getLogger(__name__)

FILE_TYPES = [("Hotbar files", "*.nbt"), ("All files", "*.*")]


class ItemEditorDialog:
    """Dialog that edits one inventory slot."""

    def __init__(self, master: tk.Misc, *, ui_slot: int, item: Optional[Item]) -> None:
        self.master = master
        self.result: Optional[Dict[str, Any]] = None
        self.item = item

        self.top = tk.Toplevel(master)
        self.top.title(slot_label(ui_slot))
        self.top.transient(master)
        self.top.grab_set()

        container = ttk.Frame(self.top, padding=12)
        container.grid(row=0, column=0, sticky="nsew")
        self.top.columnconfigure(0, weight=1)
        self.top.rowconfigure(0, weight=1)

        self.id_var = tk.StringVar(value=item.id if item else "")
        self.count_var = tk.StringVar(value=str(item.count if item else 1))
        enchantments = item.tag.enchantments if item and item.tag else []
        self.enchantments_var = tk.StringVar(value=format_enchantments(enchantments))

        ttk.Label(container, text="Item ID:").grid(row=0, column=0, sticky="w", padx=(0, 8))
        ttk.Entry(container, textvariable=self.id_var).grid(row=0, column=1, sticky="we")

        ttk.Label(container, text="Count:").grid(row=1, column=0, sticky="w", padx=(0, 8))
        ttk.Entry(container, textvariable=self.count_var).grid(row=1, column=1, sticky="we")

        ttk.Label(container, text="Enchantments:").grid(row=2, column=0, sticky="w", padx=(0, 8))
        ttk.Entry(container, textvariable=self.enchantments_var, width=40).grid(row=2, column=1, sticky="we")
        ttk.Label(container, text="e.g. minecraft:sharpness 5, minecraft:unbreaking 3").grid(
            row=3, column=1, sticky="w"
        )

        button_row = ttk.Frame(container)
        button_row.grid(row=4, column=0, columnspan=2, pady=(12, 0))
        ttk.Button(button_row, text="Cancel", command=self._on_cancel).pack(side=tk.RIGHT, padx=(8, 0))
        if item is not None:
            ttk.Button(button_row, text="Delete", command=self._on_delete).pack(side=tk.RIGHT, padx=(8, 0))
        ttk.Button(button_row, text="Save", command=self._on_save).pack(side=tk.RIGHT)

        container.columnconfigure(1, weight=1)
        self.top.protocol("WM_DELETE_WINDOW", self._on_cancel)

    def _on_save(self) -> None:
        item_id = self.id_var.get().strip()
        if not item_id:
            messagebox.showerror("Invalid item ID", "Provide the full identifier of the item (e.g. minecraft:stone).", parent=self.top)
            return

        count_value = parse_int(self.count_var.get().strip(), allow_negative=False)
        if count_value is None or not (MIN_COUNT <= count_value <= MAX_COUNT):
            messagebox.showerror("Invalid count", f"Count must be between {MIN_COUNT} and {MAX_COUNT}.", parent=self.top)
            return

        enchantments = parse_enchantments(self.enchantments_var.get())
        if enchantments is None:
            messagebox.showerror(
                "Invalid enchantments", "Use \"id level\" pairs separated by commas, levels 1-255.", parent=self.top
            )
            return

        self.result = {"action": "save", "id": item_id, "count": count_value, "enchantments": enchantments}
        self.top.destroy()

    def _on_delete(self) -> None:
        self.result = {"action": "delete"}
        self.top.destroy()

    def _on_cancel(self) -> None:
        self.result = None
        self.top.destroy()

    def show(self) -> Optional[Dict[str, Any]]:
        self.master.wait_window(self.top)
        return self.result


class PresetEditorApp(tk.Tk):
    """Main application."""

    def __init__(self) -> None:
        super().__init__()
        self.title("Hotbar Preset Editor")
        self.geometry("1100x560")

        self.preset_file: Optional[PresetFile] = None
        self.hotbar = HotbarData()
        self.file_path: Optional[str] = None
        self.current_preset: Optional[int] = None

        self._create_menu()
        self._create_layout()

    # ------------------------------------------------------------------
    # UI creation
    # ------------------------------------------------------------------
    def _create_menu(self) -> None:
        menu_bar = tk.Menu(self)

        file_menu = tk.Menu(menu_bar, tearoff=False)
        file_menu.add_command(label="Open…", command=self.open_file)
        file_menu.add_command(label="Save", command=self.save_file)
        file_menu.add_command(label="Save As…", command=self.save_file_as)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.destroy)
        menu_bar.add_cascade(label="File", menu=file_menu)

        preset_menu = tk.Menu(menu_bar, tearoff=False)
        preset_menu.add_command(label="New preset", command=self.add_preset)
        preset_menu.add_command(label="Insert after selected", command=self.insert_preset)
        preset_menu.add_command(label="Rename…", command=self.rename_preset)
        preset_menu.add_separator()
        preset_menu.add_command(label="Move up", command=lambda: self.shift_preset(-1))
        preset_menu.add_command(label="Move down", command=lambda: self.shift_preset(1))
        preset_menu.add_separator()
        preset_menu.add_command(label="Delete", command=self.delete_preset)
        menu_bar.add_cascade(label="Preset", menu=preset_menu)

        self.config(menu=menu_bar)

    def _create_layout(self) -> None:
        main_pane = ttk.PanedWindow(self, orient=tk.HORIZONTAL)
        main_pane.pack(fill=tk.BOTH, expand=True)

        list_frame = ttk.LabelFrame(main_pane, text="Presets", padding=8)
        self.preset_list = tk.Listbox(list_frame, exportselection=False)
        self.preset_list.pack(fill=tk.BOTH, expand=True)
        self.preset_list.bind("<<ListboxSelect>>", self._on_preset_select)
        main_pane.add(list_frame, weight=1)

        inventory_frame = ttk.LabelFrame(main_pane, text="Inventory", padding=8)
        main_pane.add(inventory_frame, weight=3)
        inventory_frame.columnconfigure(0, weight=1)
        inventory_frame.rowconfigure(0, weight=1)
        self.inventory_frame = inventory_frame

        self.status_var = tk.StringVar(value="Open a hotbar.nbt file to begin.")
        ttk.Label(self, textvariable=self.status_var, anchor="w", padding=(8, 4)).pack(fill=tk.X)

        self.build_inventory()

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------
    def open_file(self) -> None:
        filename = filedialog.askopenfilename(parent=self, title="Open hotbar file", filetypes=FILE_TYPES)
        if not filename:
            return
        try:
            preset_file = load_preset_file(filename)
        except (OSError, PresetCodecError) as exc:
            messagebox.showerror("Failed to open file", str(exc), parent=self)
            return

        self.preset_file = preset_file
        self.hotbar = preset_file.hotbar
        self.file_path = filename
        self.current_preset = 0 if self.hotbar.presets else None
        self._update_title()
        self._report(preset_file.diagnostics, f"Loaded {len(self.hotbar.presets)} preset(s).")
        self.refresh_views()

    def save_file(self) -> None:
        if not self.file_path:
            self.save_file_as()
            return
        self._write(self.file_path)

    def save_file_as(self) -> None:
        filename = filedialog.asksaveasfilename(
            parent=self,
            title="Save hotbar file",
            defaultextension=".nbt",
            initialfile="hotbar.nbt",
            filetypes=FILE_TYPES,
        )
        if not filename:
            return
        if self._write(filename):
            self.file_path = filename
            self._update_title()

    def _write(self, filename: str) -> bool:
        problems = check_hotbar(self.hotbar)
        if problems and not messagebox.askyesno(
            "Save anyway?",
            "\n".join(str(problem) for problem in problems[:10]) + "\n\nSave the file anyway?",
            parent=self,
        ):
            return False

        diagnostics: PyList[Diagnostic] = []
        raw_tree = self.preset_file.raw_tree if self.preset_file else None
        try:
            save_preset_file(filename, self.hotbar, raw_tree, diagnostics=diagnostics)
        except (OSError, PresetCodecError) as exc:
            messagebox.showerror("Failed to save", str(exc), parent=self)
            return False
        self._report(diagnostics, f"Saved to {filename}.")
        return True

    def _update_title(self) -> None:
        if self.file_path:
            self.title(f"Hotbar Preset Editor – {os.path.basename(self.file_path)}")
        else:
            self.title("Hotbar Preset Editor")

    def _report(self, diagnostics: PyList[Diagnostic], summary: str) -> None:
        for diagnostic in diagnostics:
            logger.info("%s", diagnostic)
        if diagnostics:
            summary += f" {len(diagnostics)} note(s), see the log."
        self.status_var.set(summary)

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    def refresh_views(self) -> None:
        self.preset_list.delete(0, tk.END)
        for preset in self.hotbar.presets:
            suffix = "" if preset.slot == 0 else f" (row {preset.slot + 1}, read-only)"
            self.preset_list.insert(tk.END, preset.name + suffix)
        if self.current_preset is not None:
            self.preset_list.selection_set(self.current_preset)
        self.build_inventory()

    def _on_preset_select(self, _: Any) -> None:
        selection = self.preset_list.curselection()
        self.current_preset = selection[0] if selection else None
        self.build_inventory()

    def add_preset(self) -> None:
        self.current_preset = add_preset(self.hotbar)
        self.refresh_views()

    def insert_preset(self) -> None:
        if self.current_preset is None:
            self.add_preset()
            return
        self.current_preset = add_preset(self.hotbar, after=self.current_preset)
        self.refresh_views()

    def delete_preset(self) -> None:
        preset = self._selected_preset()
        if preset is None:
            return
        if not messagebox.askyesno("Delete preset", f"Delete the preset {preset.name!r}?", parent=self):
            return
        try:
            remove_preset(self.hotbar, self.current_preset)
        except EditError as exc:
            messagebox.showerror("Cannot delete", str(exc), parent=self)
            return
        self.current_preset = min(self.current_preset, len(self.hotbar.presets) - 1) if self.hotbar.presets else None
        self.refresh_views()

    def shift_preset(self, offset: int) -> None:
        if self.current_preset is None:
            return
        target = self.current_preset + offset
        if not 0 <= target < len(self.hotbar.presets):
            return
        try:
            move_preset(self.hotbar, self.current_preset, target)
        except EditError as exc:
            messagebox.showerror("Cannot move", str(exc), parent=self)
            return
        self.current_preset = target
        self.refresh_views()

    def rename_preset(self) -> None:
        preset = self._selected_preset()
        if preset is None:
            return
        top = tk.Toplevel(self)
        top.title("Rename preset")
        top.transient(self)
        top.grab_set()
        name_var = tk.StringVar(value=preset.name)
        ttk.Entry(top, textvariable=name_var, width=32).pack(padx=12, pady=12)

        def apply() -> None:
            new_name = name_var.get().strip()
            if not new_name:
                messagebox.showerror("Invalid name", "Presets must have a name.", parent=top)
                return
            preset.name = new_name
            top.destroy()
            self.refresh_views()

        ttk.Button(top, text="Rename", command=apply).pack(pady=(0, 12))
        self.wait_window(top)

    def _selected_preset(self) -> Optional[Preset]:
        if self.current_preset is None or self.current_preset >= len(self.hotbar.presets):
            return None
        return self.hotbar.presets[self.current_preset]

    # ------------------------------------------------------------------
    # Inventory handling
    # ------------------------------------------------------------------
    def build_inventory(self) -> None:
        frame = self.inventory_frame
        for child in frame.winfo_children():
            child.destroy()

        preset = self._selected_preset()
        if preset is None:
            ttk.Label(frame, text="Select a preset to view its inventory.").grid(row=0, column=0, padx=12, pady=12)
            return

        grid_container = ttk.Frame(frame)
        grid_container.grid(row=0, column=0, sticky="nsew", padx=8, pady=8)
        for r, row_slots in enumerate(INVENTORY_GRID):
            grid_container.rowconfigure(r, weight=1)
            for c, ui_slot in enumerate(row_slots):
                grid_container.columnconfigure(c, weight=1)
                self._slot_button(grid_container, ui_slot, width=14).grid(row=r, column=c, padx=2, pady=2, sticky="nsew")

        equipment_frame = ttk.Labelframe(frame, text="Equipment", padding=8)
        equipment_frame.grid(row=0, column=1, sticky="ns", padx=(4, 8), pady=8)
        for ui_slot in EQUIPMENT_SLOTS:
            self._slot_button(equipment_frame, ui_slot, width=16).pack(fill="x", pady=2)

    def _slot_button(self, parent: tk.Misc, ui_slot: int, *, width: int) -> ttk.Button:
        item = item_at_ui_slot(self.hotbar, self.current_preset, ui_slot)
        button = ttk.Button(
            parent,
            text=format_slot_text(ui_slot, item),
            command=lambda s=ui_slot: self._edit_slot(s),
            width=width,
        )
        if item is not None:
            button.bind("<Button-3>", lambda event, s=ui_slot: self._show_slot_menu(event, s))
        return button

    def _show_slot_menu(self, event: Any, ui_slot: int) -> None:
        menu = tk.Menu(self, tearoff=False)
        menu.add_command(label="Move to slot…", command=lambda: self._move_slot(ui_slot))
        menu.add_command(label="Delete", command=lambda: self._delete_slot(ui_slot))
        menu.tk_popup(event.x_root, event.y_root)

    def _move_slot(self, ui_slot: int) -> None:
        if not self._check_selected_editable():
            return
        target = simpledialog.askinteger(
            "Move item",
            f"Move {slot_label(ui_slot)} to slot (0-{UI_SLOT_COUNT - 1}):",
            parent=self,
            minvalue=0,
            maxvalue=UI_SLOT_COUNT - 1,
        )
        if target is None:
            return
        move_item(self.hotbar, self.current_preset, ui_slot, target)
        self.build_inventory()

    def _delete_slot(self, ui_slot: int) -> None:
        if not self._check_selected_editable():
            return
        delete_item_at_ui_slot(self.hotbar, self.current_preset, ui_slot)
        self.build_inventory()

    def _check_selected_editable(self) -> bool:
        preset = self._selected_preset()
        if preset is None:
            return False
        if preset.slot != 0:
            messagebox.showinfo("Read-only preset", "Only presets in the first hotbar row can be edited.", parent=self)
            return False
        return True

    def _edit_slot(self, ui_slot: int) -> None:
        if not self._check_selected_editable():
            return
        item = item_at_ui_slot(self.hotbar, self.current_preset, ui_slot)
        result = ItemEditorDialog(self, ui_slot=ui_slot, item=item).show()
        if not result:
            return

        try:
            if result["action"] == "delete":
                delete_item_at_ui_slot(self.hotbar, self.current_preset, ui_slot)
            else:
                # Other metadata of the stack survives an id, count or enchantment change.
                tag = apply_enchantments(item.tag if item is not None else None, result["enchantments"])
                new_item = Item(id=result["id"], count=result["count"], tag=tag)
                set_item_at_ui_slot(self.hotbar, self.current_preset, ui_slot, new_item)
        except EditError as exc:
            messagebox.showerror("Invalid edit", str(exc), parent=self)
            return
        self.build_inventory()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = PresetEditorApp()
    app.mainloop()


if __name__ == "__main__":
    main()
