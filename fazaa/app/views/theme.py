"""Shared visual theme for the orders desktop views.

The module centralizes ttk style tokens and per-status row tags so the list
view does not carry styling logic itself.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from fazaa.domain.orders import OrderStatus
from fazaa.viewmodels.status_format import status_style

BG = "#f3f5f9"
CARD_BG = "#ffffff"
BORDER = "#d9dfeb"
PRIMARY = "#2457ff"
TEXT = "#1f2937"
MUTED = "#64748b"
SKELETON = "#e5e7eb"


def status_tag(status: OrderStatus) -> str:
    """Treeview tag name used for rows of ``status``."""
    return f"status-{status.wire_value}"


def apply_theme(root: tk.Misc) -> None:
    """Apply ttk styles used by ``OrdersListView``.

    Args:
        root: Root Tk object or any widget tied to the app Tcl interpreter.
    """
    style = ttk.Style(root)
    if "clam" in style.theme_names():
        style.theme_use("clam")

    root.option_add("*Font", "TkDefaultFont 10")
    root.configure(bg=BG)

    style.configure(".", background=BG, foreground=TEXT)
    style.configure("TFrame", background=BG)
    style.configure("TLabel", background=BG, foreground=TEXT)
    style.configure("Subtle.TLabel", background=BG, foreground=MUTED)
    style.configure("Title.TLabel", background=BG, foreground=TEXT, font=("TkDefaultFont", 14, "bold"))

    style.configure("Chip.TButton", padding=(12, 6), background="#eceff4", bordercolor=BORDER, relief="flat")
    style.map("Chip.TButton", background=[("active", "#e2e8f0")])
    style.configure("ChipSelected.TButton", padding=(12, 6), background="#e6edff", foreground=PRIMARY, bordercolor=PRIMARY)
    style.map("ChipSelected.TButton", background=[("active", "#dbe4ff")])

    style.configure("Treeview", rowheight=44, fieldbackground=CARD_BG, background=CARD_BG, foreground=TEXT)
    style.configure("Treeview.Heading", background="#e9eefb", foreground=TEXT, relief="flat")
    style.map("Treeview", background=[("selected", "#d9e4ff")], foreground=[("selected", TEXT)])


def configure_row_tags(tree: ttk.Treeview) -> None:
    """Register status, skeleton, and footer tags on a list widget."""
    for status in OrderStatus:
        look = status_style(status)
        tree.tag_configure(status_tag(status), foreground=look.foreground)
    tree.tag_configure("skeleton", foreground=SKELETON, background=CARD_BG)
    tree.tag_configure("footer", foreground=MUTED)
