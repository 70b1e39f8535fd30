"""
Report constants centralized for reuse across view modules.

Header text and column order here define what users see; renderers only
decide which of these columns to emit for a given output format.
"""

from __future__ import annotations

DEFAULT_SEPARATOR: str = " │ "
MARKDOWN_SEPARATOR: str = " | "

MARKDOWN_SEP_LEFT: str = ":---"
MARKDOWN_SEP_RIGHT: str = "---:"

NO_LAB_TEXT: str = "[N/A]"
LOADED_TEXT: str = "loaded"

# ANSI colors
CLR_DIM: str = "\033[38;5;244m"
CLR_LOADED: str = "\033[31m"
CLR_STOCK: str = "\033[32m"

# Log report headers (column order)
LOG_HEADERS: dict[str, str] = {
    "date": "Date",
    "id": "ID",
    "camera_id": "[CID]",
    "brand": "Brand",
    "model": "Model",
    "active": "Active",
    "stock_id": "[SID]",
    "company": "Manufacturer",
    "stock": "Stock",
    "iso": "ISO",
    "lab_id": "[LID]",
    "lab": "Lab Name",
    "lab_in": "Lab in",
    "lab_out": "Lab out",
    "scan": "Scan",
    "line": "Line",
    "note": "Note",
}

# Stock report headers (column order)
STOCK_HEADERS: dict[str, str] = {
    "available": "Avail",
    "shot": "Shot",
    "total": "Total",
    "stock_id": "SID",
    "company": "Manufacturer",
    "stock": "Stock",
    "iso": "ISO",
    "camera": "Camera",
}

# Numeric columns are right aligned in table output
STOCK_RIGHT_ALIGNED: frozenset[str] = frozenset({"available", "shot", "total"})
LOG_RIGHT_ALIGNED: frozenset[str] = frozenset({"iso"})
