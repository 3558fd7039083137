"""
Icon symbols for event particles.

A SymbolCache builds each ``<symbol>`` once per (icon, colour) and is owned
by whoever renders; nothing here is module-level mutable state.
"""

from typing import Dict, List, Optional, Tuple

from eventflow.ir.topology import EventShape

# Lucide icon paths, 24x24 viewBox
ICON_PATHS: Dict[str, List[str]] = {
    "mail": [
        "M4 4h16c1.1 0 2 .9 2 2v12c0 1.1-.9 2-2 2H4c-1.1 0-2-.9-2-2V6c0-1.1.9-2 2-2z",
        "M22 6l-10 7L2 6",
    ],
    "fileText": [
        "M14 2H6a2 2 0 0 0-2 2v16a2 2 0 0 0 2 2h12a2 2 0 0 0 2-2V8z",
        "M14 2v6h6", "M16 13H8", "M16 17H8", "M10 9H8",
    ],
    "alertTriangle": [
        "M10.29 3.86L1.82 18a2 2 0 0 0 1.71 3h16.94a2 2 0 0 0 1.71-3L13.71 3.86a2 2 0 0 0-3.42 0z",
        "M12 9v4", "M12 17h.01",
    ],
    "zap": ["M13 2L3 14h9l-1 8 10-12h-9l1-8z"],
    "box": [
        "M21 16V8a2 2 0 0 0-1-1.73l-7-4a2 2 0 0 0-2 0l-7 4A2 2 0 0 0 3 8v8a2 2 0 0 0 1 1.73l7 4a2 2 0 0 0 2 0l7-4A2 2 0 0 0 21 16z",
        "M3.27 6.96L12 12.01l8.73-5.05", "M12 22.08V12",
    ],
    "activity": ["M22 12h-4l-3 9L9 3l-3 9H2"],
    "key": [
        "M21 2l-2 2m-7.61 7.61a5.5 5.5 0 1 1-7.778 7.778 5.5 5.5 0 0 1 7.777-7.777z",
        "M15.5 7.5l3 3L22 7l-3-3",
    ],
}

EVENT_ICONS: Dict[EventShape, str] = {
    EventShape.MESSAGE: "mail",
    EventShape.DOCUMENT: "fileText",
    EventShape.ALERT: "alertTriangle",
    EventShape.LIGHTNING: "zap",
    EventShape.PACKAGE: "box",
    EventShape.PULSE: "activity",
    EventShape.KEY: "key",
}


class SymbolCache:
    def __init__(self):
        self._symbols: Dict[Tuple[str, str], str] = {}
        self.hits = 0
        self.misses = 0

    def symbol_id(self, icon: str, color: str) -> str:
        return f"icon-{icon}-{color.lstrip('#')}"

    def get(self, shape: EventShape, color: str) -> Optional[str]:
        """Return the symbol id for an icon shape, building it on first use."""
        icon = EVENT_ICONS.get(shape)
        if icon is None:
            return None

        key = (icon, color)
        if key in self._symbols:
            self.hits += 1
        else:
            self.misses += 1
            paths = "".join(
                f'<path d="{d}" fill="none" stroke="{color}" stroke-width="2" '
                f'stroke-linecap="round" stroke-linejoin="round"/>'
                for d in ICON_PATHS[icon]
            )
            self._symbols[key] = (
                f'<symbol id="{self.symbol_id(icon, color)}" viewBox="0 0 24 24">{paths}</symbol>'
            )
        return self.symbol_id(icon, color)

    def defs(self, used: List[str]) -> List[str]:
        """Markup for the given symbol ids, in first-use order."""
        wanted = set(used)
        return [
            markup
            for (icon, color), markup in self._symbols.items()
            if self.symbol_id(icon, color) in wanted
        ]

    def clear(self):
        self._symbols.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._symbols)
