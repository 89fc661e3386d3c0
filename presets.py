"""
Laser Reveal -- Built-in Presets
Named option sets for common looks. Each preset is a partial
LaserOptions dict plus the highlight to use.
"""

BUILT_IN_PRESETS = [
    {
        "name": "Scanner",
        "description": "Classic left-to-right laser sweep in chunky cells.",
        "options": {"cell_size": 32, "duration_ms": 6000, "order_mode": "ltr",
                    "highlight_enabled": True},
        "highlight": "laser",
    },
    {
        "name": "Printer",
        "description": "Print-head zigzag, fine cells, fast.",
        "options": {"cell_size": 12, "duration_ms": 4000, "order_mode": "zigzag",
                    "highlight_enabled": True},
        "highlight": "laser",
    },
    {
        "name": "Mirror Scan",
        "description": "Right-to-left sweep over a black backdrop.",
        "options": {"cell_size": 24, "duration_ms": 5000, "order_mode": "rtl",
                    "background_color": "black", "highlight_enabled": True},
        "highlight": "edge",
    },
    {
        "name": "Mosaic",
        "description": "Tiles pop in at random. No highlight.",
        "options": {"cell_size": 20, "duration_ms": 3000, "order_mode": "random",
                    "highlight_enabled": False},
        "highlight": "none",
    },
    {
        "name": "Slow Burn",
        "description": "Large cells, long reveal, warm glow.",
        "options": {"cell_size": 64, "duration_ms": 15000, "order_mode": "ltr",
                    "background_color": "#101010", "highlight_enabled": True},
        "highlight": "laser",
    },
]


def get_preset(name: str) -> dict | None:
    """Look up a preset by name (case-insensitive)."""
    name_lower = name.lower()
    for preset in BUILT_IN_PRESETS:
        if preset["name"].lower() == name_lower:
            return preset
    return None


def list_preset_names() -> list[str]:
    """Return all preset names."""
    return [p["name"] for p in BUILT_IN_PRESETS]
