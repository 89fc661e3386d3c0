"""
Laser Reveal — Highlight Registry
Every highlight is a function: (ctx: Context2D, params: HighlightParams) -> None
It decorates the reveal edge only; the engine reveals correctly without one.
"""

from highlights.laser import render_laser, render_edge

# Master registry: name -> {fn, description}
HIGHLIGHTS = {
    "laser": {
        "fn": render_laser,
        "description": "Warm glowing laser bar with a jittering spark",
    },
    "edge": {
        "fn": render_edge,
        "description": "Thin white line at the reveal edge",
    },
    "none": {
        "fn": None,
        "description": "No highlight",
    },
}


def get_highlight(name: str):
    """Get a highlight function by name ("none" -> None).

    Raises ValueError if the highlight doesn't exist.
    """
    if name not in HIGHLIGHTS:
        available = ", ".join(sorted(HIGHLIGHTS.keys()))
        raise ValueError(f"Unknown highlight: {name}. Available: {available}")
    return HIGHLIGHTS[name]["fn"]


def list_highlights() -> list[dict]:
    return [
        {"name": name, "description": entry["description"]}
        for name, entry in HIGHLIGHTS.items()
    ]
