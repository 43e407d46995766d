"""
Utility functions for game mechanics
"""

from __future__ import annotations


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aabb_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges don't count)"""
    return (
        ax < bx + bw
        and ax + aw > bx
        and ay < by + bh
        and ay + ah > by
    )

