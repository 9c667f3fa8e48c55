"""
Geometry and collision helpers for the shooter simulation
"""

from __future__ import annotations
import random
from typing import NamedTuple, Optional
import numpy as np


class AABB(NamedTuple):
    """Axis-aligned box, top-left anchored (y grows downwards)"""
    x: float
    y: float
    w: float
    h: float


class Circle(NamedTuple):
    """Circle given by its center and radius"""
    x: float
    y: float
    r: float


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rect_overlap(a: AABB, b: AABB) -> bool:
    """Check if two boxes overlap (touching edges do not count)"""
    return (
        a.x < b.x + b.w
        and a.x + a.w > b.x
        and a.y < b.y + b.h
        and a.y + a.h > b.y
    )


def circle_rect_overlap(c: Circle, r: AABB) -> bool:
    """
    Check a circle against a box.

    The circle is expanded to its bounding box, so corners count as hits.
    Callers pass the unscaled hit radius, never the drawn one.
    """
    return (
        c.x + c.r > r.x
        and c.x - c.r < r.x + r.w
        and c.y + c.r > r.y
        and c.y - c.r < r.y + r.h
    )


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
