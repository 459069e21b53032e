"""Human-readable relationship labels from relationship paths.

A path is the list of hops taken from the source person to the relative:
"parent" (step up to a parent), "child" (step down to a child) and
"spouse". The blood part of a path is read as ``up`` parent hops followed by
``down`` child hops; a spouse hop at either end turns the label into an
in-law form. Examples (label is the relative relative to the source):

    ["parent"]                              -> "Parent"
    ["parent", "child"]                     -> "Sibling"
    ["parent", "parent", "child", "child"]  -> "1st Cousin"
    ["spouse", "parent"]                    -> "Parent-in-law"
    ["spouse", "parent", "parent"]          -> "Grandparent of Spouse"
    ["parent", "child", "spouse"]           -> "Sibling-in-law"

Paths with a spouse hop in the middle, or that step down before stepping up,
fall back to coarse distance buckets.
"""

from collections.abc import Sequence

from .constants import HOP_CHILD, HOP_PARENT, HOP_SPOUSE


def ordinal(n: int) -> str:
    if 10 <= (n % 100) <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _removed(times: int) -> str:
    if times == 1:
        return " Once Removed"
    if times == 2:
        return " Twice Removed"
    return f" {times} Times Removed"


def _direct_line(generations: int, base: str) -> str:
    """Parent, Grandparent, Great-Grandparent, 2nd Great-Grandparent, ..."""
    if generations == 1:
        return base.capitalize()
    if generations == 2:
        return f"Grand{base}"
    if generations == 3:
        return f"Great-Grand{base}"
    return f"{ordinal(generations - 2)} Great-Grand{base}"


def blood_label(up: int, down: int) -> str:
    """Label for a relative reached by ``up`` parent hops then ``down`` child hops."""
    if up < 0 or down < 0:
        raise ValueError("up and down must be non-negative integers")

    if up == 0 and down == 0:
        return "Self"
    if down == 0:
        return _direct_line(up, "parent")
    if up == 0:
        return _direct_line(down, "child")
    if up == 1 and down == 1:
        return "Sibling"
    if up == 1:
        # sibling's descendants
        if down == 2:
            return "Niece/Nephew"
        return "Great-" * (down - 3) + "Grand-Niece/Nephew"
    if down == 1:
        # ancestors' siblings
        return "Great-" * (up - 2) + "Aunt/Uncle"

    degree = min(up, down) - 1
    removed = abs(up - down)
    label = f"{ordinal(degree)} Cousin"
    if removed:
        label += _removed(removed)
    return label


def _split_blood(hops: Sequence[str]) -> tuple[int, int] | None:
    """Return (up, down) if hops are parent* child*, else None."""
    up = 0
    while up < len(hops) and hops[up] == HOP_PARENT:
        up += 1
    down = 0
    while up + down < len(hops) and hops[up + down] == HOP_CHILD:
        down += 1
    if up + down != len(hops):
        return None
    return up, down


def _fallback(distance: int) -> str:
    if distance <= 2:
        return "Close Family"
    if distance <= 4:
        return "Extended Family"
    return "Distant Relative"


def relationship_label(hops: Sequence[str]) -> str:
    """Render a hop sequence as a human-readable relationship label."""
    if not hops:
        return "Self"
    if list(hops) == [HOP_SPOUSE]:
        return "Spouse"

    leading_spouse = hops[0] == HOP_SPOUSE
    trailing_spouse = len(hops) > 1 and hops[-1] == HOP_SPOUSE
    core = hops[int(leading_spouse) : len(hops) - int(trailing_spouse)]

    if list(core) == [HOP_CHILD, HOP_PARENT] and not (leading_spouse or trailing_spouse):
        return "Co-parent"

    split = _split_blood(core)
    if split is None or split == (0, 0):
        return _fallback(len(hops))
    up, down = split
    label = blood_label(up, down)

    if leading_spouse and trailing_spouse:
        return f"Spouse of {label} of Spouse"
    if leading_spouse:
        if (up, down) == (1, 0):
            return "Parent-in-law"
        if (up, down) == (1, 1):
            return "Sibling-in-law"
        if (up, down) == (0, 1):
            return "Stepchild"
        return f"{label} of Spouse"
    if trailing_spouse:
        if (up, down) == (0, 1):
            return "Child-in-law"
        if (up, down) == (1, 1):
            return "Sibling-in-law"
        if (up, down) == (1, 0):
            return "Step-parent"
        return f"Spouse of {label}"
    return label
