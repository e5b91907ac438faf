"""Parsing of the compact ``KEY:QTY,KEY:QTY`` option values."""

from __future__ import annotations

import click


def parse_pairs(raw: str | None, what: str = "item") -> list[tuple[str, int]]:
    """Parse 'A:3,B:5' into [('A', 3), ('B', 5)]."""
    if not raw:
        return []
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid {what} format '{pair}'. Expected 'KEY:QUANTITY'."
            )
        key, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for {what} '{key}'."
            )
        pairs.append((key.strip(), qty))
    return pairs
