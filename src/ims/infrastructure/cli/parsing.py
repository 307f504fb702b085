"""Option parsing shared by the CLI commands."""

from __future__ import annotations

import click


def parse_pairs(raw: str) -> list[tuple[str, int]]:
    """Parse 'PAN:2,QUESO:1' into [("PAN", 2), ("QUESO", 1)]."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        pairs.append((product_id.strip(), qty))
    return pairs
