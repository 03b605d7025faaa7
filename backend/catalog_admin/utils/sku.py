import re
from typing import Optional, Sequence, Set

SKU_SEPARATOR = "-"
SKU_MAX_LENGTH = 255
OPTION_PART_LENGTH = 12
COLOR_PART_LENGTH = 3

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def sanitize_part(value: Optional[str], length: int) -> str:
    if not value:
        return ""
    return _NON_ALNUM.sub("", value).upper()[:length]


def _fit(base: str, suffix: str = "") -> str:
    # keep the product prefix, give up trailing option parts first
    return base[: SKU_MAX_LENGTH - len(suffix)].rstrip(SKU_SEPARATOR) + suffix


def build_sku(
    product_id: int, option_names: Sequence[str], color_name: Optional[str] = None
) -> str:
    """
    Human readable SKU for one combination, e.g. P12-128GB-8GBRAM-BLA.

    Option names keep up to 12 alphanumerics, the color its first 3.
    Parts that sanitize to nothing are dropped. Keys longer than
    SKU_MAX_LENGTH are cut from the end.
    """
    parts = [f"P{product_id}"]
    parts.extend(sanitize_part(name, OPTION_PART_LENGTH) for name in option_names)
    parts.append(sanitize_part(color_name, COLOR_PART_LENGTH))
    return _fit(SKU_SEPARATOR.join(p for p in parts if p))


class SkuKeyGenerator:
    """
    Issues SKUs for a single product and guarantees they are pairwise distinct.

    When two combinations sanitize to the same key ("Blue" and "Blush" both
    become BLU) the later one gets the first free numeric suffix: -2, -3, ...
    Keys depend only on the call order, so a fixed input gives fixed SKUs.
    """

    def __init__(self, product_id: int):
        self.product_id = product_id
        self._issued: Set[str] = set()

    def next_key(
        self, option_names: Sequence[str], color_name: Optional[str] = None
    ) -> str:
        base = build_sku(self.product_id, option_names, color_name)
        key = base
        n = 2
        while key in self._issued:
            key = _fit(base, f"{SKU_SEPARATOR}{n}")
            n += 1
        self._issued.add(key)
        return key

    def __len__(self):
        return len(self._issued)
