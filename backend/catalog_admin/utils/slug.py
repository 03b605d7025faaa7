import re

SLUG_MAX_LENGTH = 500

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(name: str, fallback: str = "product") -> str:
    """'Galaxy S24 Ultra (5G)' -> 'galaxy-s24-ultra-5g'"""
    slug = _NON_SLUG.sub("-", (name or "").lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-") or fallback


def with_suffix(slug: str, n: int) -> str:
    """slug-n, shortening slug so the result still fits SLUG_MAX_LENGTH."""
    suffix = f"-{n}"
    return slug[: SLUG_MAX_LENGTH - len(suffix)].rstrip("-") + suffix
