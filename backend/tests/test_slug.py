from catalog_admin.utils.slug import SLUG_MAX_LENGTH, slugify, with_suffix


def test_slugify():
    assert slugify("Galaxy S24 Ultra (5G)") == "galaxy-s24-ultra-5g"
    assert slugify("  ***  ") == "product"


def test_long_names_are_cut_to_the_column():
    slug = slugify("word " * 200)
    assert len(slug) <= SLUG_MAX_LENGTH
    assert not slug.endswith("-")


def test_suffix_shortens_the_base():
    base = "a" * SLUG_MAX_LENGTH
    assert with_suffix(base, 2) == "a" * (SLUG_MAX_LENGTH - 2) + "-2"
    assert with_suffix("phone", 12) == "phone-12"
