"""Registered post types and the taxonomies attached to them."""

from seeder.models.attribute import ATTRIBUTE_TAXONOMY_PREFIX

# post type -> (label, taxonomies)
POST_TYPES: dict[str, tuple[str, list[str]]] = {
    "post": ("Posts", ["category", "post_tag", "post_format"]),
    "page": ("Pages", []),
}

# Products live in their own table but share the term storage.
PRODUCT_TAXONOMIES = ["product_cat", "product_tag"]

# Taxonomies that are not meant to be seeded with dummy terms.
EXCLUDED_TAXONOMIES = {"post_format"}


def get_post_types() -> dict[str, str]:
    return {name: label for name, (label, _) in POST_TYPES.items()}


def search_post_types(search: str = "") -> dict[str, str]:
    """Post types whose name contains ``search``, mapped to their labels."""
    return {name: label for name, label in get_post_types().items() if search in name}


def get_taxonomies_for_post_type(post_type: str) -> list[str]:
    _, taxonomies = POST_TYPES.get(post_type, ("", []))
    return [taxonomy for taxonomy in taxonomies if taxonomy not in EXCLUDED_TAXONOMIES]


def is_known_taxonomy(taxonomy: str) -> bool:
    """Registered taxonomies plus any ``pa_<slug>`` attribute taxonomy."""
    registered = {t for _, taxonomies in POST_TYPES.values() for t in taxonomies}
    registered.update(PRODUCT_TAXONOMIES)
    return taxonomy in registered or taxonomy.startswith(ATTRIBUTE_TAXONOMY_PREFIX)
