# /autoblogger/services/slug_service.py

"""
Turns raw request paths into canonical article slugs, and slugs back into a
readable title when the provider cannot supply one.
"""

ROBOTS_PATH = "robots.txt"
FAVICON_PATH = "favicon.ico"

_SEPARATORS = (".", "_", "/")


def strip_route(path: str) -> str:
    """Drops a single leading '/' and any surrounding whitespace."""
    if path.startswith("/"):
        path = path[1:]
    return path.strip()


def normalize_slug(path: str) -> str:
    """
    Maps an arbitrary request path to its canonical cache key.

    The empty string is a valid result and stands for the list view.
    """
    slug = strip_route(path)
    for separator in _SEPARATORS:
        slug = slug.replace(separator, "-")
    return slug.lower()


def unslugify(slug: str) -> str:
    """Replaces hyphens with spaces and keeps only alphanumerics and whitespace."""
    return "".join(c for c in slug.replace("-", " ") if c.isalnum() or c.isspace())


def _ascii_upper(c: str) -> str:
    return c.upper() if c.isascii() else c


def _ascii_lower(c: str) -> str:
    return c.lower() if c.isascii() else c


def capitalize_words(text: str) -> str:
    """
    Upper-cases the first letter of every word and lower-cases the rest.
    Only ASCII letters change case, so the title keeps its length.
    """
    result = []
    capitalize_next = True
    for c in text:
        if c.isspace():
            capitalize_next = True
            result.append(c)
        elif capitalize_next:
            result.append(_ascii_upper(c))
            capitalize_next = False
        else:
            result.append(_ascii_lower(c))
    return "".join(result)


def fallback_title(slug: str) -> str:
    return capitalize_words(unslugify(slug))
