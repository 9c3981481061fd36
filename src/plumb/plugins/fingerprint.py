"""Cache keys for remote plugins."""

import hashlib

from plumb.config.models import GitPluginLocation, GitReference


def fingerprint(url: str, reference: GitReference | str) -> str:
    """Return the cache key for ``url`` pinned at ``reference``.

    md5 of ``"{url}-{reference}"``, hex encoded. Tag and SHA references
    with the same string produce the same key.
    """
    return hashlib.md5(f"{url}-{reference}".encode("utf-8")).hexdigest()


def location_fingerprint(location: GitPluginLocation) -> str:
    return fingerprint(location.url, location.reference)
