"""Tests for remote plugin cache keys."""

import hashlib
import re

from plumb.config.models import GitPluginLocation, GitReference
from plumb.plugins.fingerprint import fingerprint, location_fingerprint


class TestFingerprint:
    def test_md5_of_url_and_reference(self):
        expected = hashlib.md5(b"https://url/to/repo/c.git-abc").hexdigest()
        assert fingerprint("https://url/to/repo/c.git", "abc") == expected

    def test_deterministic(self):
        first = fingerprint("https://url/to/repo.git", GitReference.tag("1.0.0"))
        second = fingerprint("https://url/to/repo.git", GitReference.tag("1.0.0"))
        assert first == second

    def test_known_value_stable_across_runs(self):
        # Fixed digest so a change in the key derivation is caught.
        assert fingerprint("https://url/to/repo.git", "1.0.0") == hashlib.md5(
            "https://url/to/repo.git-1.0.0".encode("utf-8")
        ).hexdigest()

    def test_tag_and_sha_with_same_text_share_key(self):
        assert fingerprint("u", GitReference.tag("abc")) == fingerprint("u", GitReference.sha("abc"))

    def test_distinct_inputs_distinct_keys(self):
        keys = {
            fingerprint("https://url/to/repo/a.git", "abc"),
            fingerprint("https://url/to/repo/b.git", "abc"),
            fingerprint("https://url/to/repo/a.git", "abd"),
        }
        assert len(keys) == 3

    def test_path_safe(self):
        key = fingerprint("https://url/to/repo.git?x=/../y", "v1/../../etc")
        assert re.fullmatch(r"[0-9a-f]{32}", key)

    def test_location_ignores_directory_and_release(self):
        base = GitPluginLocation(url="https://url/to/repo.git", reference=GitReference.tag("1.0.0"))
        variant = GitPluginLocation(
            url="https://url/to/repo.git",
            reference=GitReference.tag("1.0.0"),
            directory="Sub",
            release_url="https://example.com/plugin.zip",
        )
        assert location_fingerprint(base) == location_fingerprint(variant)
