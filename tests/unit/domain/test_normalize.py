"""Unit tests for profile value normalization."""

import hashlib

import pytest

from domain.normalize import gravatar_url, normalize_url, split_skills


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "raw",
        [
            "example.com/me",
            "www.example.com/me",
            "http://example.com/me",
            "https://www.Example.com/me/",
            "HTTPS://EXAMPLE.COM:443/me",
        ],
    )
    def test_equivalent_forms_share_canonical_url(self, raw: str) -> None:
        assert normalize_url(raw) == "https://example.com/me"

    def test_keeps_non_default_port_and_query(self) -> None:
        assert normalize_url("example.com:8080/a?b=1") == "https://example.com:8080/a?b=1"

    def test_blank_returns_empty(self) -> None:
        assert normalize_url("   ") == ""

    @pytest.mark.parametrize("raw", ["example.com:abc", "example.com:99999", "http://[::1"])
    def test_malformed_url_raises_value_error(self, raw: str) -> None:
        with pytest.raises(ValueError):
            normalize_url(raw)



class TestSplitSkills:
    def test_splits_and_trims_string(self) -> None:
        assert split_skills(" HTML, CSS ,JavaScript ") == ["HTML", "CSS", "JavaScript"]

    def test_drops_blank_entries(self) -> None:
        assert split_skills("Python,, ,Go") == ["Python", "Go"]

    def test_list_passes_through_unchanged(self) -> None:
        skills = [" js ", ""]

        assert split_skills(skills) == [" js ", ""]


class TestGravatarUrl:
    def test_hash_ignores_case_and_whitespace(self) -> None:
        assert gravatar_url(" Jane@Example.com") == gravatar_url("jane@example.com")

    def test_url_format(self) -> None:
        digest = hashlib.md5(b"jane@example.com").hexdigest()

        assert gravatar_url("jane@example.com") == (
            f"https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"
        )
