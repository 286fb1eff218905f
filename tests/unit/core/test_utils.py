"""
Tests for request building utilities.
"""

import pytest

from globalpost_client.core.utils import (
    append_query,
    build_query,
    encode_path_segment,
    has_header,
    join_url,
    merge_headers,
)


class TestBuildQuery:
    def test_scalars(self):
        assert build_query({"from_country": "UA", "to_country": "US", "weight": 1200}) == (
            "from_country=UA&to_country=US&weight=1200"
        )

    def test_rfc3986_encoding(self):
        assert build_query({"q": "a b+c/d~e"}) == "q=a%20b%2Bc%2Fd~e"

    def test_unicode(self):
        assert build_query({"city": "Київ"}) == "city=%D0%9A%D0%B8%D1%97%D0%B2"

    def test_arrays_use_indexed_brackets(self):
        assert build_query({"a": "x", "b": [1, 2]}) == "a=x&b%5B0%5D=1&b%5B1%5D=2"

    def test_nested_mapping(self):
        assert build_query({"dims": {"w": 10, "h": 20}}) == "dims%5Bw%5D=10&dims%5Bh%5D=20"

    def test_booleans_and_floats(self):
        assert build_query({"cod": True, "ins": False, "w": 1.0, "v": 0.5}) == "cod=1&ins=0&w=1&v=0.5"

    def test_drops_none_and_objects(self):
        assert build_query({"a": None, "b": object(), "c": "kept"}) == "c=kept"

    def test_drops_objects_inside_arrays(self):
        assert build_query({"a": [1, object(), None, 2]}) == "a%5B0%5D=1&a%5B3%5D=2"

    @pytest.mark.parametrize("params", [None, {}])
    def test_empty(self, params):
        assert build_query(params) == ""

    def test_empty_string_value_kept(self):
        assert build_query({"note": ""}) == "note="


class TestUrlHelpers:
    def test_encode_path_segment(self):
        assert encode_path_segment("ORDER-42") == "ORDER-42"
        assert encode_path_segment("a/b c") == "a%2Fb%20c"
        assert encode_path_segment(42) == "42"

    @pytest.mark.parametrize("base,path", [
        ("https://api.globalpost.com.ua", "/api/x"),
        ("https://api.globalpost.com.ua/", "/api/x"),
        ("https://api.globalpost.com.ua", "api/x"),
    ])
    def test_join_url(self, base, path):
        assert join_url(base, path) == "https://api.globalpost.com.ua/api/x"

    def test_append_query(self):
        assert append_query("https://h/p", "") == "https://h/p"
        assert append_query("https://h/p", "a=1") == "https://h/p?a=1"
        assert append_query("https://h/p?x=0", "a=1") == "https://h/p?x=0&a=1"


class TestHeaders:
    def test_merge_replaces_case_insensitively(self):
        merged = merge_headers(
            {"Authorization": "Bearer t", "Accept": "application/json"},
            {"ACCEPT": "application/pdf", "X-Extra": "1"},
        )

        assert merged == {"Authorization": "Bearer t", "ACCEPT": "application/pdf", "X-Extra": "1"}

    def test_merge_without_overrides(self):
        base = {"Accept": "application/json"}

        merged = merge_headers(base, None)

        assert merged == base
        assert merged is not base

    def test_has_header(self):
        assert has_header({"content-type": "x"}, "Content-Type")
        assert not has_header({"Accept": "x"}, "Content-Type")
