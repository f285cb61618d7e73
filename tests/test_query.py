from urllib.parse import unquote

from hypothesis import given, strategies as st

from lisk_sdk.utils.query import serialise_http_data, to_query_string, trim


def test_trimmed_params_serialize_in_insertion_order():
    params = {"obj": " myval", "key": "my2ndval "}
    assert to_query_string(trim(params)) == "obj=myval&key=my2ndval"


def test_empty_mapping_is_empty_string():
    assert to_query_string({}) == ""
    assert serialise_http_data({}) == "?"


def test_keys_use_component_encoding_values_keep_reserved():
    out = to_query_string({"a b/c": "x/y z"})
    assert out == "a%20b%2Fc=x/y%20z"


def test_scalars_render_like_the_node_expects():
    assert to_query_string({"flag": True, "other": False}) == "flag=true&other=false"
    assert to_query_string({"ids": ["1", "2"]}) == "ids=1,2"


def test_trim_walks_nested_values_and_stringifies_numbers():
    src = {" k ": [" a ", 3], "n": {" inner ": 5.0}, "f": 2.5, "b": True}
    out = trim(src)
    assert out == {"k": ["a", "3"], "n": {"inner": "5"}, "f": 2.5, "b": True}
    # input untouched
    assert src == {" k ": [" a ", 3], "n": {" inner ": 5.0}, "f": 2.5, "b": True}


def test_serialise_http_data_prefixes_question_mark():
    assert serialise_http_data({"limit": 5, "offset": " 3"}) == "?limit=5&offset=3"


_values = st.recursive(
    st.one_of(st.text(), st.integers(), st.booleans()),
    lambda inner: st.one_of(
        st.lists(inner, max_size=4),
        st.dictionaries(st.text(max_size=8), inner, max_size=4),
    ),
    max_leaves=12,
)


@given(st.dictionaries(st.text(max_size=12), _values, max_size=6))
def test_trim_is_idempotent(params):
    once = trim(params)
    assert trim(once) == once


@given(st.dictionaries(st.text(max_size=12), st.text(max_size=12), max_size=6))
def test_trimmed_strings_have_no_outer_whitespace(params):
    for key, value in trim(params).items():
        assert key == key.strip()
        assert value == value.strip()


@given(st.text(min_size=1, max_size=20))
def test_encoded_key_decodes_back(key):
    encoded = to_query_string({key: "v"}).rsplit("=", 1)[0]
    assert "&" not in encoded and "=" not in encoded
    assert unquote(encoded) == key
