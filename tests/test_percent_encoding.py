import re

import pytest

from rawtweet.oauth.encoding import percent_decode, percent_encode

_ENCODED = re.compile(r"^[A-Za-z0-9\-._~%]*$")


def test_unreserved_characters_pass_through():
    s = "ABCxyz0189-._~"
    assert percent_encode(s) == s


def test_reserved_url_characters_are_escaped():
    assert percent_encode("a b/c:d=e&f") == "a%20b%2Fc%3Ad%3De%26f"
    assert percent_encode("!*'()") == "%21%2A%27%28%29"
    assert percent_encode("+,;@[]^|$%") == "%2B%2C%3B%40%5B%5D%5E%7C%24%25"
    assert percent_encode('"#<>?`{}\\') == "%22%23%3C%3E%3F%60%7B%7D%5C"


def test_utf8_bytes_use_uppercase_hex():
    assert percent_encode("é") == "%C3%A9"
    assert percent_encode("☃") == "%E2%98%83"


def test_url_is_encoded_as_a_whole():
    assert percent_encode("https://api.twitter.com/1.1/test.json") == (
        "https%3A%2F%2Fapi.twitter.com%2F1.1%2Ftest.json"
    )


@pytest.mark.parametrize(
    "value",
    [
        "",
        "plain",
        "Hello Ladies + Gentlemen, a signed OAuth request!",
        "q=a b&lang=ja",
        "日本語のツイート",
        "100% ~ tilde\n\ttabs",
    ],
)
def test_output_alphabet_and_decoding(value):
    encoded = percent_encode(value)
    assert _ENCODED.match(encoded)
    assert percent_decode(encoded) == value
