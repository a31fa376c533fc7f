import itertools
import pytest
from authstore.storage import ConfigurationError, ObjectKeyResolver, fix_file_name, quote_file_name
from authstore.storage.keys import creds_key, signal_key

SAMPLE_KEYS = [
    "creds.json",
    "session-123@s.whatsapp.net:4.json",
    "sender-key-group/abc:1.json",
    "a/b", "a__b", "a:b", "a-b", "a%2Fb", "a%b", "/", "//", "::", "",
    "app-state-sync-key-AAAAAQ==.json",
]


@pytest.mark.parametrize("key", SAMPLE_KEYS)
def test_sanitized_keys_have_no_separators(key):
    for encode in (fix_file_name, quote_file_name):
        out = encode(key)
        assert "/" not in out
        assert ":" not in out


def test_legacy_substitution():
    assert fix_file_name("sender-key-g/1:2.json") == "sender-key-g__1-2.json"
    assert fix_file_name(None) == ""
    assert fix_file_name("") == ""


def test_legacy_encoding_collides():
    # the historical layout is not injective
    assert fix_file_name("a/b") == fix_file_name("a__b")
    assert fix_file_name("a:b") == fix_file_name("a-b")


def test_quoted_encoding_is_injective():
    alphabet = ["a", "/", ":", "_", "-", "%", "2F"]
    keys = {"".join(p) for n in range(1, 4) for p in itertools.product(alphabet, repeat=n)}
    encoded = {quote_file_name(k) for k in keys}
    assert len(encoded) == len(keys)


def test_resolver_prefixes():
    assert ObjectKeyResolver("bot/").resolve("pre-key-1.json") == "bot/pre-key-1.json"
    assert ObjectKeyResolver().resolve(None) == ""
    assert ObjectKeyResolver("p-", "quoted").resolve("a/b") == "p-a%2Fb"


def test_resolver_rejects_unknown_encoding():
    with pytest.raises(ConfigurationError):
        ObjectKeyResolver("", "base32")


def test_logical_key_names():
    assert creds_key() == "creds.json"
    assert signal_key("pre-key", 5) == "pre-key-5.json"
