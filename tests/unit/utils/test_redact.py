"""Tests for utils/redact.py and utils/hashing.py"""

from okgroups.utils import md5_hash, redact


class TestMd5Hash:
    def test_known_value(self):
        assert md5_hash("hello") == "5d41402abc4b2a76b9719d911017c592"

    def test_empty(self):
        assert md5_hash("") == "d41d8cd98f00b204e9800998ecf8427e"


class TestRedact:
    def test_sensitive_keys_masked(self):
        out = redact({
            "application_key": "CTESTAPPKEY",
            "secret_key": "abcdefgh1234",
            "session_key": "short",
            "sig": "0123456789abcdef0123456789abcdef",
            "uid": "42",
        })
        assert out["application_key"] == "CTESTAPPKEY"
        assert out["uid"] == "42"
        assert out["secret_key"] == "<redacted:...1234>"
        assert out["session_key"] == "<redacted>"
        assert out["sig"] == "<redacted:...cdef>"

    def test_sig_is_exact_match_only(self):
        assert redact({"signal": "on"}) == {"signal": "on"}

    def test_non_string_sensitive_value(self):
        assert redact({"token": 12345}) == {"token": "<redacted>"}

    def test_secret_scrubbed_everywhere(self):
        secret = "my-shared-secret"
        out = redact(
            {"url": f"https://x/fb.do?s={secret}", "nested": [{"echo": secret}]},
            secrets=[secret, None, ""],
        )
        assert secret not in repr(out)

    def test_input_not_mutated(self):
        payload = {"sig": "abc", "params": {"secret_key": "x"}}
        redact(payload)
        assert payload == {"sig": "abc", "params": {"secret_key": "x"}}

    def test_nested_dicts(self):
        out = redact({"params": {"session_key": "abcdefghijk"}})
        assert out["params"]["session_key"] == "<redacted:...hijk>"
