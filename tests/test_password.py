"""Tests for bcrypt password hashing."""

from auth.password import dummy_hash, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_verifies(self):
        digest = hash_password("s3cret!", rounds=4)
        assert verify_password("s3cret!", digest)

    def test_wrong_password_rejected(self):
        digest = hash_password("s3cret!", rounds=4)
        assert not verify_password("s3cret?", digest)

    def test_same_password_gets_different_salt(self):
        first = hash_password("shared-password", rounds=4)
        second = hash_password("shared-password", rounds=4)
        assert first != second
        assert verify_password("shared-password", first)
        assert verify_password("shared-password", second)

    def test_digest_does_not_contain_plaintext(self):
        digest = hash_password("plain-text-pw", rounds=4)
        assert "plain-text-pw" not in digest
        assert digest.startswith("$2")

    def test_malformed_digest_returns_false(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    def test_long_passwords_use_first_72_bytes(self):
        base = "x" * 72
        digest = hash_password(base + "tail-one", rounds=4)
        assert verify_password(base + "tail-two", digest)

    def test_dummy_hash_is_a_real_digest_that_rejects_input(self):
        digest = dummy_hash(4)
        assert digest is dummy_hash(4)
        assert not verify_password("anything", digest)
