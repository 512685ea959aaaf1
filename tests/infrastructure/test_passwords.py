"""Tests for password hashing."""

from __future__ import annotations

from bankctl.infrastructure.passwords import ALGORITHM, hash_password, verify_password


class TestHashPassword:
    def test_format(self) -> None:
        stored = hash_password("Correct-Horse-42!", iterations=1000)
        algorithm, iterations, salt, digest = stored.split("$")
        assert algorithm == ALGORITHM
        assert iterations == "1000"
        assert len(salt) == 32
        assert len(digest) == 64

    def test_salted(self) -> None:
        assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)

    def test_plaintext_not_stored(self) -> None:
        assert "Correct-Horse-42!" not in hash_password("Correct-Horse-42!", iterations=1000)


class TestVerifyPassword:
    def test_roundtrip(self) -> None:
        stored = hash_password("Correct-Horse-42!", iterations=1000)
        assert verify_password("Correct-Horse-42!", stored)

    def test_wrong_password(self) -> None:
        stored = hash_password("Correct-Horse-42!", iterations=1000)
        assert not verify_password("Correct-Horse-43!", stored)

    def test_malformed_hash(self) -> None:
        assert not verify_password("anything", "not-a-hash")
        assert not verify_password("anything", "pbkdf2_sha256$x$zz$00")

    def test_unknown_algorithm(self) -> None:
        stored = hash_password("secret", iterations=1000).replace(ALGORITHM, "md5", 1)
        assert not verify_password("secret", stored)
