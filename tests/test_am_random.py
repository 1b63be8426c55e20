"""Tests for the secure random source."""
import pytest

from am_e2ee.client import am_random
from am_e2ee.client.am_errors import RandomGenerationFailure
from am_e2ee.client.am_random import SecureRandom, random_bytes


class TestSecureRandom:
    """Test suite for SecureRandom."""

    def test_fill_random_overwrites_whole_buffer(self, monkeypatch):
        monkeypatch.setattr(am_random.os, "urandom", lambda n: b"\xa5" * n)
        buffer = bytearray(64)

        SecureRandom().fill_random(buffer)

        assert buffer == bytearray(b"\xa5" * 64)

    def test_fill_random_keeps_length(self):
        first = bytearray(64)
        second = bytearray(64)

        SecureRandom().fill_random(first)
        SecureRandom().fill_random(second)

        assert len(first) == len(second) == 64
        assert first != second

    def test_fill_random_empty_buffer(self):
        buffer = bytearray()

        SecureRandom().fill_random(buffer)

        assert buffer == bytearray()

    @pytest.mark.parametrize("error", [OSError, NotImplementedError])
    def test_fill_random_failure(self, monkeypatch, error):
        def _urandom(n):
            raise error("no entropy")

        monkeypatch.setattr(am_random.os, "urandom", _urandom)

        with pytest.raises(RandomGenerationFailure):
            SecureRandom().fill_random(bytearray(16))


class TestRandomBytes:
    """Test suite for random_bytes."""

    def test_draws_requested_length(self, make_random):
        source = make_random(start=7)

        assert random_bytes(source, 4) == bytes([7, 8, 9, 10])
        assert source.bytes_drawn == 4
