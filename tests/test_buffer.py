import io
import sys

import pytest

from gost.buffer import Buffer, TooLargeError


def test_buffer_with_peek():
    b = Buffer()
    b.write_string("hello")
    cap_before = b.cap()

    view = b.write_next_begin(100)
    assert len(b) == 5
    assert len(view) == 100
    assert b.cap() > cap_before
    assert b.cap() >= 105

    assert b.write_next_end(99) == 99
    assert len(b) == 104
    assert b.bytes()[:5] == b"hello"


def test_write_next_begin_view_shares_storage():
    b = Buffer()
    b.write_string("hello")
    view = b.write_next_begin(10)
    view[:3] = b"abc"
    assert b.write_next_end(3) == 3
    assert b.bytes() == b"helloabc"


def test_write_next_end_without_begin_raises():
    b = Buffer()
    b.write_string("hi")
    assert b.cap() == 64
    with pytest.raises(ValueError):
        b.write_next_end(63)


def test_write_next_end_negative_returns_zero():
    b = Buffer()
    b.write_string("hi")
    assert b.write_next_end(-1) == 0
    assert len(b) == 2


def test_small_buffer_initial_capacity():
    b = Buffer()
    b.write(b"abc")
    assert b.cap() == 64
    assert b.bytes() == b"abc"


def test_initial_contents():
    b = Buffer(b"abc")
    assert len(b) == 3
    assert b.read(10) == b"abc"
    assert Buffer("héllo").bytes() == "héllo".encode("utf-8")


def test_str_and_bytes():
    b = Buffer()
    b.write_string("héllo")
    assert str(b) == "héllo"
    assert b.bytes() == "héllo".encode("utf-8")


def test_read_then_eof_returns_empty():
    b = Buffer(b"abcdef")
    assert b.read(4) == b"abcd"
    assert b.read(4) == b"ef"
    assert b.read(4) == b""
    assert len(b) == 0


def test_read_negative_raises():
    with pytest.raises(ValueError):
        Buffer(b"a").read(-1)


def test_next():
    b = Buffer(b"abcdef")
    assert b.next(2) == b"ab"
    assert b.next(100) == b"cdef"
    assert b.next(1) == b""


def test_read_byte_and_eof():
    b = Buffer(b"xy")
    assert b.read_byte() == ord("x")
    assert b.read_byte() == ord("y")
    with pytest.raises(EOFError):
        b.read_byte()


def test_unread_byte():
    b = Buffer(b"xy")
    b.read_byte()
    b.unread_byte()
    assert b.read_byte() == ord("x")


def test_unread_byte_after_write_raises():
    b = Buffer(b"xy")
    b.write(b"z")
    with pytest.raises(ValueError):
        b.unread_byte()


def test_read_rune_multibyte():
    b = Buffer()
    b.write_string("aé€😀")
    assert b.read_rune() == ("a", 1)
    assert b.read_rune() == ("é", 2)
    assert b.read_rune() == ("€", 3)
    assert b.read_rune() == ("😀", 4)
    with pytest.raises(EOFError):
        b.read_rune()


def test_read_rune_invalid_encoding():
    b = Buffer(b"\xffa")
    assert b.read_rune() == ("\ufffd", 1)
    assert b.read_rune() == ("a", 1)


def test_read_rune_truncated_sequence():
    b = Buffer(b"\xe2\x82")
    assert b.read_rune() == ("\ufffd", 1)
    assert len(b) == 1


def test_unread_rune():
    b = Buffer()
    b.write_string("€x")
    assert b.read_rune() == ("€", 3)
    b.unread_rune()
    assert b.read_rune() == ("€", 3)
    assert b.read_rune() == ("x", 1)


def test_unread_rune_twice_raises():
    b = Buffer()
    b.write_string("ab")
    b.read_rune()
    b.unread_rune()
    with pytest.raises(ValueError):
        b.unread_rune()


def test_unread_rune_after_read_byte_raises():
    b = Buffer(b"ab")
    b.read_byte()
    with pytest.raises(ValueError):
        b.unread_rune()


def test_write_rune():
    b = Buffer()
    assert b.write_rune(ord("a")) == 1
    assert b.write_rune("é") == 2
    assert b.write_rune(0x20AC) == 3
    assert b.write_rune(0x1F600) == 4
    assert str(b) == "aé€😀"


@pytest.mark.parametrize("code", [-1, 0x110000, 0xD800])
def test_write_rune_invalid_is_replacement(code):
    b = Buffer()
    assert b.write_rune(code) == 3
    assert b.bytes() == "\ufffd".encode("utf-8")


def test_write_byte():
    b = Buffer()
    b.write_byte(0x41)
    b.write_byte(0x42)
    assert b.bytes() == b"AB"
    with pytest.raises(ValueError):
        b.write_byte(256)


def test_read_bytes_and_read_string():
    b = Buffer(b"one\ntwo\nthree")
    assert b.read_bytes(b"\n") == b"one\n"
    assert b.read_string("\n") == "two\n"
    assert b.read_bytes(ord("\n")) == b"three"
    assert b.read_bytes(b"\n") == b""


def test_read_bytes_then_unread_byte():
    b = Buffer(b"ab,cd")
    assert b.read_bytes(b",") == b"ab,"
    b.unread_byte()
    assert b.read_byte() == ord(",")


def test_truncate():
    b = Buffer(b"abcdef")
    b.read(1)
    b.truncate(3)
    assert b.bytes() == b"bcd"
    b.truncate(0)
    assert len(b) == 0


def test_truncate_out_of_range():
    b = Buffer(b"abc")
    with pytest.raises(ValueError):
        b.truncate(4)
    with pytest.raises(ValueError):
        b.truncate(-1)


def test_reset_keeps_capacity():
    b = Buffer()
    b.write(b"x" * 100)
    cap = b.cap()
    b.reset()
    assert len(b) == 0
    assert b.cap() == cap


def test_grow():
    b = Buffer()
    b.write(b"abc")
    b.grow(1000)
    assert b.cap() >= 1003
    assert b.bytes() == b"abc"
    cap = b.cap()
    b.write(b"y" * 1000)
    assert b.cap() == cap
    assert len(b) == 1003


def test_grow_negative_raises():
    with pytest.raises(ValueError):
        Buffer().grow(-1)


def test_grow_too_large():
    b = Buffer(b"x")
    with pytest.raises(TooLargeError):
        b.grow(sys.maxsize)
    assert b.bytes() == b"x"


def test_grow_after_reads_preserves_data():
    b = Buffer()
    b.write(b"0123456789" * 10)
    b.read(95)
    b.write(b"abc")
    assert b.bytes() == b"56789abc"


def test_read_from():
    data = bytes(range(256)) * 8
    b = Buffer()
    b.write(b"head")
    assert b.read_from(io.BytesIO(data)) == len(data)
    assert b.bytes() == b"head" + data


def test_write_to():
    b = Buffer(b"payload")
    out = io.BytesIO()
    assert b.write_to(out) == 7
    assert out.getvalue() == b"payload"
    assert len(b) == 0


class _ShortWriter:
    def write(self, data):
        return len(data) - 2


class _OverWriter:
    def write(self, data):
        return len(data) + 1


def test_write_to_short_write():
    b = Buffer(b"payload")
    with pytest.raises(OSError):
        b.write_to(_ShortWriter())
    assert b.bytes() == b"ad"


def test_write_to_invalid_count():
    with pytest.raises(ValueError):
        Buffer(b"payload").write_to(_OverWriter())


def test_round_trip_many_writes():
    b = Buffer()
    chunks = [bytes([i % 256]) * (i + 1) for i in range(50)]
    for chunk in chunks:
        assert b.write(chunk) == len(chunk)
    assert b.bytes() == b"".join(chunks)
    assert len(b) == sum(len(c) for c in chunks)