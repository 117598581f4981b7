import io

from tamboon.cipher import Rot128Reader, Rot128Writer, rot128

TEST_BUFFER = bytes([128, 129, 130])
REVERSE_TEST_BUFFER = bytes([0, 1, 2])


def test_rot128_transforms_bytes():
    assert rot128(TEST_BUFFER) == REVERSE_TEST_BUFFER


def test_rot128_is_its_own_inverse():
    data = bytes(range(256))
    assert rot128(rot128(data)) == data


def test_reader_read():
    reader = Rot128Reader(io.BytesIO(TEST_BUFFER))
    buf = reader.read(3)
    assert len(buf) == 3
    assert buf == REVERSE_TEST_BUFFER


def test_reader_reversible():
    reader = Rot128Reader(Rot128Reader(io.BytesIO(TEST_BUFFER)))
    buf = reader.read(3)
    assert len(buf) == 3
    assert buf == TEST_BUFFER


def test_reader_readinto():
    reader = Rot128Reader(io.BytesIO(TEST_BUFFER))
    buf = bytearray(3)
    n = reader.readinto(buf)
    assert n == 3
    assert bytes(buf) == REVERSE_TEST_BUFFER


def test_reader_supports_buffered_text_lines():
    text = "Name,Amount\nJohn Doe,5000\n"
    encoded = rot128(text.encode())
    stream = io.TextIOWrapper(io.BufferedReader(Rot128Reader(io.BytesIO(encoded))))
    assert stream.read().splitlines() == ["Name,Amount", "John Doe,5000"]


def test_reader_at_end_returns_empty():
    reader = Rot128Reader(io.BytesIO(b""))
    assert reader.read(10) == b""


def test_writer_write():
    buf = io.BytesIO()
    writer = Rot128Writer(buf)
    n = writer.write(TEST_BUFFER)
    assert n == 3
    assert buf.getvalue() == REVERSE_TEST_BUFFER


def test_writer_reversible():
    buf = io.BytesIO()
    writer = Rot128Writer(Rot128Writer(buf))
    n = writer.write(TEST_BUFFER)
    assert n == 3
    assert buf.getvalue() == TEST_BUFFER


def test_writer_then_reader_round_trip(tmp_path):
    path = tmp_path / "data.rot128"
    payload = b"Name,AmountSubunits\n" * 500
    with open(path, "wb") as handle:
        Rot128Writer(handle).write(payload)
    assert path.read_bytes() != payload
    with open(path, "rb") as handle:
        assert Rot128Reader(handle).read() == payload