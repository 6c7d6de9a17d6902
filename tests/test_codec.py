import pytest

from gamehub.bytebuffer import ByteBuffer
from gamehub.codec import HEADER_LEN, Package, PackageCodec, create_package


def test_empty_body_encodes_to_header_only():
    pack = create_package(1, 0, 0, 0, b"")
    data = PackageCodec().encode(pack)
    assert pack.package_len == 22
    assert len(data) == 22
    assert len(data) == HEADER_LEN


def test_encode_length_and_prefix():
    pack = create_package(100, 1, 2, 3, b"hello")
    data = PackageCodec().encode(pack)
    assert len(data) == HEADER_LEN + len(b"hello")
    assert int.from_bytes(data[:2], "little") == pack.package_len
    assert data.endswith(b"hello")


def test_round_trip():
    codec = PackageCodec()
    pack = create_package(10000, 7, 123456, 9, b"\x01\x02\x03")
    decoded = codec.decode(ByteBuffer(codec.encode(pack)))
    assert decoded == pack


def test_incomplete_then_complete():
    codec = PackageCodec()
    data = codec.encode(create_package(100, 1, 2, 3, b"body"))
    buffer = ByteBuffer(data[:10])
    assert codec.decode(buffer) is None
    assert len(buffer) == 10
    buffer.write_bytes(data[10:])
    assert codec.decode(buffer).body == b"body"


def test_two_packages_in_sequence():
    codec = PackageCodec()
    first = create_package(1, 1, 1, 1, b"a")
    second = create_package(2, 2, 2, 2, b"bb")
    buffer = ByteBuffer(codec.encode(first) + codec.encode(second))
    assert codec.decode(buffer) == first
    assert codec.decode(buffer) == second
    assert codec.decode(buffer) is None


def test_empty_buffer():
    assert PackageCodec().decode(ByteBuffer()) is None


def test_too_long_body_rejected():
    pack = Package(cmd=1, send_timer=0, trace_id=0, sid=0, body=b"x" * 0xFFFF)
    with pytest.raises(ValueError):
        PackageCodec().encode(pack)