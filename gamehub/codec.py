"""Wire format of the game packets: a fixed little-endian header and a body."""

from __future__ import annotations

from dataclasses import dataclass

from gamehub.bytebuffer import BufferUnderflowError, ByteBuffer

HEADER_LEN = 2 + 4 + 4 + 4 + 2 + 4 + 2
"""packageLen(2) + cmd(4) + sendTimer(4) + traceId(4) + sid(2) + seq(4) + bodyLen(2)."""

_MAX_PACKAGE_LEN = 0xFFFF


@dataclass
class Package:
    cmd: int
    send_timer: int
    trace_id: int
    sid: int
    body: bytes = b""
    seq: int = 0

    @property
    def body_len(self) -> int:
        return len(self.body)

    @property
    def package_len(self) -> int:
        return HEADER_LEN + self.body_len

    def __str__(self) -> str:
        return (
            f"{{packageLen:{self.package_len},cmd:{self.cmd},sendTimer:{self.send_timer},"
            f"traceId:{self.trace_id},sid:{self.sid},bodyLen:{self.body_len},body:{self.body!r}}}"
        )


def create_package(cmd: int, trace_id: int, send_timer: int, sid: int, body: bytes) -> Package:
    return Package(cmd=cmd, send_timer=send_timer, trace_id=trace_id, sid=sid, body=bytes(body))


class PackageCodec:
    """Encodes packages to bytes and decodes them from a ByteBuffer."""

    def decode(self, buffer: ByteBuffer) -> Package | None:
        """Read one package, or return None and keep the position if it is incomplete."""
        buffer.mark()
        try:
            package_len = buffer.read_uint16()
            if len(buffer) + 2 < package_len:
                buffer.reset_mark()
                return None
            cmd = buffer.read_int32()
            send_timer = buffer.read_uint32()
            trace_id = buffer.read_int32()
            sid = buffer.read_uint16()
            body_len = buffer.read_uint16()
            buffer.read_int32()
            body = buffer.read_bytes(body_len)
        except BufferUnderflowError:
            buffer.reset_mark()
            return None
        return create_package(cmd, trace_id, send_timer, sid, body)

    def encode(self, package: Package) -> bytes:
        if package.package_len > _MAX_PACKAGE_LEN:
            raise ValueError(f"package too long: {package.package_len} bytes")
        out = ByteBuffer()
        out.write_uint16(package.package_len)
        out.write_int32(package.cmd)
        out.write_uint32(package.send_timer)
        out.write_int32(package.trace_id)
        out.write_uint16(package.sid)
        out.write_uint16(package.body_len)
        out.write_int32(package.seq)
        out.write_bytes(package.body)
        return out.get_bytes()