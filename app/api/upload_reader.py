"""Reads the uploaded file straight from the request stream into memory.

Nothing is spooled to disk. The file part is capped at the upload ceiling
plus one byte, which is enough for the classifier to see it is too large,
and the rest of the body is never read.
"""

from dataclasses import dataclass, field

from python_multipart.exceptions import FormParserError
from python_multipart.multipart import MultipartParser, parse_options_header
from starlette.requests import Request

MULTIPART_OVERHEAD_BYTES = 64 * 1024


class MalformedUploadError(Exception):
    """Raised when the request body is not a readable multipart form."""


class BodyTooLargeError(Exception):
    """Raised when the request body cannot fit under the upload ceiling."""

    def __init__(self, size_bytes: int) -> None:
        super().__init__(f"Request body of at least {size_bytes} bytes")
        self.size_bytes = size_bytes


@dataclass(frozen=True)
class UploadPart:
    filename: str
    content_type: str
    content: bytes = field(repr=False)


def _decode(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.decode("latin-1")


class _FilePartCollector:
    """Multipart callbacks that keep the first file sent under one field name."""

    def __init__(self, field_name: str, max_bytes: int) -> None:
        self._field_name = field_name
        self._max_bytes = max_bytes
        self._header_name = b""
        self._header_value = b""
        self._headers: dict[bytes, bytes] = {}
        self._capturing = False
        self._buffer = bytearray()
        self.filename: str | None = None
        self.content_type = ""
        self.complete = False

    @property
    def started(self) -> bool:
        return self.filename is not None

    @property
    def full(self) -> bool:
        return len(self._buffer) >= self._max_bytes

    @property
    def content(self) -> bytes:
        return bytes(self._buffer)

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
        }

    def on_part_begin(self) -> None:
        self._headers = {}

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_name += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_name.strip().lower()] = self._header_value.strip()
        self._header_name = b""
        self._header_value = b""

    def on_headers_finished(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition"))
        name = options.get(b"name")
        if name is None:
            raise MalformedUploadError("Multipart part without a field name")
        filename = options.get(b"filename")
        # Only the first file under the field counts. Other parts are skipped.
        if self.started or filename is None or _decode(name) != self._field_name:
            return
        self._capturing = True
        self.filename = _decode(filename)
        self.content_type = _decode(self._headers.get(b"content-type", b""))

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        if not self._capturing:
            return
        room = self._max_bytes - len(self._buffer)
        if room > 0:
            self._buffer += data[start:min(end, start + room)]

    def on_part_end(self) -> None:
        if self._capturing:
            self._capturing = False
            self.complete = True


class UploadReader:
    """Pulls one file field out of a multipart request without spooling it.

    At most ``max_file_bytes + 1`` bytes of the file are held. The request is
    rejected up front when its declared length cannot fit, and reading stops
    once the file is known to be over the ceiling.
    """

    def __init__(self, field_name: str, max_file_bytes: int) -> None:
        self._field_name = field_name
        self._max_file_bytes = max_file_bytes
        self._max_body_bytes = max_file_bytes + MULTIPART_OVERHEAD_BYTES

    async def read(self, request: Request) -> UploadPart | None:
        """Return the uploaded file, or None when the field is absent."""
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self._max_body_bytes:
            raise BodyTooLargeError(int(declared))

        content_type, options = parse_options_header(request.headers.get("content-type"))
        if content_type != b"multipart/form-data":
            return None
        boundary = options.get(b"boundary")
        if not boundary:
            raise MalformedUploadError("Missing multipart boundary")

        collector = _FilePartCollector(self._field_name, self._max_file_bytes + 1)
        received = 0
        try:
            parser = MultipartParser(boundary, collector.callbacks())
            async for chunk in request.stream():
                received += len(chunk)
                if received > self._max_body_bytes:
                    raise BodyTooLargeError(received)
                parser.write(chunk)
                if collector.full:
                    break
            parser.finalize()
        except FormParserError as exc:
            raise MalformedUploadError(str(exc)) from exc

        if not collector.started:
            return None
        if not collector.complete and not collector.full:
            raise MalformedUploadError("Multipart body ended inside the file part")
        return UploadPart(
            filename=collector.filename or "",
            content_type=collector.content_type,
            content=collector.content,
        )
