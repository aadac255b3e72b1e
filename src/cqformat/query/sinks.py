# topmark:header:start
#
#   project      : CQFormat
#   file         : sinks.py
#   file_relpath : src/cqformat/query/sinks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output sinks for encoded query results.

Each sink receives one `EncodedOutput`, writes it in a single operation and
flushes. Sinks:

- `StreamSink`: an already open text or binary stream (e.g. ``sys.stdout``).
- `FileSystemSink`: a file path, replaced atomically through a temporary file
  in the same directory.
- `NullSink`: discards the output (used when a run is torn down).
"""

from __future__ import annotations

import io
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING, Protocol, cast

from cqformat.config.logging import get_logger

if TYPE_CHECKING:
    from cqformat.config.logging import CQFormatLogger
    from cqformat.query.encoder import EncodedOutput

logger: CQFormatLogger = get_logger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Structured result of a write operation."""

    destination: str
    bytes_written: int = 0


class OutputSink(Protocol):
    """Protocol for output sinks.

    Implementations write the whole payload once and flush before returning.
    """

    def write(self, encoded: EncodedOutput) -> WriteResult:
        """Write ``encoded`` to the destination of this sink."""
        ...


class NullSink:
    """Sink that writes nothing."""

    def write(self, encoded: EncodedOutput) -> WriteResult:
        """Discard ``encoded``."""
        return WriteResult(destination="<null>", bytes_written=0)


class StreamSink:
    """Sink writing to an open stream.

    Binary payloads go to the underlying byte buffer of text streams
    (``sys.stdout.buffer``). Text payloads go to text streams as-is and to byte
    streams as UTF-8.
    """

    def __init__(self, stream: IO[str] | IO[bytes], name: str = "<stream>") -> None:
        self._stream: IO[str] | IO[bytes] = stream
        self._name: str = name

    def write(self, encoded: EncodedOutput) -> WriteResult:
        """Write ``encoded`` to the stream and flush it.

        Raises:
            TypeError: If binary output is written to a text stream without a buffer.
        """
        payload: bytes = encoded.to_bytes()
        if not isinstance(self._stream, io.TextIOBase) and not hasattr(self._stream, "encoding"):
            byte_stream: IO[bytes] = cast("IO[bytes]", self._stream)
            byte_stream.write(payload)
            byte_stream.flush()
        elif encoded.is_binary:
            buffer: IO[bytes] | None = getattr(self._stream, "buffer", None)
            if buffer is None:
                raise TypeError(f"{self._name} cannot receive binary output")
            # Flush pending text before bypassing the text layer.
            self._stream.flush()
            buffer.write(payload)
            buffer.flush()
        else:
            text_stream: IO[str] = cast("IO[str]", self._stream)
            text_stream.write(cast("str", encoded.data))
            text_stream.flush()
        logger.debug("StreamSink: wrote %d bytes to %s", len(payload), self._name)
        return WriteResult(destination=self._name, bytes_written=len(payload))


class FileSystemSink:
    """Sink that atomically replaces ``path`` with the encoded output."""

    def __init__(self, path: Path | str) -> None:
        self._path: Path = Path(path)

    @property
    def path(self) -> Path:
        """Return the destination path."""
        return self._path

    def write(self, encoded: EncodedOutput) -> WriteResult:
        """Write ``encoded`` to a temporary file, then move it over ``path``.

        Raises:
            OSError: If the file cannot be written; the destination is left untouched.
        """
        payload: bytes = encoded.to_bytes()
        directory: Path = self._path.parent
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=str(directory)
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("FileSystemSink: wrote %d bytes to file %s", len(payload), self._path)
        return WriteResult(destination=str(self._path), bytes_written=len(payload))
