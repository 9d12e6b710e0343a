# Author: Futhark1393
# Description: Chunked copy with inline hashing.

from typing import Callable

from hashio.core.hashing import std_crypto_hashes
from hashio.core.stream.reader import HashReader
from hashio.core.stream.writer import HashWriter


class CopyError(Exception):
    """Raised when a hashing copy cannot complete."""
    pass


class HashingCopy:
    """
    Pumps *source* into *destination* chunk by chunk while hashing.

    ``side="read"`` wraps the source in a HashReader, so digests cover what
    was read. ``side="write"`` wraps the destination in a HashWriter, so
    digests cover only what the destination fully accepted.

    ``on_progress(bytes_done)`` is called after every chunk. Neither stream
    is closed by the engine.
    """

    CHUNK_SIZE = 4 * 1024 * 1024  # 4 MB

    def __init__(
        self,
        source,
        destination,
        hashers: dict | None = None,
        side: str = "read",
        chunk_size: int | None = None,
        on_progress: Callable[[int], None] | None = None,
    ):
        if side not in ("read", "write"):
            raise ValueError(f"side must be 'read' or 'write', got {side!r}")
        if chunk_size is not None and chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        hashers = hashers if hashers is not None else std_crypto_hashes()
        self.chunk_size = chunk_size or self.CHUNK_SIZE
        self.on_progress = on_progress or (lambda n: None)

        if side == "read":
            self._reader = HashReader(source, hashers)
            self._writer = destination
            self._digests = self._reader
        else:
            self._reader = source
            self._writer = HashWriter(destination, hashers)
            self._digests = self._writer

        self._is_running = True

    def stop(self) -> None:
        """Request a graceful stop after the current chunk."""
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    def hex_digests(self) -> dict[str, str]:
        return self._digests.hex_digests()

    def run(self) -> dict:
        """
        Copy until end of stream or stop().

        Returns a dict: total_bytes, digests (name -> hex), stopped.
        Raises CopyError on failure; digests are undefined afterwards.
        """
        total_bytes = 0
        try:
            while self._is_running:
                chunk = self._reader.read(self.chunk_size)
                if chunk is None:
                    continue  # non-blocking source had nothing ready
                if not chunk:
                    break

                written = self._writer.write(chunk)
                if written != len(chunk):
                    raise CopyError(
                        f"Short write: destination accepted {written} of {len(chunk)} bytes. "
                        "Digests are unreliable."
                    )
                total_bytes += len(chunk)
                self.on_progress(total_bytes)
        except CopyError:
            raise
        except Exception as e:
            raise CopyError(f"Copy failed after {total_bytes} bytes: {e}") from e

        return {
            "total_bytes": total_bytes,
            "digests": self.hex_digests(),
            "stopped": not self._is_running,
        }


def hash_file(path: str, hashers: dict | None = None,
              chunk_size: int = HashingCopy.CHUNK_SIZE) -> dict[str, str]:
    """Read *path* through a HashReader and return name -> hex digest."""
    with open(path, "rb") as f:
        reader = HashReader(f, hashers if hashers is not None else std_crypto_hashes())
        buf = bytearray(chunk_size)
        while reader.readinto(buf):
            pass
        return reader.hex_digests()
