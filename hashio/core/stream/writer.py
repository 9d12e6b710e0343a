# Author: Futhark1393
# Description: Fan-out hashing writer. Data goes to the destination first and
# reaches the digest accumulators only once the destination accepted all of it.

import io

from hashio.core.hashing import StreamHasher


class HashWriter(io.RawIOBase):
    """
    Writable binary stream wrapping *destination*.

    Each ``write(data)`` is passed to *destination* unchanged. The bytes go
    to every accumulator in *hashers* only when *destination* reports that
    it took all of them (returned ``len(data)``). An exception, a short
    count or ``None`` leaves every accumulator untouched for that call, and
    the destination's result is returned or raised as is.

    Hash state never gets ahead of written data. After a failed or short
    write it may fall behind the destination, so it is undefined.

    *destination* remains owned by the caller: closing the writer does not close it.
    """

    def __init__(self, destination, hashers: dict):
        super().__init__()
        self._destination = destination
        self._hasher = StreamHasher(hashers)

    def writable(self) -> bool:
        return True

    def write(self, data) -> int | None:
        if self.closed:
            raise ValueError("HashWriter is closed.")

        # Hash exactly the bytes the destination received.
        chunk = bytes(data)
        written = self._destination.write(chunk)
        if written == len(chunk):
            self._hasher.update(chunk)
        return written

    def flush(self) -> None:
        super().flush()
        dest_flush = getattr(self._destination, "flush", None)
        if dest_flush is not None and not getattr(self._destination, "closed", False):
            dest_flush()

    def hash(self, name: str, buffer: bytes = b"") -> bytes:
        """Append the digest registered as *name* to *buffer* and return it.

        Raises UnknownHashError if *name* was not in the set given at
        construction. The digest is undefined if a write failed.
        """
        return self._hasher.hash(name, buffer)

    def hex_hash(self, name: str) -> str:
        return self._hasher.hex_hash(name)

    def hex_digests(self) -> dict[str, str]:
        return self._hasher.hex_digests()
