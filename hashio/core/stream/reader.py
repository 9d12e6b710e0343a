# Author: Futhark1393
# Description: Tee-hashing reader. Every byte handed back to the caller is
# mirrored into a set of named digest accumulators.

import io

from hashio.core.hashing import StreamHasher


class HashReader(io.RawIOBase):
    """
    Readable binary stream wrapping *source*.

    All data read from *source* is fed, in order, to each accumulator in
    *hashers* before it is returned. Usage::

        reader = HashReader(open("evidence.raw", "rb"), std_crypto_hashes())
        shutil.copyfileobj(reader, dst)
        reader.hex_hash("sha256")

    If any read from *source* raises, the digests are undefined from then on.
    Bytes returned before the failure stay hashed (best effort).

    *source* remains owned by the caller: closing the reader does not close it.
    The caller must not modify *hashers* or its accumulators while reading.
    """

    def __init__(self, source, hashers: dict):
        super().__init__()
        self._source = source
        self._hasher = StreamHasher(hashers)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int | None:
        if self.closed:
            raise ValueError("HashReader is closed.")

        view = memoryview(buffer).cast("B")
        # Sources may return None when non-blocking and nothing is ready.
        source_readinto = getattr(self._source, "readinto", None)
        if source_readinto is not None:
            n = source_readinto(view)
            if n is None:
                return None
        else:
            data = self._source.read(len(view))
            if data is None:
                return None
            n = len(data)
            view[:n] = data

        if n:
            self._hasher.update(view[:n].tobytes())
        return n

    def hash(self, name: str, buffer: bytes = b"") -> bytes:
        """Append the digest registered as *name* to *buffer* and return it.

        Raises UnknownHashError if *name* was not in the set given at
        construction. The digest is undefined if a read raised.
        """
        return self._hasher.hash(name, buffer)

    def hex_hash(self, name: str) -> str:
        """Digest registered as *name*, as lowercase hex."""
        return self._hasher.hex_hash(name)

    def hex_digests(self) -> dict[str, str]:
        """Every registered digest as name -> lowercase hex."""
        return self._hasher.hex_digests()
