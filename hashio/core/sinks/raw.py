# Author: Futhark1393
# Description: Plain and discard-only destination sinks.


class RawWriter:
    """Plain binary file with a uniform write/close interface."""

    def __init__(self, filepath: str):
        self._fh = open(filepath, "wb")

    def write(self, chunk: bytes) -> int:
        self._fh.write(chunk)
        return len(chunk)

    def flush(self) -> None:
        self._fh.flush()

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def close(self) -> None:
        self._fh.close()


class DiscardWriter:
    """Accepts every write and keeps nothing but the byte count."""

    def __init__(self):
        self.bytes_written = 0

    def write(self, chunk: bytes) -> int:
        self.bytes_written += len(chunk)
        return len(chunk)

    def close(self) -> None:
        pass
