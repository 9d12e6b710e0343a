# Author: Futhark1393
# Description: Named digest accumulators and the fan-out hasher shared by
# HashReader and HashWriter.

import hashlib
import inspect
from typing import Protocol, runtime_checkable


class UnknownHashError(LookupError):
    """Raised when a digest is requested for a name that was never registered.

    This is a contract violation by the caller, not a runtime condition.
    Nothing in hashio catches it.
    """
    pass


@runtime_checkable
class Accumulator(Protocol):
    """Incremental digest state: absorbs bytes, reports a digest on demand."""

    def update(self, data: bytes) -> None: ...

    def finalize(self, buffer: bytes = b"") -> bytes: ...


class HashlibAccumulator:
    """Adapts a ``hashlib`` object to the Accumulator interface."""

    def __init__(self, hash_obj):
        self._hash = hash_obj

    @property
    def name(self) -> str:
        return self._hash.name

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def finalize(self, buffer: bytes = b"") -> bytes:
        # hashlib digest() does not reset the running state
        return bytes(buffer) + self._hash.digest()


def new_accumulator(algorithm: str) -> HashlibAccumulator:
    """Fresh accumulator for any algorithm name ``hashlib.new`` accepts."""
    return HashlibAccumulator(hashlib.new(algorithm))


def std_crypto_hashes() -> dict[str, HashlibAccumulator]:
    """Convenience set with fresh "sha256", "sha1" and "md5" accumulators."""
    return {
        "sha256": HashlibAccumulator(hashlib.sha256()),
        "sha1": HashlibAccumulator(hashlib.sha1()),
        "md5": HashlibAccumulator(hashlib.md5()),
    }


def _finalize_takes_buffer(finalize) -> bool:
    try:
        inspect.signature(finalize).bind(b"")
    except (TypeError, ValueError):
        return False
    return True


def as_accumulator(obj) -> Accumulator:
    """Validate *obj* as an Accumulator, wrapping plain hashlib objects.

    A ``finalize`` that cannot be called with a buffer argument (for example a
    one-shot ``finalize()`` that ends the hash context) is rejected here,
    not on the first digest request.
    """
    if isinstance(obj, Accumulator):
        if not _finalize_takes_buffer(obj.finalize):
            raise TypeError(
                f"{type(obj).__name__}.finalize() must accept a buffer argument"
            )
        return obj
    if callable(getattr(obj, "update", None)) and callable(getattr(obj, "digest", None)):
        return HashlibAccumulator(obj)
    raise TypeError(
        f"Expected an accumulator with update()/finalize(), got {type(obj).__name__}"
    )


class StreamHasher:
    """
    Fans a byte stream out to a caller-owned set of named accumulators.

    The mapping itself is never modified. Every accumulator receives the
    identical byte sequence in call order.
    """

    def __init__(self, hashers: dict):
        self._accumulators = {name: as_accumulator(acc) for name, acc in hashers.items()}

    def update(self, data: bytes) -> None:
        """Feed one chunk to every accumulator."""
        for acc in self._accumulators.values():
            acc.update(data)

    def hash(self, name: str, buffer: bytes = b"") -> bytes:
        """Return *buffer* with the current digest of *name* appended."""
        try:
            acc = self._accumulators[name]
        except KeyError:
            raise UnknownHashError(
                f"No accumulator registered under {name!r}. "
                f"Registered: {', '.join(self._accumulators) or 'NONE'}"
            ) from None
        return acc.finalize(buffer or b"")

    def hex_hash(self, name: str) -> str:
        return self.hash(name).hex()

    def hex_digests(self) -> dict[str, str]:
        return {name: self.hex_hash(name) for name in self._accumulators}
