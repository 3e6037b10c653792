import hashlib

from cabs.errors import InvalidDigestError

DIGEST_SIZE = 32

# Layout shared with content-addressable-blob-store: one byte of shard, 31 of name.
SHARD_BYTES = 1


def compute_digest(blob: bytes) -> bytes:
    return hashlib.sha256(blob).digest()


def validate_digest(value: object) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidDigestError(
            f"Digest must be bytes, got {type(value).__name__}"
        )
    digest = bytes(value)
    if len(digest) != DIGEST_SIZE:
        raise InvalidDigestError(
            f"Digest must be exactly {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return digest


def shard_components(digest: bytes) -> tuple[str, str]:
    """Split a digest into (shard directory, file name), both lowercase hex."""
    digest = validate_digest(digest)
    return digest[:SHARD_BYTES].hex(), digest[SHARD_BYTES:].hex()


def digest_to_hex(digest: bytes) -> str:
    return validate_digest(digest).hex()


def digest_from_hex(text: str) -> bytes:
    if not isinstance(text, str) or len(text) != DIGEST_SIZE * 2:
        raise InvalidDigestError(f"Expected {DIGEST_SIZE * 2} hex characters, got {text!r}")
    try:
        digest = bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidDigestError(f"Invalid hex digest: {text!r}") from exc
    return validate_digest(digest)
