"""One-way pseudonymization using a named hash function."""

import hashlib
from typing import ClassVar

from pii_enrichment.strategy.base import BaseScrambleStrategy
from pii_enrichment.strategy.exceptions import UnsupportedAlgorithm


class PseudonymizeStrategy(BaseScrambleStrategy):
    """Replaces a value with the lowercase hex digest of its UTF-8 bytes."""

    # Names used by the enrichment configuration schema.
    ALIASES: ClassVar[dict[str, str]] = {
        "MD5": "md5",
        "SHA-1": "sha1",
        "SHA-224": "sha224",
        "SHA-256": "sha256",
        "SHA-384": "sha384",
        "SHA-512": "sha512",
        "SHA3-224": "sha3_224",
        "SHA3-256": "sha3_256",
        "SHA3-384": "sha3_384",
        "SHA3-512": "sha3_512",
    }

    def __init__(self, hash_function: str) -> None:
        self._hash_function = hash_function
        self._algorithm = self.resolve_algorithm(hash_function)

    @classmethod
    def resolve_algorithm(cls, hash_function: str) -> str:
        """Map a configured name to a fixed-size ``hashlib`` algorithm.

        Raises:
            UnsupportedAlgorithm: if the name is unknown or has no fixed digest.
        """
        name = cls.ALIASES.get(hash_function.upper(), hash_function.lower())
        if name not in hashlib.algorithms_guaranteed or name.startswith("shake_"):
            supported = sorted(cls.ALIASES)
            raise UnsupportedAlgorithm(
                f"Unsupported hash function '{hash_function}'. Choose from: {supported}"
            )
        return name

    @property
    def hash_function(self) -> str:
        return self._hash_function

    @property
    def digest_width(self) -> int:
        return hashlib.new(self._algorithm).digest_size * 2

    def scramble(self, text: str) -> str:
        # Lone surrogates encode as "?".
        data = text.encode("utf-8", errors="replace")
        return hashlib.new(self._algorithm, data).hexdigest()

    def describe(self) -> dict[str, dict[str, str]]:
        return {"pseudonymize": {"hashFunction": self._hash_function}}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PseudonymizeStrategy):
            return NotImplemented
        return self._algorithm == other._algorithm

    def __hash__(self) -> int:
        return hash(self._algorithm)

    def __repr__(self) -> str:
        return f"PseudonymizeStrategy(hash_function={self._hash_function!r})"
