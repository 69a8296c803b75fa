"""
In-memory storage for one-time verification codes.

Codes are keyed by the lower-cased email address and expire after a fixed
window. Expiry is checked lazily on every read and swept eagerly on every
write, so no background timer is needed.

State lives in process memory: every worker process owns its own store and a
code issued by one worker will not validate on another. Run a single worker
or move the store to a shared backend (e.g. Redis) before scaling out.
"""
import re
import time
import secrets
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_MS = 5 * 60 * 1000  # 5 minutes
OTP_MIN = 100000
OTP_MAX = 999999

_CODE_PATTERN = re.compile(r'^[0-9]{6}$')


class InvalidArgumentError(ValueError):
    """Raised when an identifier or code is rejected by the store."""


@dataclass(frozen=True)
class OTPRecord:
    """A single outstanding code for one identifier."""
    code: str
    issued_at: float  # seconds, as reported by the store clock


def generate_otp() -> str:
    """Generate a 6-digit OTP in [100000, 999999] using a CSPRNG."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def is_well_formed_code(code) -> bool:
    """Check that a code is exactly six ASCII digits."""
    return isinstance(code, str) and bool(_CODE_PATTERN.match(code))


def _normalize(identifier: str) -> str:
    return identifier.lower()


class OTPStore:
    """
    Thread-safe in-memory OTP store.

    Args:
        expiry_ms: How long a code stays valid, in milliseconds
        clock: Zero-argument callable returning the current time in seconds
        max_entries: Upper bound on stored records, 0 for no limit. Oldest
            records are evicted first once the bound is exceeded.
        strict_codes: Reject codes that are not exactly six digits on ``set``
    """

    def __init__(self, expiry_ms: int = DEFAULT_EXPIRY_MS,
                 clock: Callable[[], float] = time.time,
                 max_entries: int = 0,
                 strict_codes: bool = True):
        if expiry_ms <= 0:
            raise InvalidArgumentError("expiry_ms must be positive")
        if max_entries < 0:
            raise InvalidArgumentError("max_entries must not be negative")

        self._expiry_ms = int(expiry_ms)
        self._expiry_seconds = self._expiry_ms / 1000.0
        self._clock = clock
        self._max_entries = max_entries
        self._strict_codes = strict_codes

        # Insertion order doubles as issue order: set() moves a key to the end.
        self._records: "OrderedDict[str, OTPRecord]" = OrderedDict()
        self._lock = threading.Lock()

    @property
    def expiry_ms(self) -> int:
        return self._expiry_ms

    def expiry_duration(self) -> timedelta:
        """Return the window during which an issued code stays valid."""
        return timedelta(milliseconds=self._expiry_ms)

    def generate(self) -> str:
        """Generate a new code. Does not store it."""
        return generate_otp()

    def _is_expired(self, record: OTPRecord, now: float) -> bool:
        return now - record.issued_at > self._expiry_seconds

    def set(self, identifier: str, code: str) -> None:
        """
        Store ``code`` for ``identifier``, replacing any previous code.

        Every call also sweeps expired records for all identifiers and, when
        ``max_entries`` is set, evicts the oldest records over the limit.

        Raises:
            InvalidArgumentError: If the identifier is empty or the code is
                malformed.
        """
        if not isinstance(identifier, str) or not identifier.strip():
            raise InvalidArgumentError("Identifier must be a non-empty string")
        if not isinstance(code, str):
            raise InvalidArgumentError("OTP code must be a string")
        if self._strict_codes and not is_well_formed_code(code):
            raise InvalidArgumentError("OTP code must be exactly 6 digits")

        key = _normalize(identifier)
        with self._lock:
            now = self._clock()
            self._records[key] = OTPRecord(code=code, issued_at=now)
            self._records.move_to_end(key)
            removed = self._sweep_locked(now)
            evicted = self._evict_locked()

        if removed:
            logger.debug(f"Swept {removed} expired OTP(s)")
        if evicted:
            logger.warning(f"OTP store over capacity ({self._max_entries}), evicted {evicted} oldest record(s)")

    def get(self, identifier: str) -> Optional[OTPRecord]:
        """Return the live record for ``identifier``, or None if absent or expired."""
        key = _normalize(identifier)
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            if self._is_expired(record, self._clock()):
                del self._records[key]
                return None
            return record

    def delete(self, identifier: str) -> bool:
        """Remove any record for ``identifier``. Returns True if one existed."""
        key = _normalize(identifier)
        with self._lock:
            return self._records.pop(key, None) is not None

    def is_valid(self, identifier: str, code: str) -> bool:
        """Check ``code`` against the live record for ``identifier``."""
        if not isinstance(code, str):
            return False
        record = self.get(identifier)
        if record is None:
            return False
        return secrets.compare_digest(record.code.encode('utf-8'), code.encode('utf-8'))

    def consume(self, identifier: str, code: str) -> bool:
        """
        Validate ``code`` and delete the record in one step.

        Only one caller can consume a given code; concurrent attempts with
        the same code see it as already used.
        """
        if not isinstance(code, str):
            return False
        key = _normalize(identifier)
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return False
            if self._is_expired(record, self._clock()):
                del self._records[key]
                return False
            if not secrets.compare_digest(record.code.encode('utf-8'), code.encode('utf-8')):
                return False
            del self._records[key]
            return True

    def sweep(self) -> int:
        """Remove every expired record. Returns the number removed."""
        with self._lock:
            return self._sweep_locked(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _sweep_locked(self, now: float) -> int:
        expired = [key for key, record in self._records.items() if self._is_expired(record, now)]
        for key in expired:
            del self._records[key]
        return len(expired)

    def _evict_locked(self) -> int:
        if not self._max_entries:
            return 0
        evicted = 0
        while len(self._records) > self._max_entries:
            self._records.popitem(last=False)
            evicted += 1
        return evicted
