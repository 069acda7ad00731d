"""
Password wrapper that owns the SHA-1 digest checked against HIBP.

The plaintext is never stored. The digest lives in a bytearray so it can be
overwritten with zeros once the check is done. Python strings cannot be
erased, so any str copy handed out by `hash` should be kept short-lived.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from checkpwn.api import hash_password

REDACTED = "***OMITTED***"


def secure_zero(data: bytearray) -> None:
    """Overwrite a bytearray in place with zeros."""
    for i in range(len(data)):
        data[i] = 0


class Password:
    """A hashed password to be checked against Pwned Passwords.

    Usage:
        # Context manager (clears the digest on exit)
        with Password(plaintext) as password:
            breached = check_password(password)

        # Manual management
        password = Password(plaintext)
        try:
            breached = check_password(password)
        finally:
            password.clear()

    Raises:
        EmptyInputError: If the plaintext is empty
    """

    __slots__ = ("_digest", "_cleared")

    def __init__(self, password: str):
        self._cleared = True
        self._digest = bytearray(hash_password(password).encode("ascii"))
        self._cleared = False

    @property
    def hash(self) -> str:
        """Uppercase hex digest (an immutable copy).

        Raises:
            RuntimeError: If the digest has already been cleared
        """
        if self._cleared:
            raise RuntimeError("Password digest has already been cleared")
        return self._digest.decode("ascii")

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def clear(self) -> None:
        """Zero the digest. Safe to call more than once."""
        if not self._cleared:
            secure_zero(self._digest)
            self._cleared = True

    def __enter__(self) -> "Password":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.clear()

    def __del__(self) -> None:
        # __init__ may have failed before the slots were set
        if getattr(self, "_cleared", True) is False:
            self.clear()

    def __repr__(self) -> str:
        return f"Password(hash={REDACTED})"

    def __str__(self) -> str:
        return repr(self)

    def __format__(self, format_spec: str) -> str:
        return format(repr(self), format_spec)

    def __reduce__(self):
        raise TypeError("Password objects cannot be serialized or copied")
