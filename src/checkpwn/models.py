"""
Result records for checkpwn lookups.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from checkpwn.api import CheckKind
from checkpwn.password import REDACTED


@dataclass
class CheckResult:
    """Outcome of checking one account or password."""

    kind: CheckKind
    target: str
    breached: bool = False
    checked_at: datetime = field(default_factory=datetime.now)
    error: str | None = None

    @classmethod
    def for_password(cls, breached: bool = False, error: str | None = None) -> "CheckResult":
        """Create a password result. The target is always redacted."""
        return cls(kind=CheckKind.PASSWORD, target=REDACTED, breached=breached, error=error)

    @property
    def ok(self) -> bool:
        """Check completed without error and found nothing."""
        return self.error is None and not self.breached

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "target": self.target,
            "breached": self.breached,
            "checked_at": self.checked_at.isoformat(),
            "error": self.error,
        }
