"""Domain value objects for teamdesk.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from teamdesk.domain.value.common import RootValueObject, ValueObject

# Deliberately loose: one "@", no whitespace, a dot in the domain part
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")


class Role(str, Enum):
    """Coarse-grained access tier."""

    ADMIN = "ADMIN"
    TEAM = "TEAM"
    CLIENT = "CLIENT"


class VerificationStatus(str, Enum):
    """Status of a verification record.

    EXPIRED is never stored; it is reported for pending records whose
    expiry has passed.
    """

    PENDING = "pending"
    CONSUMED = "consumed"
    EXPIRED = "expired"


class Email(RootValueObject[str]):
    """Email address, normalized to lower case."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Check the address shape and normalize case."""
        v = v.strip().lower()
        if len(v) > 254 or not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class VerificationToken(RootValueObject[str]):
    """URL-safe invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @property
    def redacted(self) -> str:
        """Token prefix safe for logs."""
        return self.root[:8] + "..."


class Permissions(ValueObject):
    """Fine-grained capability flags layered on top of a role."""

    billing: bool = False
    projects: bool = False
    timeline: bool = False
    management: bool = False

    @classmethod
    def all_granted(cls) -> "Permissions":
        """Every flag set."""
        return cls(billing=True, projects=True, timeline=True, management=True)

    def granted(self) -> set[str]:
        """Names of the flags that are set."""
        return {name for name, value in self.model_dump().items() if value}
