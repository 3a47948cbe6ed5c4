"""Strongly typed identifiers for teamdesk entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
VerificationId = NewType("VerificationId", UUID)
