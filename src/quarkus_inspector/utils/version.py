"""Quarkus version values and version predicates."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..inspector import QUARKUS_STANDARD_VERSIONING

logger = logging.getLogger(__name__)


@dataclass
class QuarkusVersion:
    """Quarkus version with major.minor.patch components and qualifiers."""

    major: int
    minor: int
    patch: int
    final: bool = False
    redhat_build: str | None = None
    raw: str = ""

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.final:
            version += ".Final"
        if self.redhat_build is not None:
            version += f"-redhat-{self.redhat_build}"
        return version

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @classmethod
    def from_match(cls, match: re.Match[str] | None) -> QuarkusVersion | None:
        """Build from a QUARKUS_STANDARD_VERSIONING match; None if it did not match."""
        if match is None:
            return None

        redhat = match.group(5)
        return cls(
            major=int(match.group(1)),
            minor=int(match.group(2)),
            patch=int(match.group(3)),
            final=match.group(4) is not None,
            redhat_build=redhat.rsplit("-", 1)[1] if redhat else None,
            raw=match.string,
        )

    @classmethod
    def from_string(cls, version_str: str) -> QuarkusVersion | None:
        """Parse version from string like '3.8.1' or '2.13.7.Final-redhat-00003'."""
        if not version_str:
            return None

        return cls.from_match(QUARKUS_STANDARD_VERSIONING.fullmatch(version_str))


def version_at_least(
    major: int, minor: int = 0, patch: int = 0
) -> Callable[[re.Match[str] | None], bool]:
    """Predicate for check_quarkus_version: detected version >= major.minor.patch.

    Non-standard versions never satisfy it.
    """
    wanted = (major, minor, patch)

    def predicate(match: re.Match[str] | None) -> bool:
        version = QuarkusVersion.from_match(match)
        if version is None:
            logger.debug(f"Non-standard Quarkus version, cannot compare with {wanted}")
            return False
        return version.as_tuple() >= wanted

    return predicate
