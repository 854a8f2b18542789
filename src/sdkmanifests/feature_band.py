"""SDK feature bands — the coarse version under which manifests are namespaced.

An SDK version such as ``6.0.205`` belongs to the ``6.0.200`` feature band.
Manifests are laid out on disk as ``<root>/<band>/<id>/``, so every lookup
starts from the band string rather than the full SDK version.

Key class: SdkFeatureBand.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

# major.minor.patch[-prerelease][+build]
_VERSION_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)

# Prerelease labels that mark non-public builds; bands drop them entirely
_INTERNAL_PRERELEASE_MARKERS = ("dev", "ci", "rtm")


def _compare_labels(left: tuple[str, ...], right: tuple[str, ...]) -> int:
    """Semantic-version precedence for two prerelease label lists."""
    for a, b in zip(left, right):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            return -1 if int(a) < int(b) else 1
        if a_num != b_num:
            # Numeric identifiers have lower precedence than alphanumeric
            return -1 if a_num else 1
        return -1 if a < b else 1
    return (len(left) > len(right)) - (len(left) < len(right))


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SdkFeatureBand:
    """Feature band parsed from an SDK version string.

    The patch number is rounded down to the hundred (``6.0.205`` ->
    ``6.0.200``). A public prerelease tag is kept, trimmed to its first two
    labels (``preview.7.21379.14`` -> ``preview.7``); internal ones
    (dev/ci/rtm) and build metadata are dropped.
    """

    major: int
    minor: int
    patch: int
    prerelease: str = ""

    @classmethod
    def parse(cls, version: str) -> SdkFeatureBand:
        """Parse an SDK version (or band directory name) into a band.

        Raises:
            ValueError: if ``version`` is not ``major.minor.patch[-pre][+build]``.
        """
        match = _VERSION_RE.match(version.strip())
        if match is None:
            raise ValueError(f"Invalid SDK version: {version!r}")

        prerelease = match.group("pre") or ""
        internal = any(m in prerelease for m in _INTERNAL_PRERELEASE_MARKERS)
        if prerelease and not internal:
            prerelease = ".".join(prerelease.split(".")[:2])
        else:
            prerelease = ""

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")) // 100 * 100,
            prerelease=prerelease,
        )

    def without_prerelease(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        if self.prerelease:
            return f"{self.without_prerelease()}-{self.prerelease}"
        return self.without_prerelease()

    def _key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def _compare(self, other: SdkFeatureBand) -> int:
        if self._key() != other._key():
            return -1 if self._key() < other._key() else 1
        if self.prerelease == other.prerelease:
            return 0
        # A release outranks any prerelease of the same numbers
        if not self.prerelease:
            return 1
        if not other.prerelease:
            return -1
        return _compare_labels(
            tuple(self.prerelease.split(".")), tuple(other.prerelease.split("."))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SdkFeatureBand):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: SdkFeatureBand) -> bool:
        if not isinstance(other, SdkFeatureBand):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        return hash((self._key(), self.prerelease))
