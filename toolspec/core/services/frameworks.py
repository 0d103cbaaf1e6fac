"""
Target framework monikers — parsing, naming, and compatibility.

A tool package declares the frameworks it was built for; the host runs
one framework. This module answers "which of the package's frameworks
is the nearest one the host can load?" using the same ordering the host
itself uses: same framework family first (highest version not above the
host's), then .NET Standard (highest version the host implements).

Pure logic — no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

NETCOREAPP = ".NETCoreApp"
NETSTANDARD = ".NETStandard"
NETFRAMEWORK = ".NETFramework"

_SHORT_PREFIXES = {
    "netcoreapp": NETCOREAPP,
    "netstandard": NETSTANDARD,
}

_FULL_RE = re.compile(r"^\s*(\.[A-Za-z]+)\s*,\s*Version=v?(\d+(?:\.\d+){0,3})", re.IGNORECASE)
_SHORT_RE = re.compile(r"^(netcoreapp|netstandard|net)(\d+(?:\.\d+)*)(?:-[A-Za-z0-9.]+)?$")

# Highest .NET Standard version each platform implements.
# (identifier, minimum platform version, netstandard version)
_NETSTANDARD_SUPPORT: list[tuple[str, tuple[int, ...], tuple[int, ...]]] = [
    (NETCOREAPP, (3, 0), (2, 1)),
    (NETCOREAPP, (2, 0), (2, 0)),
    (NETCOREAPP, (1, 0), (1, 6)),
    (NETFRAMEWORK, (4, 6, 1), (2, 0)),
    (NETFRAMEWORK, (4, 6), (1, 3)),
    (NETFRAMEWORK, (4, 5, 1), (1, 2)),
    (NETFRAMEWORK, (4, 5), (1, 1)),
]


def _pad(version: tuple[int, ...]) -> tuple[int, ...]:
    return (version + (0, 0, 0, 0))[:4]


@dataclass(frozen=True)
class Framework:
    """A parsed target framework."""

    identifier: str
    version: tuple[int, ...]

    @property
    def short_name(self) -> str:
        major, minor = self.version[0], self.version[1] if len(self.version) > 1 else 0
        if self.identifier == NETCOREAPP:
            if major >= 5:
                return f"net{major}.{minor}"
            return f"netcoreapp{major}.{minor}"
        if self.identifier == NETSTANDARD:
            return f"netstandard{major}.{minor}"
        if self.identifier == NETFRAMEWORK:
            digits = [str(p) for p in self.version]
            while len(digits) > 2 and digits[-1] == "0":
                digits.pop()
            return "net" + "".join(digits)
        return self.full_name

    @property
    def full_name(self) -> str:
        parts = list(self.version)
        while len(parts) > 2 and parts[-1] == 0:
            parts.pop()
        if len(parts) < 2:
            parts.append(0)
        return f"{self.identifier},Version=v{'.'.join(str(p) for p in parts)}"

    def sort_key(self) -> tuple[int, ...]:
        return _pad(self.version)


def parse_framework(moniker: str) -> Framework | None:
    """Parse a short (``netcoreapp2.2``) or full (``.NETCoreApp,Version=v2.2``) name.

    Returns None for anything unrecognised.
    """
    if not moniker:
        return None

    full = _FULL_RE.match(moniker)
    if full:
        identifier = _canonical_identifier(full.group(1))
        if identifier is None:
            return None
        return Framework(identifier, tuple(int(p) for p in full.group(2).split(".")))

    short = _SHORT_RE.match(moniker.strip().lower())
    if not short:
        return None

    prefix, raw_version = short.group(1), short.group(2)
    if prefix in _SHORT_PREFIXES:
        return Framework(_SHORT_PREFIXES[prefix], tuple(int(p) for p in raw_version.split(".")))

    # "net" is .NET 5+ when dotted (net6.0), .NET Framework when packed (net472)
    if "." in raw_version:
        version = tuple(int(p) for p in raw_version.split("."))
        if version[0] >= 5:
            return Framework(NETCOREAPP, version)
        return None
    return Framework(NETFRAMEWORK, tuple(int(d) for d in raw_version))


def _canonical_identifier(raw: str) -> str | None:
    for known in (NETCOREAPP, NETSTANDARD, NETFRAMEWORK):
        if raw.lower() == known.lower():
            return known
    return None


def _netstandard_level(platform: Framework) -> tuple[int, ...] | None:
    for identifier, min_version, level in _NETSTANDARD_SUPPORT:
        if platform.identifier == identifier and _pad(platform.version) >= _pad(min_version):
            return level
    return None


def is_compatible(host: Framework, candidate: Framework) -> bool:
    """Can code built for ``candidate`` run on ``host``?"""
    if host.identifier == candidate.identifier:
        return candidate.sort_key() <= host.sort_key()
    if candidate.identifier == NETSTANDARD:
        level = _netstandard_level(host)
        return level is not None and _pad(candidate.version) <= _pad(level)
    return False


def get_nearest(host_moniker: str, candidates: Iterable[str]) -> str | None:
    """Pick the candidate nearest to the host framework.

    Args:
        host_moniker: The framework the host runs (short or full name).
        candidates: Framework names the package declares, in any form.

    Returns:
        The winning candidate string exactly as given, or None when no
        candidate is compatible.
    """
    host = parse_framework(host_moniker)
    if host is None:
        return None

    best: tuple[tuple, str] | None = None
    for raw in candidates:
        candidate = parse_framework(raw)
        if candidate is None or not is_compatible(host, candidate):
            continue
        rank = (candidate.identifier == host.identifier, candidate.sort_key())
        if best is None or rank > best[0]:
            best = (rank, raw)

    return best[1] if best else None


def to_short_name(moniker: str) -> str:
    """Short folder name for a framework, or the input if unparseable."""
    parsed = parse_framework(moniker)
    return parsed.short_name if parsed else moniker


def to_full_name(moniker: str) -> str:
    """Full runtime-target name for a framework, or the input if unparseable."""
    parsed = parse_framework(moniker)
    return parsed.full_name if parsed else moniker
