"""Local platform detection and bundled-binary platform matching.

Responsibilities:
- Normalize the running interpreter's architecture and OS into gem-style names.
- Parse platform directory names such as `x86_64-linux-musl` into patterns.
- Provide the explicit table of platform directories shipped with the package.

Key types:
- `LocalPlatform`: the running system as `cpu`, `os`, and optional `version`.
- `PlatformPattern`: one parsed platform directory name.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import platform
import re


_OS_ALIASES = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "mingw",
}
_ARM_CPUS = frozenset({"armv6l", "armv7l", "armv7", "armv6", "arm"})
_OS_TOKEN_PATTERN = re.compile(r"(?P<os>[a-z_]+?)(?P<version>\d[\d.]*)?")


@dataclass(frozen=True, slots=True)
class LocalPlatform:
    """Running system description used for bundled-binary selection.

    Attributes:
        cpu: Normalized CPU name (`x86_64`, `arm64`, `aarch64`, `arm`, `x64`).
        os: Normalized OS family (`darwin`, `linux`, `mingw`).
        version: Optional OS flavor; on linux the libc (`gnu` or `musl`).
    """

    cpu: str
    os: str
    version: str | None = None

    @property
    def identifier(self) -> str:
        """Return the `<cpu>-<os>` identifier without any version component."""

        return f"{self.cpu}-{self.os}"


@dataclass(frozen=True, slots=True)
class PlatformPattern:
    """Parsed platform directory name (`cpu-os[-version]`)."""

    name: str
    cpu: str
    os: str
    version: str | None = None

    @classmethod
    def parse(cls, name: str) -> PlatformPattern | None:
        """Parse a directory name, returning `None` when it is not platform-shaped."""

        parts = name.strip().lower().split("-", 2)
        if len(parts) < 2 or not all(parts):
            return None

        cpu, os_token = parts[0], parts[1]
        match = _OS_TOKEN_PATTERN.fullmatch(os_token)
        if match is None:
            return None
        os_name = match.group("os")
        version = parts[2] if len(parts) == 3 else match.group("version")
        return cls(name=name, cpu=cpu, os=os_name, version=version)

    def matches(self, local: LocalPlatform) -> bool:
        """Return whether this pattern selects binaries for the given platform."""

        if self.cpu != local.cpu or self.os != local.os:
            return False
        if self.os == "linux":
            return _linux_libc(self.version) == _linux_libc(local.version)
        if self.version is None or local.version is None:
            return True
        return self.version == local.version


def _linux_libc(version: str | None) -> str | None:
    """Treat glibc as the unspecified linux flavor."""

    if version == "gnu":
        return None
    return version


def _supported(*names: str) -> tuple[PlatformPattern, ...]:
    patterns = []
    for name in names:
        pattern = PlatformPattern.parse(name)
        if pattern is None:
            raise ValueError(f"Invalid platform directory name: {name}")
        patterns.append(pattern)
    return tuple(patterns)


SUPPORTED_PLATFORMS: tuple[PlatformPattern, ...] = _supported(
    "arm64-darwin",
    "x86_64-darwin",
    "x86_64-linux",
    "x86_64-linux-gnu",
    "x86_64-linux-musl",
    "aarch64-linux",
    "aarch64-linux-gnu",
    "aarch64-linux-musl",
    "arm-linux",
    "arm-linux-gnu",
    "arm-linux-musl",
    "x64-mingw32",
    "x64-mingw-ucrt",
)


def detect_local_platform(
    machine: str | None = None,
    system: str | None = None,
    libc: str | None = None,
) -> LocalPlatform:
    """Describe the running system, with optional explicit inputs for tests.

    Args:
        machine: Raw machine name, defaulting to `platform.machine()`.
        system: Raw OS name, defaulting to `platform.system()`.
        libc: Linux libc flavor; detected when omitted on linux.
    """

    raw_system = (system if system is not None else platform.system()).strip().lower()
    os_name = _OS_ALIASES.get(raw_system, raw_system)
    raw_machine = (machine if machine is not None else platform.machine()).strip().lower()
    cpu = _normalize_cpu(raw_machine, os_name)

    version = None
    if os_name == "linux":
        version = libc if libc is not None else _detect_linux_libc()
    return LocalPlatform(cpu=cpu, os=os_name, version=version)


def platform_id() -> str:
    """Return the running system's `<cpu>-<os>` identifier."""

    return detect_local_platform().identifier


def _normalize_cpu(machine: str, os_name: str) -> str:
    if machine in {"amd64", "x86_64", "x64"}:
        return "x64" if os_name == "mingw" else "x86_64"
    if machine in {"arm64", "aarch64"}:
        return "arm64" if os_name == "darwin" else "aarch64"
    if machine in _ARM_CPUS:
        return "arm"
    return machine


def _detect_linux_libc() -> str | None:
    name, _ = platform.libc_ver()
    if name == "glibc":
        return "gnu"
    if any(Path("/lib").glob("ld-musl-*")):
        return "musl"
    return None
