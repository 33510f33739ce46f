#!/usr/bin/env python3
"""
devstrap Platform Detection
Classifies the host as macOS, Debian-like Linux, or Arch-like Linux
"""

import os
import platform
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from devstrap.errors import UnsupportedPlatform


OS_RELEASE_PATH = Path('/etc/os-release')


class Platform(Enum):
    """Supported platform variants"""
    MACOS = "macos"
    DEBIAN = "debian"
    ARCH = "arch"
    UNSUPPORTED = "unsupported"

    @property
    def package_manager(self) -> Optional[str]:
        return {
            Platform.MACOS: 'brew',
            Platform.DEBIAN: 'apt',
            Platform.ARCH: 'pacman',
        }.get(self)


@dataclass(frozen=True)
class PlatformSignals:
    """Everything detection looks at, gathered up front"""
    kernel_name: str = ''
    os_type: str = ''
    os_release: Optional[Dict[str, str]] = None
    has_pacman: bool = False

    def to_dict(self) -> Dict:
        """Convert to dictionary for display"""
        return {
            'kernel_name': self.kernel_name,
            'os_type': self.os_type,
            'os_release': dict(self.os_release) if self.os_release is not None else None,
            'has_pacman': self.has_pacman,
        }


def parse_os_release(text: str) -> Dict[str, str]:
    """
    Parse the KEY=value lines of an os-release file

    Args:
        text: File contents

    Returns:
        Mapping of keys to unquoted values
    """
    fields = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = line.split('=', 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        fields[key.strip()] = value
    return fields


def classify_platform(signals: PlatformSignals) -> Platform:
    """
    Map detection signals to a Platform

    Raises:
        UnsupportedPlatform: no supported variant matches
    """
    if signals.kernel_name == 'Darwin' or signals.os_type.startswith('darwin'):
        return Platform.MACOS

    distro_id = ''
    if signals.os_release is not None:
        distro_id = signals.os_release.get('ID', '')
        id_like = signals.os_release.get('ID_LIKE', '')
        if distro_id in ('ubuntu', 'debian') or 'debian' in id_like.split():
            return Platform.DEBIAN

    if signals.has_pacman:
        return Platform.ARCH

    if distro_id:
        raise UnsupportedPlatform(f"Your Linux distribution ({distro_id}) is not supported by this script.")
    raise UnsupportedPlatform("Unsupported operating system.")


@dataclass
class PlatformDetector:
    """
    Gather real system signals and classify them.

    The callables are injectable so detection can run against a fake host.
    """
    os_release_path: Path = OS_RELEASE_PATH
    environ: Dict[str, str] = field(default_factory=lambda: dict(os.environ))
    kernel_name: Callable[[], str] = platform.system
    which: Callable[[str], Optional[str]] = shutil.which

    def gather(self) -> PlatformSignals:
        os_release = None
        if self.os_release_path.is_file():
            os_release = parse_os_release(self.os_release_path.read_text(errors='replace'))

        return PlatformSignals(
            kernel_name=self.kernel_name(),
            os_type=self.environ.get('OSTYPE', ''),
            os_release=os_release,
            has_pacman=self.which('pacman') is not None,
        )

    def detect(self, supported: Optional[Iterable[Platform]] = None) -> Platform:
        """
        Detect the platform, optionally restricted to the variants a flow supports

        Args:
            supported: Platforms the caller can provision (None = all)

        Returns:
            The detected Platform
        """
        detected = classify_platform(self.gather())
        if supported is not None and detected not in set(supported):
            raise UnsupportedPlatform(f"Platform '{detected.value}' is not supported by this command.")
        return detected
