"""
devstrap Platform-Specific Installers
Package installation for Debian/Ubuntu, Arch, and macOS
"""

from typing import Optional

from devstrap.core.runner import CommandRunner
from devstrap.errors import UnsupportedPlatform
from devstrap.platform.detector import Platform
from devstrap.platform.installers.base import BaseInstaller
from devstrap.platform.installers.linux import AptInstaller, PacmanInstaller
from devstrap.platform.installers.macos import HomebrewInstaller


def get_installer(platform: Platform, runner: Optional[CommandRunner] = None) -> BaseInstaller:
    """Build the installer bound to a detected platform"""
    if platform == Platform.DEBIAN:
        return AptInstaller(runner)
    if platform == Platform.ARCH:
        return PacmanInstaller(runner)
    if platform == Platform.MACOS:
        return HomebrewInstaller(runner)
    raise UnsupportedPlatform(f"No package manager for platform '{platform.value}'.")


__all__ = [
    'BaseInstaller',
    'AptInstaller',
    'PacmanInstaller',
    'HomebrewInstaller',
    'get_installer',
]
