#!/usr/bin/env python3
"""
devstrap Linux Installers
Package installers for Debian/Ubuntu (apt) and Arch (pacman)
"""

from typing import List

from devstrap.platform.installers.base import BaseInstaller


class AptInstaller(BaseInstaller):
    """Debian/Ubuntu package installer using apt"""

    def __init__(self, runner=None, sudo: bool = True):
        super().__init__('apt-get', runner, sudo)

    def enable_repository(self, component: str):
        """Enable an apt component such as 'universe' (no-op when already enabled)"""
        self.run_command(self._privileged(['add-apt-repository', '-y', component]))

    def update_index(self):
        self.run_command(self._privileged(['apt-get', 'update']))

    def install(self, package: str):
        """Install package using apt-get"""
        self.run_command(self.get_install_command(package))

    def is_installed(self, package: str) -> bool:
        """Check if package is installed via dpkg"""
        return self.runner.succeeds(['dpkg', '-s', package])

    def get_install_command(self, package: str) -> List[str]:
        return self._privileged(['apt-get', 'install', '-y', package])


class PacmanInstaller(BaseInstaller):
    """Arch Linux package installer using pacman"""

    def __init__(self, runner=None, sudo: bool = True):
        super().__init__('pacman', runner, sudo)

    def update_index(self):
        # Arch does not support partial upgrades, so the refresh is a full -Syu
        self.run_command(self._privileged(['pacman', '-Syu', '--noconfirm']))

    def install(self, package: str):
        self.run_command(self.get_install_command(package))

    def is_installed(self, package: str) -> bool:
        return self.runner.succeeds(['pacman', '-Q', package])

    def get_install_command(self, package: str) -> List[str]:
        return self._privileged(['pacman', '-S', '--noconfirm', package])
