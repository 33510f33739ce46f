#!/usr/bin/env python3
"""
devstrap macOS Installer
Package installer for macOS using Homebrew
"""

from typing import List

from devstrap.platform.installers.base import BaseInstaller


HOMEBREW_INSTALL_URL = 'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh'


class HomebrewInstaller(BaseInstaller):
    """macOS package installer using Homebrew"""

    def __init__(self, runner=None, install_url: str = HOMEBREW_INSTALL_URL):
        # brew refuses to run as root, never prefix it with sudo
        super().__init__('brew', runner, sudo=False)
        self.install_url = install_url

    def ensure_available(self) -> bool:
        """
        Install Homebrew itself if it is missing

        Returns:
            True if Homebrew had to be installed
        """
        if self.pm_path:
            return False
        self.runner.run_shell(f'/bin/bash -c "$(curl -fsSL {self.install_url})"')
        return True

    def update_index(self):
        self.run_command(['brew', 'update'])

    def install(self, package: str):
        self.run_command(self.get_install_command(package))

    def install_cask(self, cask: str):
        """Install a GUI app or font distributed as a cask"""
        self.run_command(['brew', 'install', '--cask', cask])

    def tap(self, tap: str):
        """Add a Homebrew tap (brew treats an existing tap as success)"""
        self.run_command(['brew', 'tap', tap])

    def is_installed(self, package: str) -> bool:
        return self.runner.succeeds(['brew', 'list', package])

    def ensure_command_line_tools(self) -> bool:
        """
        Trigger the Xcode Command Line Tools installer when they are missing

        Returns:
            True if the installer was launched
        """
        if self.runner.succeeds(['xcode-select', '-p']):
            return False
        self.run_command(['xcode-select', '--install'])
        return True

    def get_install_command(self, package: str) -> List[str]:
        return ['brew', 'install', package]
