#!/usr/bin/env python3
"""
devstrap Base Installer Class
Base class for platform-specific package installers
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from devstrap.core.runner import CommandRunner


class BaseInstaller(ABC):
    """
    Abstract base class for platform-specific installers
    """

    def __init__(self, package_manager: str, runner: Optional[CommandRunner] = None, sudo: bool = True):
        self.package_manager = package_manager
        self.runner = runner or CommandRunner()
        self.sudo = sudo

    @property
    def pm_path(self) -> Optional[str]:
        return self.runner.which(self.package_manager)

    @abstractmethod
    def update_index(self):
        """Refresh the package index"""
        pass

    @abstractmethod
    def install(self, package: str):
        """
        Install a package

        Args:
            package: Package name to install

        Raises:
            ExternalCommandFailure: the package manager exited non-zero
        """
        pass

    @abstractmethod
    def is_installed(self, package: str) -> bool:
        """
        Check if a package is already installed

        Args:
            package: Package name to check

        Returns:
            True if package is installed
        """
        pass

    @abstractmethod
    def get_install_command(self, package: str) -> List[str]:
        """Get the install command as an argument list"""
        pass

    def _privileged(self, cmd: List[str]) -> List[str]:
        return (['sudo'] if self.sudo else []) + cmd

    def run_command(self, cmd: List[str]):
        """Run a command, raising on a non-zero exit"""
        return self.runner.run(cmd)
