#!/usr/bin/env python3
"""
devstrap Provisioning Flows
The environment-setup and dev-setup sequences
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from devstrap.config import DevstrapConfig
from devstrap.core.bootstrap import ToolBootstrapper
from devstrap.core.dotfiles import DotfilesLinker
from devstrap.core.packages import InstallReport, install_packages
from devstrap.core.runner import CommandRunner
from devstrap.core.status import StatusLog
from devstrap.platform.detector import Platform, PlatformDetector
from devstrap.platform.installers import AptInstaller, HomebrewInstaller, get_installer


SETUP_PLATFORMS = (Platform.MACOS, Platform.DEBIAN)
DEV_SETUP_PLATFORMS = (Platform.MACOS, Platform.DEBIAN, Platform.ARCH)


@dataclass
class FlowResult:
    """What a flow did, for the closing summary"""
    platform: Platform
    packages: InstallReport
    linked: List[str] = field(default_factory=list)
    bootstrapped: List[str] = field(default_factory=list)


@dataclass
class Provisioner:
    """
    Runs one provisioning flow against an injected configuration.

    The platform is detected once per flow and then passed explicitly to
    every component.
    """
    config: DevstrapConfig
    runner: CommandRunner = field(default_factory=CommandRunner)
    log: StatusLog = field(default_factory=StatusLog)
    detector: PlatformDetector = field(default_factory=PlatformDetector)
    home: Optional[Path] = None

    def _installer(self, platform: Platform):
        if platform == Platform.MACOS:
            return HomebrewInstaller(self.runner, install_url=self.config.homebrew_install_url)
        return get_installer(platform, self.runner)

    def environment_setup(self, dotfiles_dir: Path) -> FlowResult:
        """Install the base package set, then stow the dotfiles"""
        self.log.info("Starting environment setup...")
        platform = self.detector.detect(SETUP_PLATFORMS)
        self.log.info(f"Detected {platform.value}.")

        installer = self._installer(platform)
        if isinstance(installer, HomebrewInstaller) and installer.ensure_available():
            self.log.info("Homebrew was not found and has been installed.")

        report = install_packages(installer, self.config.packages_for('setup', platform.value), self.log)

        linker = DotfilesLinker(dotfiles_dir, self.home, self.runner, self.log)
        linked = linker.link()

        self.log.info("Environment setup complete!")
        return FlowResult(platform=platform, packages=report, linked=linked)

    def dev_setup(self) -> FlowResult:
        """Install the full development package set and bootstrap extra tools"""
        platform = self.detector.detect(DEV_SETUP_PLATFORMS)
        self.log.info(f"Using package manager: {platform.package_manager}")

        installer = self._installer(platform)
        if isinstance(installer, AptInstaller):
            self.log.info("[apt] Enabling universe repository (if not already enabled)...")
            installer.enable_repository('universe')

        report = install_packages(installer, self.config.packages_for('dev', platform.value), self.log)

        bootstrapper = ToolBootstrapper(platform, installer, self.config, self.runner, self.log, self.home)
        if platform == Platform.DEBIAN:
            bootstrapper.install_awscli()
        elif platform == Platform.MACOS:
            self.log.info("[brew] Installing Docker (via cask)...")
            installer.install_cask('docker')
            if installer.ensure_command_line_tools():
                self.log.info("Xcode Command Line Tools were missing; installer launched.")

        steps = bootstrapper.run()
        return FlowResult(platform=platform, packages=report, bootstrapped=steps)
