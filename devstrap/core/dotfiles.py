#!/usr/bin/env python3
"""
devstrap Dotfiles Linking
Projects each package directory of a dotfiles tree onto $HOME with GNU Stow
"""

import os
from pathlib import Path
from typing import List, Optional

from devstrap.core.runner import CommandRunner
from devstrap.core.status import StatusLog
from devstrap.errors import MissingDependency


STOW = 'stow'


def list_packages(source_dir: Path) -> List[str]:
    """Immediate subdirectories of source_dir, in filesystem order"""
    with os.scandir(source_dir) as entries:
        return [entry.name for entry in entries if entry.is_dir()]


class DotfilesLinker:
    """
    Stow every package under a dotfiles directory into a target directory.

    Pre-existing files at a target path are never overwritten or adopted:
    stow refuses the conflict, and that refusal aborts the run.
    """

    def __init__(self, source_dir: Path, target_dir: Optional[Path] = None,
                 runner: Optional[CommandRunner] = None, log: Optional[StatusLog] = None):
        self.source_dir = Path(source_dir)
        self.target_dir = Path(target_dir) if target_dir is not None else Path.home()
        self.runner = runner or CommandRunner()
        self.log = log or StatusLog()

    def stow_command(self, package: str) -> List[str]:
        return [STOW, '-v', '-d', str(self.source_dir), '-t', str(self.target_dir), package]

    def link(self) -> List[str]:
        """
        Link all packages

        Returns:
            Names of the packages stowed, in the order they were processed

        Raises:
            MissingDependency: stow is not installed
            ExternalCommandFailure: stow failed for a package
        """
        if not self.source_dir.is_dir():
            self.log.info(f"No dotfiles directory found at {self.source_dir}. Skipping dotfiles setup.")
            return []

        if not self.runner.which(STOW):
            raise MissingDependency(
                STOW,
                "GNU Stow is not installed. Please re-run the script after installation.",
            )

        self.log.info("Setting up dotfiles using GNU Stow...")
        linked = []
        for package in list_packages(self.source_dir):
            self.log.info(f"Stowing {package}...")
            self.runner.run(self.stow_command(package))
            linked.append(package)
        return linked
