#!/usr/bin/env python3
"""
devstrap Package Installation
Idempotent install loop over a native package manager
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from devstrap.core.status import StatusLog
from devstrap.platform.installers.base import BaseInstaller


@dataclass
class InstallReport:
    """Outcome of one install pass, in list order"""
    installed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def install_packages(installer: BaseInstaller, packages: Iterable[str],
                     log: Optional[StatusLog] = None) -> InstallReport:
    """
    Refresh the index once, then install every package that is missing

    Args:
        installer: Installer bound to the detected platform
        packages: Package names, processed in order
        log: Status output (default: stdout/stderr)

    Returns:
        InstallReport listing installed and skipped packages

    Raises:
        ExternalCommandFailure: the package manager failed; nothing after it runs
    """
    log = log or StatusLog()
    report = InstallReport()

    log.info(f"Updating {installer.package_manager} package index...")
    installer.update_index()

    for package in packages:
        if installer.is_installed(package):
            log.info(f"{package} is already installed.")
            report.skipped.append(package)
            continue

        log.info(f"Installing {package}...")
        installer.install(package)
        report.installed.append(package)

    return report
