#!/usr/bin/env python3
"""
devstrap Errors
Fatal conditions that abort a provisioning run
"""

from typing import List, Optional


class DevstrapError(Exception):
    """Base class for every fatal devstrap condition"""

    exit_code = 1


class UnsupportedPlatform(DevstrapError):
    """The host OS/distribution is not one devstrap knows how to provision"""


class MissingDependency(DevstrapError):
    """A tool required for a step is not installed"""

    def __init__(self, tool: str, message: Optional[str] = None):
        self.tool = tool
        super().__init__(message or f"{tool} is not installed.")


class ExternalCommandFailure(DevstrapError):
    """An external command exited with a non-zero status"""

    def __init__(self, cmd: List[str], returncode: Optional[int], stderr: str = ''):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()[:200]}" if stderr and stderr.strip() else ''
        status = f" (exit {returncode})" if returncode is not None else ''
        super().__init__(f"Command failed{status}: {' '.join(self.cmd)}{detail}")

    @property
    def exit_code(self) -> int:
        # Propagate the failing command's status, as the shell would under `set -e`
        if self.returncode is None or self.returncode <= 0:
            return 1
        return self.returncode
