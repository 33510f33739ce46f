#!/usr/bin/env python3
"""
devstrap Command Runner
Synchronous subprocess execution with strict failure semantics
"""

import os
import shutil
import subprocess
from typing import Dict, List, Optional

from devstrap.errors import ExternalCommandFailure


class CommandRunner:
    """
    Run external commands one at a time and wait for each to finish.

    Every collaborator (package managers, stow, installer scripts) goes
    through this class so tests can swap in a recording fake.
    """

    def which(self, name: str) -> Optional[str]:
        """Locate an executable on PATH"""
        return shutil.which(name)

    def run(self, cmd: List[str], check: bool = True, capture: bool = False,
            env: Optional[Dict[str, str]] = None) -> subprocess.CompletedProcess:
        """
        Run a command and return the result

        Args:
            cmd: Command and arguments
            check: Raise ExternalCommandFailure on a non-zero exit
            capture: Capture stdout/stderr instead of streaming to the terminal
            env: Extra environment variables for this command only

        Returns:
            CompletedProcess result
        """
        run_env = None
        if env:
            run_env = dict(os.environ)
            run_env.update(env)

        try:
            result = subprocess.run(
                cmd,
                capture_output=capture,
                text=True,
                check=False,
                shell=False,
                env=run_env,
            )
        except FileNotFoundError:
            if not check:
                return subprocess.CompletedProcess(cmd, 127, '', f'{cmd[0]}: command not found')
            raise ExternalCommandFailure(cmd, 127, f'{cmd[0]}: command not found')

        if check and result.returncode != 0:
            raise ExternalCommandFailure(cmd, result.returncode, result.stderr or '')
        return result

    def run_shell(self, script: str, env: Optional[Dict[str, str]] = None) -> subprocess.CompletedProcess:
        """Run a bash pipeline (installer scripts piped from curl)"""
        return self.run(['bash', '-o', 'pipefail', '-c', script], env=env)

    def succeeds(self, cmd: List[str]) -> bool:
        """Run a query command quietly; True when it exits 0"""
        return self.run(cmd, check=False, capture=True).returncode == 0
