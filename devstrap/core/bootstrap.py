#!/usr/bin/env python3
"""
devstrap Tool Bootstrap
Installs developer tools that are not uniformly packaged across apt, pacman and brew
"""

import os
import shlex
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from devstrap.config import DevstrapConfig
from devstrap.core.runner import CommandRunner
from devstrap.core.status import StatusLog
from devstrap.errors import ExternalCommandFailure
from devstrap.platform.detector import Platform
from devstrap.platform.installers.base import BaseInstaller


class ToolBootstrapper:
    """
    Sequential bootstrap of the dev-setup tools.

    Every step runs unconditionally except nvm (skipped when its directory
    exists) and the AWS CLI (skipped when `aws` is on PATH). Re-running relies
    on each underlying installer being harmless on a satisfied system.
    """

    def __init__(self, platform: Platform, installer: BaseInstaller, config: DevstrapConfig,
                 runner: Optional[CommandRunner] = None, log: Optional[StatusLog] = None,
                 home: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
        self.platform = platform
        self.installer = installer
        self.config = config
        self.runner = runner or CommandRunner()
        self.log = log or StatusLog()
        self.home = Path(home) if home is not None else Path.home()
        self.environ = environ if environ is not None else os.environ

    @property
    def is_linux(self) -> bool:
        return self.platform in (Platform.DEBIAN, Platform.ARCH)

    @property
    def font_dir(self) -> Path:
        return self.home / '.local' / 'share' / 'fonts'

    @property
    def nvm_dir(self) -> Path:
        override = self.environ.get('NVM_DIR')
        return Path(override) if override else self.home / '.nvm'

    def run(self) -> List[str]:
        """
        Run every step in order

        Returns:
            Names of the steps that ran
        """
        steps = [
            ('nerd-font', self.install_nerd_font),
            ('nvm', self.install_nvm),
            ('node', self.install_node),
            ('npm-globals', self.install_npm_globals),
            ('eza', self.install_eza),
        ]
        steps.extend((name, lambda name=name: self.install_go_tool(name)) for name in self.config.go_tools)

        for name, step in steps:
            step()
        return [name for name, _ in steps]

    # Nerd Font

    def install_nerd_font(self):
        self.log.info("Installing Nerd Font (FiraCode Nerd Font)...")
        if self.is_linux:
            self.font_dir.mkdir(parents=True, exist_ok=True)
            fd, archive = tempfile.mkstemp(prefix='firacode.', suffix='.zip')
            os.close(fd)
            download = ['curl', '-fL', '-o', archive, self.config.nerd_font_url]
            try:
                self.runner.run(download)
                with zipfile.ZipFile(archive) as zf:
                    zf.extractall(self.font_dir)
            except zipfile.BadZipFile as e:
                raise ExternalCommandFailure(download, None, stderr=f"not a zip archive ({e})") from e
            finally:
                Path(archive).unlink(missing_ok=True)

            if self.runner.which('fc-cache'):
                self.runner.run(['fc-cache', '-fv'])
        else:
            self.installer.tap('homebrew/cask-fonts')
            self.installer.install_cask(self.config.nerd_font_cask)

    # Node.js via nvm

    def _nvm_env(self) -> Dict[str, str]:
        return {'NVM_DIR': str(self.nvm_dir)}

    def _with_nvm(self, command: str) -> str:
        nvm_sh = shlex.quote(str(self.nvm_dir / 'nvm.sh'))
        return f'. {nvm_sh} && {command}'

    def install_nvm(self) -> bool:
        """
        Install nvm unless its directory already exists

        Returns:
            True if the installer ran
        """
        if self.nvm_dir.is_dir():
            self.log.info("nvm is already installed.")
            return False

        self.log.info("Installing nvm...")
        self.runner.run_shell(f'curl -o- {shlex.quote(self.config.nvm_install_url)} | bash',
                              env=self._nvm_env())
        return True

    def install_node(self):
        self.log.info("Installing latest Node.js via nvm...")
        self.runner.run_shell(self._with_nvm('nvm install node'), env=self._nvm_env())

    def install_npm_globals(self):
        packages = self.config.npm_globals
        if not packages:
            return
        self.log.info(f"Installing global npm packages: {', '.join(packages)}...")
        quoted = ' '.join(shlex.quote(package) for package in packages)
        self.runner.run_shell(self._with_nvm(f'npm install -g {quoted}'), env=self._nvm_env())

    # eza

    def find_cargo(self) -> Optional[str]:
        """Find cargo, checking ~/.cargo/bin even if not in PATH"""
        cargo = self.runner.which('cargo')
        if cargo:
            return cargo
        candidate = self.home / '.cargo' / 'bin' / 'cargo'
        if candidate.exists():
            return str(candidate)
        return None

    def install_rust(self) -> str:
        """Install the Rust toolchain with rustup and return the cargo path"""
        self.log.info("Rust/Cargo not found. Installing Rust toolchain...")
        self.runner.run_shell(
            f"curl --proto '=https' --tlsv1.2 -sSf {shlex.quote(self.config.rustup_url)} | sh -s -- -y"
        )
        return str(self.home / '.cargo' / 'bin' / 'cargo')

    def install_eza(self):
        if self.platform == Platform.DEBIAN:
            # eza is not in the standard Debian repos
            cargo = self.find_cargo() or self.install_rust()
            self.log.info("Installing eza via cargo...")
            self.runner.run([cargo, 'install', 'eza'])
        else:
            self.log.info("Installing eza...")
            self.installer.install('eza')

    # Go tools

    def install_go_tool(self, name: str):
        if self.platform == Platform.DEBIAN:
            self.log.info(f"Installing {name} via go...")
            self.runner.run(['go', 'install', self.config.go_tools[name]])
        else:
            self.log.info(f"Installing {name}...")
            self.installer.install(name)

    # AWS CLI (apt has no package for v2)

    def install_awscli(self) -> bool:
        """
        Install AWS CLI v2 with the official installer when `aws` is missing

        Returns:
            True if the installer ran
        """
        if self.runner.which('aws'):
            self.log.info("AWS CLI is already installed.")
            return False

        self.log.info("Installing AWS CLI v2 via official installer...")
        with tempfile.TemporaryDirectory(prefix='awscli.') as workdir:
            archive = str(Path(workdir) / 'awscliv2.zip')
            self.runner.run(['curl', '-fL', '-o', archive, self.config.awscli_url])
            # unzip keeps the executable bits the bundled installer needs
            self.runner.run(['unzip', '-q', archive, '-d', workdir])
            self.runner.run(['sudo', str(Path(workdir) / 'aws' / 'install')])
        return True
