"""
Shared fixtures for devstrap tests
"""
import io
import subprocess

import pytest
from rich.console import Console

from devstrap.core.runner import CommandRunner
from devstrap.core.status import StatusLog
from devstrap.errors import ExternalCommandFailure


QUERY_PREFIXES = (
    ('dpkg', '-s'),
    ('pacman', '-Q'),
    ('brew', 'list'),
)


class FakeRunner(CommandRunner):
    """Records every command instead of executing it"""

    def __init__(self, installed=(), binaries=(), fail_when=None, handlers=None):
        super().__init__()
        self.installed = set(installed)
        self.binaries = set(binaries)
        self.fail_when = fail_when or (lambda cmd: False)
        self.handlers = handlers or {}
        self.calls = []
        self.envs = []

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.binaries else None

    def run(self, cmd, check=True, capture=False, env=None):
        cmd = list(cmd)
        self.calls.append(cmd)
        self.envs.append(env)

        if tuple(cmd[:2]) in QUERY_PREFIXES:
            returncode = 0 if cmd[-1] in self.installed else 1
        elif cmd == ['xcode-select', '-p']:
            returncode = 0 if 'xcode-select' in self.installed else 2
        elif self.fail_when(cmd):
            returncode = 100
        else:
            returncode = 0
            handler = self.handlers.get(cmd[0])
            if handler:
                handler(cmd)

        if check and returncode != 0:
            raise ExternalCommandFailure(cmd, returncode)
        return subprocess.CompletedProcess(cmd, returncode, '', '')

    def commands(self, program):
        """Calls whose first argument (after sudo) is program"""
        result = []
        for cmd in self.calls:
            stripped = cmd[1:] if cmd and cmd[0] == 'sudo' else cmd
            if stripped and stripped[0] == program:
                result.append(stripped)
        return result

    def shell_scripts(self):
        return [cmd[-1] for cmd in self.calls if cmd[:1] == ['bash']]


@pytest.fixture
def status_log():
    """A StatusLog writing to in-memory buffers"""
    out = io.StringIO()
    err = io.StringIO()
    log = StatusLog(Console(file=out, width=200), Console(file=err, width=200))
    log.out = out
    log.err = err
    return log


@pytest.fixture
def home(tmp_path):
    """An empty home directory"""
    path = tmp_path / 'home'
    path.mkdir()
    return path


@pytest.fixture
def dotfiles(tmp_path):
    """A dotfiles tree with nvim and tmux packages plus a stray README"""
    root = tmp_path / 'repo' / 'dotfiles'
    (root / 'nvim' / '.config' / 'nvim').mkdir(parents=True)
    (root / 'nvim' / '.config' / 'nvim' / 'init.lua').write_text('-- nvim\n')
    (root / 'tmux').mkdir()
    (root / 'tmux' / '.tmux.conf').write_text('set -g mouse on\n')
    (root / 'README.md').write_text('# dotfiles\n')
    return root


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances"""
    return FakeRunner
