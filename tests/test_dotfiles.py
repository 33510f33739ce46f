"""
Tests for GNU Stow dotfiles linking
"""
import pytest

from devstrap.core.dotfiles import DotfilesLinker, list_packages
from devstrap.errors import ExternalCommandFailure, MissingDependency


class TestListPackages:
    """Package enumeration"""

    def test_only_directories(self, dotfiles):
        assert sorted(list_packages(dotfiles)) == ['nvim', 'tmux']


class TestDotfilesLinker:
    """Overlay behaviour"""

    def test_missing_source_is_a_noop(self, tmp_path, home, make_runner, status_log):
        runner = make_runner(binaries={'stow'})
        linker = DotfilesLinker(tmp_path / 'nope', home, runner, status_log)

        assert linker.link() == []
        assert runner.calls == []
        assert 'Skipping dotfiles setup' in status_log.out.getvalue()

    def test_missing_source_does_not_need_stow(self, tmp_path, home, make_runner, status_log):
        linker = DotfilesLinker(tmp_path / 'nope', home, make_runner(), status_log)
        assert linker.link() == []

    def test_missing_stow_fails_before_any_invocation(self, dotfiles, home, make_runner, status_log):
        runner = make_runner()
        linker = DotfilesLinker(dotfiles, home, runner, status_log)

        with pytest.raises(MissingDependency, match='GNU Stow is not installed'):
            linker.link()
        assert runner.calls == []

    def test_one_stow_per_package_targeting_home(self, dotfiles, home, make_runner, status_log):
        """nvim and tmux are stowed, README.md is ignored"""
        runner = make_runner(binaries={'stow'})
        linked = DotfilesLinker(dotfiles, home, runner, status_log).link()

        assert sorted(linked) == ['nvim', 'tmux']
        assert len(runner.calls) == 2
        for cmd in runner.calls:
            assert cmd[:2] == ['stow', '-v']
            assert cmd[cmd.index('-t') + 1] == str(home)
            assert cmd[cmd.index('-d') + 1] == str(dotfiles)
        assert sorted(cmd[-1] for cmd in runner.calls) == ['nvim', 'tmux']
        assert 'zsh' not in linked

    def test_n_subdirectories_n_invocations(self, tmp_path, home, make_runner, status_log):
        source = tmp_path / 'dotfiles'
        for name in ('zsh', 'git', 'alacritty', 'starship'):
            (source / name).mkdir(parents=True)
        runner = make_runner(binaries={'stow'})

        DotfilesLinker(source, home, runner, status_log).link()

        assert len(runner.calls) == 4

    def test_conflict_is_fatal_without_rollback(self, tmp_path, home, make_runner, status_log):
        source = tmp_path / 'dotfiles'
        for name in ('a', 'b'):
            (source / name).mkdir(parents=True)
        order = list_packages(source)
        failing = order[1]
        runner = make_runner(binaries={'stow'}, fail_when=lambda cmd: cmd[-1] == failing)

        with pytest.raises(ExternalCommandFailure):
            DotfilesLinker(source, home, runner, status_log).link()

        # The first package's stow already ran and is left in place
        assert [cmd[-1] for cmd in runner.calls] == order

    def test_defaults_to_home_directory(self, dotfiles, monkeypatch, tmp_path):
        monkeypatch.setenv('HOME', str(tmp_path))
        linker = DotfilesLinker(dotfiles)
        assert linker.target_dir == tmp_path
