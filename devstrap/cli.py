#!/usr/bin/env python3
"""
devstrap CLI - Command-line interface
Click-based entry points for the provisioning flows
"""

import sys
import click
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich import print as rprint

from devstrap import __version__
from devstrap.config import ConfigManager, DevstrapConfig
from devstrap.core.flows import Provisioner
from devstrap.core.status import StatusLog
from devstrap.errors import DevstrapError
from devstrap.platform.detector import PlatformDetector, classify_platform

console = Console()


def print_banner():
    """Print devstrap banner"""
    rprint(f"[bold magenta]devstrap v{__version__}[/bold magenta] [dim]- workstation provisioning[/dim]")


def _load_config(config_path: Optional[str]) -> DevstrapConfig:
    return ConfigManager.load_config(Path(config_path) if config_path else None)


def _resolve_dotfiles_dir(option: Optional[str], config: DevstrapConfig) -> Path:
    if option:
        return Path(option)
    if config.dotfiles_dir:
        return Path(config.dotfiles_dir).expanduser()
    return Path.cwd() / 'dotfiles'


def _run_flow(ctx: click.Context, action):
    """Run a flow, turning fatal devstrap errors into an exit status"""
    log = StatusLog()
    try:
        return action(log)
    except DevstrapError as e:
        log.error(str(e))
        ctx.exit(e.exit_code)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.pass_context
def main(ctx, version):
    """
    devstrap - Developer Workstation Provisioning

    Installs editors, shells and CLI tools with the native package
    manager and links your dotfiles with GNU Stow.

    Examples:
        devstrap setup           # Base packages + dotfiles
        devstrap dev-setup       # Full development toolchain
        devstrap detect          # Show the detected platform
    """
    if version:
        click.echo(f"devstrap v{__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        print_banner()
        click.echo(ctx.get_help())


@main.command()
@click.option('--dotfiles-dir', type=click.Path(file_okay=False), default=None,
              help='Directory of stow packages (default: dotfiles/ in the current directory)')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Path to .devstrap.yml (default: search upward from current dir)')
@click.pass_context
def setup(ctx, dotfiles_dir, config_path):
    """
    Install base packages and link dotfiles.

    Supports macOS (Homebrew) and Debian/Ubuntu (apt).
    """
    config = _load_config(config_path)
    source = _resolve_dotfiles_dir(dotfiles_dir, config)

    def action(log):
        return Provisioner(config=config, log=log).environment_setup(source)

    _run_flow(ctx, action)


@main.command('dev-setup')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Path to .devstrap.yml (default: search upward from current dir)')
@click.pass_context
def dev_setup(ctx, config_path):
    """
    Install the development toolchain.

    Supports apt, pacman and Homebrew, then bootstraps Nerd Fonts, nvm,
    Node.js, eza, lazygit and lazydocker.
    """
    config = _load_config(config_path)

    def action(log):
        return Provisioner(config=config, log=log).dev_setup()

    _run_flow(ctx, action)
    console.print(Panel(
        "Development environment setup complete!\n\n"
        "If you installed tools via Go or Cargo (such as lazygit, lazydocker, or eza),\n"
        "you may need to add the following directories to your PATH:\n"
        "    $HOME/go/bin\n"
        "    $HOME/.cargo/bin",
        border_style="green",
    ))


@main.command()
@click.pass_context
def detect(ctx):
    """Show the detected platform and the signals it was derived from."""
    signals = PlatformDetector().gather()

    console.print("[bold cyan]Platform Signals:[/bold cyan]")
    console.print(f"  Kernel: {signals.kernel_name or 'unknown'}")
    console.print(f"  OSTYPE: {signals.os_type or '(unset)'}")
    if signals.os_release is None:
        console.print("  os-release: not found")
    else:
        console.print(f"  ID: {signals.os_release.get('ID', '')}")
        console.print(f"  ID_LIKE: {signals.os_release.get('ID_LIKE', '')}")
    console.print(f"  pacman: {'found' if signals.has_pacman else 'not found'}")

    def action(log):
        return classify_platform(signals)

    platform = _run_flow(ctx, action)
    console.print(f"\n[bold green]Platform:[/bold green] {platform.value} ({platform.package_manager})")


@main.command()
@click.option('--init', 'init_config', is_flag=True, help='Write a default .devstrap.yml in the current directory')
@click.option('--force', is_flag=True, help='Overwrite an existing .devstrap.yml')
def config(init_config, force):
    """Show the effective configuration."""
    if init_config:
        try:
            path = ConfigManager.create_default_config(Path.cwd(), force=force)
        except FileExistsError as e:
            console.print(f"[yellow]{e} already exists (use --force to overwrite)[/yellow]")
            sys.exit(1)
        console.print(f"[green]Wrote {path}[/green]")
        return

    config_path = ConfigManager.find_config()
    config = ConfigManager.load_config(config_path)
    console.print(f"[bold cyan]Config file:[/bold cyan] {config_path or '(defaults)'}")

    for flow, table in (('setup', config.setup_packages), ('dev-setup', config.dev_packages)):
        console.print(f"\n[bold cyan]{flow} packages:[/bold cyan]")
        for platform_key, packages in table.items():
            console.print(f"  {platform_key:8} {' '.join(packages)}")

    console.print(f"\n[bold cyan]Dotfiles:[/bold cyan] {config.dotfiles_dir or './dotfiles'}")
    console.print(f"[bold cyan]npm globals:[/bold cyan] {' '.join(config.npm_globals)}")
    console.print(f"[bold cyan]Go tools:[/bold cyan] {' '.join(config.go_tools)}")


if __name__ == '__main__':
    main()
