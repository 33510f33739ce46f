#!/usr/bin/env python3
"""
devstrap Configuration Management
Handles .devstrap.yml configuration files
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field


def _default_setup_packages() -> Dict[str, List[str]]:
    return {
        'macos': ['neovim', 'fzf', 'stow'],
        'debian': ['neovim', 'fzf', 'stow'],
    }


def _default_dev_packages() -> Dict[str, List[str]]:
    return {
        'debian': [
            'git', 'neovim', 'luarocks', 'golang', 'build-essential', 'tmux',
            'fzf', 'xclip', 'stow', 'zsh', 'bat', 'jq', 'ripgrep',
            'default-jdk', 'docker.io', 'zoxide', 'eva',
        ],
        'arch': [
            'git', 'neovim', 'luarocks', 'go', 'base-devel', 'tmux', 'aws-cli',
            'fzf', 'xclip', 'stow', 'zsh', 'bat', 'jq', 'ripgrep', 'docker',
            'zoxide', 'eva',
        ],
        'macos': [
            'git', 'neovim', 'luarocks', 'go', 'tmux', 'awscli', 'fzf', 'stow',
            'zsh', 'bat', 'jq', 'ripgrep', 'zoxide', 'eva',
        ],
    }


@dataclass(frozen=True)
class DevstrapConfig:
    """devstrap configuration structure"""

    # Package lists, keyed by platform value
    setup_packages: Dict[str, List[str]] = field(default_factory=_default_setup_packages)
    dev_packages: Dict[str, List[str]] = field(default_factory=_default_dev_packages)

    # Dotfiles source (None = ./dotfiles)
    dotfiles_dir: Optional[str] = None

    # Third-party installers
    homebrew_install_url: str = 'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh'
    nerd_font_url: str = 'https://github.com/ryanoasis/nerd-fonts/releases/download/v2.3.3/FiraCode.zip'
    nerd_font_cask: str = 'font-fira-code-nerd-font'
    nvm_install_url: str = 'https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.5/install.sh'
    rustup_url: str = 'https://sh.rustup.rs'
    awscli_url: str = 'https://awscli.amazonaws.com/awscli-exe-linux-x86_64.zip'
    npm_globals: List[str] = field(default_factory=lambda: ['@angular/cli', 'yarn'])
    go_tools: Dict[str, str] = field(default_factory=lambda: {
        'lazygit': 'github.com/jesseduffield/lazygit@latest',
        'lazydocker': 'github.com/jesseduffield/lazydocker@latest',
    })

    def packages_for(self, flow: str, platform_key: str) -> List[str]:
        """Ordered package list for a flow ('setup' or 'dev') on a platform"""
        table = self.setup_packages if flow == 'setup' else self.dev_packages
        return list(table.get(platform_key, []))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DevstrapConfig':
        """
        Create config from dictionary

        Raises:
            ValueError: a package table or tool list has the wrong shape
        """
        defaults = cls()
        packages = data.get('packages', {}) or {}

        setup_packages = dict(defaults.setup_packages)
        setup_packages.update(_string_lists(packages.get('setup'), 'packages.setup'))
        dev_packages = dict(defaults.dev_packages)
        dev_packages.update(_string_lists(packages.get('dev'), 'packages.dev'))

        dotfiles = data.get('dotfiles', {}) or {}
        urls = data.get('urls', {}) or {}
        tools = data.get('tools', {}) or {}

        return cls(
            setup_packages=setup_packages,
            dev_packages=dev_packages,
            dotfiles_dir=dotfiles.get('dir', defaults.dotfiles_dir),
            homebrew_install_url=urls.get('homebrew', defaults.homebrew_install_url),
            nerd_font_url=urls.get('nerd_font', defaults.nerd_font_url),
            nerd_font_cask=tools.get('nerd_font_cask', defaults.nerd_font_cask),
            nvm_install_url=urls.get('nvm', defaults.nvm_install_url),
            rustup_url=urls.get('rustup', defaults.rustup_url),
            awscli_url=urls.get('awscli', defaults.awscli_url),
            npm_globals=_string_list(tools.get('npm_globals'), 'tools.npm_globals') or defaults.npm_globals,
            go_tools=_go_tools(tools.get('go')) or defaults.go_tools,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for YAML export"""
        return {
            'packages': {
                'setup': self.setup_packages,
                'dev': self.dev_packages,
            },
            'dotfiles': {
                'dir': self.dotfiles_dir,
            },
            'urls': {
                'homebrew': self.homebrew_install_url,
                'nerd_font': self.nerd_font_url,
                'nvm': self.nvm_install_url,
                'rustup': self.rustup_url,
                'awscli': self.awscli_url,
            },
            'tools': {
                'nerd_font_cask': self.nerd_font_cask,
                'npm_globals': self.npm_globals,
                'go': self.go_tools,
            },
        }


def _string_list(value: Any, key: str) -> List[str]:
    """A list of names; a lone name is a one-item list"""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list of names")
    return [str(name) for name in value]


def _string_lists(table: Any, key: str) -> Dict[str, List[str]]:
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ValueError(f"'{key}' must map platforms to package lists")
    return {str(name): _string_list(names, f"{key}.{name}") for name, names in table.items()}


def _go_tools(table: Any) -> Dict[str, str]:
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ValueError("'tools.go' must map tool names to module paths")
    return {str(name): str(module) for name, module in table.items()}


class ConfigManager:
    """Locate, read and write .devstrap.yml"""

    DEFAULT_CONFIG_NAME = ".devstrap.yml"

    @staticmethod
    def find_config(start_path: Path = None) -> Optional[Path]:
        """Nearest .devstrap.yml in start_path or one of its parents"""
        start = (start_path or Path.cwd()).resolve()
        for directory in (start, *start.parents):
            candidate = directory / ConfigManager.DEFAULT_CONFIG_NAME
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def load_config(config_path: Path = None) -> DevstrapConfig:
        """
        Load the provisioning configuration

        A missing file gives the built-in package lists. A file that cannot
        be read or does not have the expected shape is reported on stdout
        and the built-in lists are used instead.

        Args:
            config_path: Explicit file (default: nearest .devstrap.yml)

        Returns:
            DevstrapConfig object
        """
        config_path = config_path or ConfigManager.find_config()
        if config_path is None or not config_path.exists():
            return DevstrapConfig()

        try:
            data = yaml.safe_load(config_path.read_text())
            if not isinstance(data, dict):
                return DevstrapConfig()
            return DevstrapConfig.from_dict(data)
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
            print(f"Warning: Failed to load config from {config_path}: {e}")
            return DevstrapConfig()

    @staticmethod
    def create_default_config(directory: Path, force: bool = False) -> Path:
        """
        Write the built-in configuration as .devstrap.yml

        Args:
            directory: Where to write the file
            force: Replace an existing file

        Returns:
            Path to the written file

        Raises:
            FileExistsError: the file exists and force is False
        """
        config_path = directory / ConfigManager.DEFAULT_CONFIG_NAME
        if config_path.exists() and not force:
            raise FileExistsError(config_path)

        directory.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.safe_dump(DevstrapConfig().to_dict(), f, default_flow_style=False, sort_keys=False)
        return config_path
