"""
devstrap - Developer Workstation Provisioning
Installs development tools with the native package manager and links dotfiles with GNU Stow.
"""

__version__ = "0.3.0"
__author__ = "devstrap contributors"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__"]
