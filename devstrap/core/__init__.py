"""
devstrap Core
Command execution, package installation, dotfiles linking and tool bootstrap
"""
