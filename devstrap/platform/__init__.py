"""
devstrap Platform Detection & Installation
OS detection and native package manager bindings
"""

from devstrap.platform.detector import (
    Platform,
    PlatformDetector,
    PlatformSignals,
    classify_platform,
    parse_os_release,
)

__all__ = [
    'Platform',
    'PlatformDetector',
    'PlatformSignals',
    'classify_platform',
    'parse_os_release',
]
