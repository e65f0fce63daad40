"""
Custom setup.py to exclude pygame-dependent files from the wheel.

viewer.py and controls.py require pygame, which headless installs (the
simulation core and the --snap CLI) do not need. They are only needed for
local interactive use from a checkout: pip install -e .[viewer]
"""

from setuptools import setup
from setuptools.command.build_py import build_py as _build_py


# Modules that import pygame and stay out of the wheel.
_EXCLUDE_MODULES = {"viewer", "controls"}


class BuildPy(_build_py):
    """Custom build_py that excludes pygame-dependent modules."""

    def find_package_modules(self, package, package_dir):
        modules = super().find_package_modules(package, package_dir)
        return [
            (pkg, mod, path)
            for (pkg, mod, path) in modules
            if mod not in _EXCLUDE_MODULES
        ]


setup(
    cmdclass={"build_py": BuildPy},
)
