"""genapp: interactive scaffolder for React and Next.js projects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("genapp")
except PackageNotFoundError:
    __version__ = "0.0.0"
