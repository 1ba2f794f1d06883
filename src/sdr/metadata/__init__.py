# The version is read from the installed distribution metadata. When running
# from a source checkout that was never installed, it is left unset.
from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str | None = version("sdr-metadata")
except PackageNotFoundError:
    __version__ = None

__all__ = ["__version__"]
