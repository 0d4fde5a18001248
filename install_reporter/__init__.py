"""Install Reporter - diagnostic reports for installer runs."""

try:
    from install_reporter._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"
