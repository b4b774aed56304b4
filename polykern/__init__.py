"""Polyhedral benchmark kernels with a timing harness and command-line runner."""

__version__ = "0.1.0"