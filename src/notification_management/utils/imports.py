"""Dotted-path imports for configuration values."""

import importlib


def import_from_path(path: str):
    """Import ``package.module.Attr`` (or ``package.module:Attr``)."""
    module_path, sep, attr = path.partition(":")
    if not sep:
        module_path, _, attr = path.rpartition(".")
    if not module_path or not attr:
        raise ImportError(f"'{path}' is not a dotted import path")
    module = importlib.import_module(module_path)
    return getattr(module, attr)
