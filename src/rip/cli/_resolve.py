"""Locate the App named on the ``rip routes`` / ``rip run`` command line."""

import importlib
from collections.abc import Callable

from rip.app import App


def resolve_app(import_string: str) -> App:
    """Import the App behind *import_string*.

    ``"pkg.module:name"`` imports ``pkg.module`` and reads ``name``;
    ``"pkg.module"`` reads ``app``. When ``name`` is a zero-argument
    callable rather than an App, it is called to build one, so apps that
    register their endpoints inside a function work too.

    Registration errors raised while a factory builds the app (an
    ``AmbiguousRegistration``, say) are reported as ``TypeError`` with
    the original message.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The module has no such attribute.
        TypeError: The import string names no module, the factory
            failed, or the result is not a rip ``App``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not module_path:
        msg = f"{import_string!r} names no module; expected 'module:attribute'"
        raise TypeError(msg)

    target = getattr(importlib.import_module(module_path), attr_name or "app")
    if not isinstance(target, App) and callable(target):
        target = _build(target, import_string)

    if not isinstance(target, App):
        msg = f"{import_string!r} resolved to {type(target).__name__}, not a rip.App instance"
        raise TypeError(msg)
    return target


def _build(factory: Callable[[], object], import_string: str) -> object:
    try:
        return factory()
    except Exception as exc:
        msg = f"App factory {import_string!r} failed while building the app: {exc}"
        raise TypeError(msg) from exc
