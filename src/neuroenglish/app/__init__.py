"""Interactive study session and its launcher."""

from importlib import import_module

__all__ = ["StudySession", "SessionStats", "launch_session"]


def __getattr__(name: str):
    if name in {"StudySession", "SessionStats"}:
        module = import_module("neuroenglish.app.session")
    elif name == "launch_session":
        module = import_module("neuroenglish.app.launcher")
    else:
        raise AttributeError(f"module 'neuroenglish.app' has no attribute {name!r}")
    value = getattr(module, name)
    globals()[name] = value
    return value
