"""Tool handlers package."""

from tools.handlers.diagnostics import DiagnosticsHandler

__all__ = [
    'DiagnosticsHandler',
    'default_handlers',
]


def default_handlers(**collaborators):
    """Handler groups served by the default server."""
    return [DiagnosticsHandler(**collaborators)]
