"""Factories for constructing components from configuration."""

from __future__ import annotations

from .config import ControllerConfig
from .lifecycle.launcher import SessionLauncher


def build_launcher(config: ControllerConfig) -> SessionLauncher:
    return SessionLauncher(config)
