"""Agent Studio: discovery and reconciliation of AI coding-assistant configuration."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
