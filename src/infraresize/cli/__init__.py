# src/infraresize/cli/__init__.py
"""
infraresize CLI Package

This package exposes the top-level Typer `app` so tests and the console
entrypoint can import `infraresize.cli.app`.
"""

import logging

from ..core.orchestrator import ResizeOrchestrator

# Re-export commonly patched symbols for tests
from ..reporters.plan_reporter import PlanReporter
from .main import app

logger = logging.getLogger(__name__)

__all__ = ["app", "PlanReporter", "ResizeOrchestrator"]
