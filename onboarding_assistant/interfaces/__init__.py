"""Interface abstraction layer for CLI and Web applications."""

from .base import OnboardingInterface
from .context import InterfaceContext
from .handlers import WorkflowHandler

__all__ = ["OnboardingInterface", "InterfaceContext", "WorkflowHandler"]
