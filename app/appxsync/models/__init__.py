"""Data models for appxsync.

This module exports the core data structures used throughout the application.
"""

from appxsync.models.app_config import AppConfig, Resource, ResourceSet
from appxsync.models.project import TemplateKind, WindowsProject, discover_project

__all__ = [
    "AppConfig",
    "Resource",
    "ResourceSet",
    "TemplateKind",
    "WindowsProject",
    "discover_project",
]
