"""Data models for appstrap."""
from appstrap.models.app import AppDescriptor
from appstrap.models.report import AppResult, AppStatus, FailedApp, RunReport, SkippedApp

__all__ = [
    'AppDescriptor',
    'AppResult',
    'AppStatus',
    'FailedApp',
    'RunReport',
    'SkippedApp',
]
