"""
Data models for locsync
"""

from .file_status import FileStatus, StatusMatrix
from .project import ProjectConfig
from .sync_result import PullResult, UploadResult

__all__ = ['FileStatus', 'StatusMatrix', 'ProjectConfig', 'PullResult', 'UploadResult']
