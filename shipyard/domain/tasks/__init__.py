"""
Deployment Tasks Package

Architectural Intent:
- Task contract plus the built-in task variants
- Every variant routes its commands through the ShellCommandService
"""

from shipyard.domain.tasks.task import Task
from shipyard.domain.tasks.options import TaskOptions
from shipyard.domain.tasks.shell_task import ShellTask, ShellTaskOptions
from shipyard.domain.tasks.symlink_release_task import SymlinkReleaseTask
from shipyard.domain.tasks.cleanup_releases_task import CleanupReleasesTask
from shipyard.domain.tasks.varnish_purge_task import VarnishPurgeTask, VarnishPurgeOptions

BUILTIN_TASKS = (ShellTask, SymlinkReleaseTask, CleanupReleasesTask, VarnishPurgeTask)

__all__ = [
    "Task",
    "TaskOptions",
    "ShellTask",
    "ShellTaskOptions",
    "SymlinkReleaseTask",
    "CleanupReleasesTask",
    "VarnishPurgeTask",
    "VarnishPurgeOptions",
    "BUILTIN_TASKS",
]
