"""
Version control system (VCS) integration.

Only Git is supported. The client exposes the tag operations used by
:mod:`pkgtag.tagger`: looking tags up, creating them and pushing them.
"""

from .git_client import GitClient, GitError  # noqa: F401
