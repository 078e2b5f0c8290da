"""Interactive git branch checkout helper.

Features:
- List local and remote-tracking branches
- Rank branches by when they were last checked out (from the reflog)
- Fuzzy incremental search to pick a branch
- Create a local tracking branch when the pick only exists on a remote
"""

__version__ = "0.3.0"
