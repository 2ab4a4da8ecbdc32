"""Git operations module.

Usage:
    from relver.git import Repository

    repo = Repository(Path.cwd())
    branch = repo.current_branch()
    if branch.is_ok():
        print(f"Branch: {branch.unwrap()}")
"""

from relver.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
