"""Release inference and version file updates."""

from relver.services.release.errors import InferenceError
from relver.services.release.inference import (
    BranchCandidate,
    check_branch_in_config,
    check_cleanliness,
    commit_subject_options,
    commit_subject_version,
    current_branch_name,
    fetch_remote,
    last_merged_branch_names,
    last_merged_prefix,
    last_tag_version,
)
from relver.services.release.json_files import update_files
from relver.services.release.subject_options import SubjectOptions

__all__ = [
    "BranchCandidate",
    "InferenceError",
    "SubjectOptions",
    "check_branch_in_config",
    "check_cleanliness",
    "commit_subject_options",
    "commit_subject_version",
    "current_branch_name",
    "fetch_remote",
    "last_merged_branch_names",
    "last_merged_prefix",
    "last_tag_version",
    "update_files",
]
