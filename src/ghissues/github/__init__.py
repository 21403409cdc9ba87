from ghissues.github.api import GithubAPI, Rate, Response
from ghissues.github.errors import ErrorResponse, GithubError, RateLimitError, RequestError
from ghissues.github.issue import (
    Issue,
    IssueRequest,
    IssueType,
    LockReason,
    PullRequestLinks,
    Reactions,
    StateReason,
)
from ghissues.github.issues import IssuesService
from ghissues.github.label import Label
from ghissues.github.milestone import Milestone
from ghissues.github.options import (
    IssueListByRepoOptions,
    IssueListOptions,
    ListCursorOptions,
    ListOptions,
    LockIssueOptions,
    MilestoneListOptions,
)
from ghissues.github.repo import GithubRepository
from ghissues.github.user import User
