from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ghissues.github.issue import Issue, IssueRequest
from ghissues.github.milestone import Milestone
from ghissues.github.options import (
    IssueListByRepoOptions,
    IssueListOptions,
    LockIssueOptions,
    MilestoneListOptions,
    add_options,
)

if TYPE_CHECKING:
    from ghissues.github.api import GithubAPI, Response

# Needed for the reactions summary on issues.
MEDIA_TYPE_REACTIONS_PREVIEW = "application/vnd.github.squirrel-girl-preview"


def _decode_issues(data: List[Dict[str, Any]]) -> List[Issue]:
    return [Issue.from_dict(i) for i in data]


def _decode_milestones(data: List[Dict[str, Any]]) -> List[Milestone]:
    return [Milestone.from_dict(m) for m in data]


class IssuesService:
    """
    Issue and milestone endpoints of the REST API.

    Every method builds one request and sends it through the client, returning
    the decoded value together with the Response. Errors raised by the client
    are passed on untouched.
    """

    def __init__(self, client: "GithubAPI"):
        self._client = client

    def list(
            self, all_repos: bool, options: Optional[IssueListOptions] = None
    ) -> Tuple[List[Issue], "Response"]:
        """
        List issues assigned to the authenticated user. With `all_repos`, this
        covers every repository the user can see, including organization
        ones; otherwise only owned and member repositories.
        """
        url = "issues" if all_repos else "user/issues"
        return self._list_issues(url, options)

    def list_by_org(
            self, org: str, options: Optional[IssueListOptions] = None
    ) -> Tuple[List[Issue], "Response"]:
        return self._list_issues(f"orgs/{org}/issues", options)

    def list_by_repo(
            self, owner: str, repo: str, options: Optional[IssueListByRepoOptions] = None
    ) -> Tuple[List[Issue], "Response"]:
        return self._list_issues(f"repos/{owner}/{repo}/issues", options)

    def _list_issues(self, url: str, options: Any) -> Tuple[List[Issue], "Response"]:
        url = add_options(url, options)
        req = self._client.new_request("GET", url)
        req.headers["Accept"] = MEDIA_TYPE_REACTIONS_PREVIEW
        issues, resp = self._client.do(req, _decode_issues)
        return issues or [], resp

    def get(self, owner: str, repo: str, number: int) -> Tuple[Issue, "Response"]:
        req = self._client.new_request("GET", f"repos/{owner}/{repo}/issues/{number}")
        req.headers["Accept"] = MEDIA_TYPE_REACTIONS_PREVIEW
        return self._client.do(req, Issue.from_dict)

    def create(self, owner: str, repo: str, issue: IssueRequest) -> Tuple[Issue, "Response"]:
        req = self._client.new_request("POST", f"repos/{owner}/{repo}/issues", issue)
        return self._client.do(req, Issue.from_dict)

    def edit(
            self, owner: str, repo: str, number: int, issue: IssueRequest
    ) -> Tuple[Issue, "Response"]:
        """
        Update an issue. Only the fields set on `issue` are changed.
        """
        req = self._client.new_request("PATCH", f"repos/{owner}/{repo}/issues/{number}", issue)
        return self._client.do(req, Issue.from_dict)

    def remove_milestone(self, owner: str, repo: str, number: int) -> Tuple[Issue, "Response"]:
        """
        Clear the milestone of an issue. Leaving `milestone` out of an edit
        keeps it, so this sends an explicit null instead.
        """
        req = self._client.new_request(
            "PATCH", f"repos/{owner}/{repo}/issues/{number}", {"milestone": None}
        )
        return self._client.do(req, Issue.from_dict)

    def lock(
            self, owner: str, repo: str, number: int, options: Optional[LockIssueOptions] = None
    ) -> "Response":
        req = self._client.new_request("PUT", f"repos/{owner}/{repo}/issues/{number}/lock", options)
        _, resp = self._client.do(req)
        return resp

    def unlock(self, owner: str, repo: str, number: int) -> "Response":
        req = self._client.new_request("DELETE", f"repos/{owner}/{repo}/issues/{number}/lock")
        _, resp = self._client.do(req)
        return resp

    def list_milestones(
            self, owner: str, repo: str, options: Optional[MilestoneListOptions] = None
    ) -> Tuple[List[Milestone], "Response"]:
        url = add_options(f"repos/{owner}/{repo}/milestones", options)
        req = self._client.new_request("GET", url)
        milestones, resp = self._client.do(req, _decode_milestones)
        return milestones or [], resp

    def get_milestone(self, owner: str, repo: str, number: int) -> Tuple[Milestone, "Response"]:
        req = self._client.new_request("GET", f"repos/{owner}/{repo}/milestones/{number}")
        return self._client.do(req, Milestone.from_dict)

    def create_milestone(
            self, owner: str, repo: str, milestone: Milestone
    ) -> Tuple[Milestone, "Response"]:
        req = self._client.new_request("POST", f"repos/{owner}/{repo}/milestones", milestone)
        return self._client.do(req, Milestone.from_dict)

    def edit_milestone(
            self, owner: str, repo: str, number: int, milestone: Milestone
    ) -> Tuple[Milestone, "Response"]:
        req = self._client.new_request(
            "PATCH", f"repos/{owner}/{repo}/milestones/{number}", milestone
        )
        return self._client.do(req, Milestone.from_dict)

    def delete_milestone(self, owner: str, repo: str, number: int) -> "Response":
        req = self._client.new_request("DELETE", f"repos/{owner}/{repo}/milestones/{number}")
        _, resp = self._client.do(req)
        return resp
