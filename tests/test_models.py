"""Tests for decoding and encoding issue records."""

import datetime

from ghissues.github.issue import Issue, IssueRequest, StateReason
from ghissues.github.milestone import Milestone
from ghissues.github.serialize import to_json_value


def test_issue_with_pull_request_links_is_a_pull_request(issue_data):
    issue_data["pull_request"] = {
        "url": "https://api.github.com/repos/o/r/pulls/1347",
        "html_url": "https://github.com/o/r/pull/1347",
        "diff_url": "https://github.com/o/r/pull/1347.diff",
        "patch_url": "https://github.com/o/r/pull/1347.patch",
        "merged_at": "2011-04-23T10:00:00Z",
    }

    issue = Issue.from_dict(issue_data)

    assert issue.is_pull_request
    assert issue.pull_request_links.diff_url.endswith(".diff")
    assert issue.pull_request_links.merged_at == datetime.datetime(
        2011, 4, 23, 10, 0, tzinfo=datetime.timezone.utc
    )


def test_issue_without_pull_request_links_is_not_a_pull_request(issue_data):
    assert not Issue.from_dict(issue_data).is_pull_request


def test_null_pull_request_is_not_a_pull_request(issue_data):
    issue_data["pull_request"] = None

    assert not Issue.from_dict(issue_data).is_pull_request


def test_decode_issue(issue_data):
    issue = Issue.from_dict(issue_data)

    assert issue.user.login == "octocat"
    assert issue.label_names == ["bug"]
    assert issue.labels[0].default is True
    assert issue.assignees[0].login == "octocat"
    assert issue.created_at == datetime.datetime(2011, 4, 22, 13, 33, 48, tzinfo=datetime.timezone.utc)
    assert issue.closed_at is None
    assert issue.reactions.plus_one == 2
    assert issue.reactions.minus_one == 0
    assert issue.reactions.laugh is None


def test_absent_and_zero_values_stay_distinct(issue_data):
    issue = Issue.from_dict(issue_data)

    assert issue.comments == 0
    assert issue.locked is False
    assert issue.draft is None
    assert issue.state_reason is None


def test_absent_lists_stay_none():
    issue = Issue.from_dict({"number": 1})

    assert issue.labels is None
    assert issue.assignees is None
    assert issue.label_names == []


def test_decode_issue_type_and_lock_reason(issue_data):
    issue_data["type"] = {
        "id": 410,
        "name": "Bug",
        "description": "An unexpected problem or behavior",
        "color": "red",
        "created_at": "2024-12-11T14:39:09Z",
    }
    issue_data["locked"] = True
    issue_data["active_lock_reason"] = "too heated"

    issue = Issue.from_dict(issue_data)

    assert issue.type.name == "Bug"
    assert issue.type.updated_at is None
    assert issue.active_lock_reason == "too heated"


def test_decode_ignores_unknown_fields(issue_data):
    issue_data["timeline_url"] = "https://api.github.com/repos/o/r/issues/1347/timeline"

    assert Issue.from_dict(issue_data).number == 1347


def test_repository_is_decoded(issue_data):
    issue_data["repository"] = {"id": 7, "full_name": "o/r", "owner": {"login": "o"}}

    issue = Issue.from_dict(issue_data)

    assert issue.repository.full_name == "o/r"
    assert issue.repository.owner.login == "o"


def test_issue_request_leaves_out_unset_fields():
    assert IssueRequest().to_dict() == {}
    assert IssueRequest(milestone=3, state_reason=StateReason.COMPLETED).to_dict() == {
        "milestone": 3,
        "state_reason": "completed",
    }


def test_milestone_round_trips_its_timestamps(milestone_data):
    milestone = Milestone.from_dict(milestone_data)

    data = milestone.to_dict()

    assert data["due_on"] == "2012-10-09T23:39:01Z"
    assert data["creator"] == {"login": "octocat", "id": 1}
    assert "closed_at" not in data


def test_reactions_encode_with_wire_names(issue_data):
    data = to_json_value(Issue.from_dict(issue_data).reactions)

    assert data == {"total_count": 3, "+1": 2, "-1": 0, "heart": 1}
