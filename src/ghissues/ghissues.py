#!/usr/bin/env python
# coding: utf-8
import argparse
import json
import os
import sys
from typing import List, Optional, Tuple

import requests
from dateutil.parser import parse as dateutil_parse

from ghissues.github.api import GithubAPI
from ghissues.github.errors import GithubError
from ghissues.github.issue import Issue, IssueRequest
from ghissues.github.milestone import Milestone
from ghissues.github.options import (
    IssueListByRepoOptions,
    IssueListOptions,
    ListOptions,
    LockIssueOptions,
    MilestoneListOptions,
)
from ghissues.github.serialize import to_json_value
from ghissues.logger import init_logger, set_verbosity
from . import __version__

ENV_GITHUB_TOKEN = "GITHUB_ACCESS_TOKEN"
ENV_PER_PAGE_OVERRIDE = "_GHISSUES_PER_PAGE_OVERRIDE"
GITHUB_ACCESS_TOKEN_PATHS = [
    os.path.expanduser(os.path.join("~", ".config", "ghissues", "token")),
    os.path.expanduser(os.path.join("~", ".github-token")),
]

LOCK_REASONS = ["off-topic", "too heated", "resolved", "spam"]

DESCRIPTION = """Work with Github issues and milestones from the command line.

Example: ghissues issues list --repo octocat/hello-world --state all

Credentials are resolved in the following order:

- A `{token}` environment variable.
- An API token stored in ~/.config/ghissues/token or ~/.github-token.

Set GHISSUES_API_URL to talk to a Github Enterprise server.
""".format(
    token=ENV_GITHUB_TOKEN
)

logger = init_logger(__name__)


def _add_repo_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "repo",
        help='Github repo, in format "owner/repo_name".',
        type=str,
        action="store",
    )


def _add_number_arg(parser: argparse.ArgumentParser, what: str) -> None:
    parser.add_argument("number", help=f"{what} number.", type=int, action="store")


def _add_issue_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", type=str, action="store")
    parser.add_argument("--body", type=str, action="store")
    parser.add_argument(
        "--label",
        help="Label name, can be repeated. Replaces the existing labels.",
        action="append",
        dest="labels",
    )
    parser.add_argument(
        "--assignee",
        help="Login to assign, can be repeated. Replaces the existing assignees.",
        action="append",
        dest="assignees",
    )
    parser.add_argument("--milestone", help="Milestone number.", type=int, action="store")
    parser.add_argument("--type", help="Issue type name.", type=str, action="store")


def _add_milestone_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", type=str, action="store")
    parser.add_argument("--description", type=str, action="store")
    parser.add_argument("--state", choices=["open", "closed"], action="store")
    parser.add_argument("--due-on", help="Due date, eg. 2024-06-30.", type=str, action="store", dest="due_on")


def _add_list_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--state", choices=["open", "closed", "all"], default="", action="store")
    parser.add_argument("--sort", type=str, default="", action="store")
    parser.add_argument("--direction", choices=["asc", "desc"], default="", action="store")
    parser.add_argument("--page", type=int, default=0, action="store")
    parser.add_argument("--per-page", type=int, default=0, action="store", dest="per_page")


def parse_args(args):
    parser = argparse.ArgumentParser(
        prog="ghissues",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--json",
        help="Print records as JSON instead of one line per record.",
        action="store_true",
        dest="as_json",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Log every request sent.",
        action="store_true",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        help="Only log errors.",
        action="store_true",
    )
    parser.add_argument(
        "--version", action="version", version="ghissues {}".format(__version__)
    )
    resources = parser.add_subparsers(dest="resource", required=True)

    issues = resources.add_parser("issues", help="Issue commands.")
    issue_commands = issues.add_subparsers(dest="command", required=True)

    p = issue_commands.add_parser("list", help="List issues.")
    scope = p.add_mutually_exclusive_group()
    scope.add_argument(
        "--all",
        help="List issues across all visible repositories, not only owned and member ones.",
        action="store_true",
        dest="all_repos",
    )
    scope.add_argument("--org", type=str, action="store")
    scope.add_argument("--repo", type=str, action="store")
    _add_list_args(p)
    p.add_argument("--filter", type=str, default="", action="store")
    p.add_argument("--labels", help="Comma separated label names.", type=str, default="", action="store")
    p.add_argument("--since", help="Only issues updated at or after this time.", type=str, action="store")
    p.add_argument("--milestone", type=str, default="", action="store")
    p.add_argument("--assignee", type=str, default="", action="store")
    p.add_argument("--creator", type=str, default="", action="store")
    p.add_argument("--mentioned", type=str, default="", action="store")

    p = issue_commands.add_parser("get", help="Show one issue.")
    _add_repo_arg(p)
    _add_number_arg(p, "Issue")

    p = issue_commands.add_parser("create", help="Create an issue.")
    _add_repo_arg(p)
    _add_issue_fields(p)

    p = issue_commands.add_parser("edit", help="Edit an issue. Only the given fields change.")
    _add_repo_arg(p)
    _add_number_arg(p, "Issue")
    _add_issue_fields(p)
    p.add_argument("--state", choices=["open", "closed"], action="store")
    p.add_argument(
        "--state-reason",
        choices=["completed", "not_planned", "reopened"],
        action="store",
        dest="state_reason",
    )

    p = issue_commands.add_parser("remove-milestone", help="Clear the milestone of an issue.")
    _add_repo_arg(p)
    _add_number_arg(p, "Issue")

    p = issue_commands.add_parser("lock", help="Lock an issue's conversation.")
    _add_repo_arg(p)
    _add_number_arg(p, "Issue")
    p.add_argument("--reason", choices=LOCK_REASONS, action="store")

    p = issue_commands.add_parser("unlock", help="Unlock an issue's conversation.")
    _add_repo_arg(p)
    _add_number_arg(p, "Issue")

    milestones = resources.add_parser("milestones", help="Milestone commands.")
    milestone_commands = milestones.add_subparsers(dest="command", required=True)

    p = milestone_commands.add_parser("list", help="List milestones of a repo.")
    _add_repo_arg(p)
    _add_list_args(p)

    p = milestone_commands.add_parser("get", help="Show one milestone.")
    _add_repo_arg(p)
    _add_number_arg(p, "Milestone")

    p = milestone_commands.add_parser("create", help="Create a milestone.")
    _add_repo_arg(p)
    _add_milestone_fields(p)

    p = milestone_commands.add_parser("edit", help="Edit a milestone.")
    _add_repo_arg(p)
    _add_number_arg(p, "Milestone")
    _add_milestone_fields(p)

    p = milestone_commands.add_parser("delete", help="Delete a milestone.")
    _add_repo_arg(p)
    _add_number_arg(p, "Milestone")

    return parser.parse_args(args)


def split_repo(repo_name: str) -> Tuple[str, str]:
    try:
        owner, repo = repo_name.split("/")
    except ValueError:
        raise ValueError(f'Repo must be in format "owner/repo_name", got: {repo_name}')
    return owner, repo


def format_issue(issue: Issue) -> str:
    """
    One line summary of an issue or PR.
    """
    kind = "PR" if issue.is_pull_request else "Issue"
    line = f"#{issue.number} {kind} {issue.state}: {issue.title}"
    if issue.label_names:
        line += " [{}]".format(", ".join(issue.label_names))
    if issue.locked:
        line += " (locked)"
    return line


def format_milestone(milestone: Milestone) -> str:
    line = f"#{milestone.number} {milestone.state}: {milestone.title}"
    if milestone.open_issues is not None and milestone.closed_issues is not None:
        line += f" ({milestone.open_issues} open, {milestone.closed_issues} closed)"
    if milestone.due_on:
        line += " due {}".format(milestone.due_on.strftime("%Y-%m-%d"))
    return line


def _per_page(args) -> int:
    per_page_override = os.environ.get(ENV_PER_PAGE_OVERRIDE, None)
    if per_page_override:
        return int(per_page_override)
    return args.per_page


def _issue_request(args) -> IssueRequest:
    return IssueRequest(
        title=args.title,
        body=args.body,
        labels=args.labels,
        assignees=args.assignees,
        milestone=args.milestone,
        type=args.type,
        state=getattr(args, "state", None),
        state_reason=getattr(args, "state_reason", None),
    )


def _milestone(args) -> Milestone:
    return Milestone(
        title=args.title,
        description=args.description,
        state=args.state,
        due_on=dateutil_parse(args.due_on) if args.due_on else None,
    )


def run_issues_command(gh: GithubAPI, args) -> Optional[List]:
    service = gh.issues
    if args.command == "list":
        page = ListOptions(page=args.page, per_page=_per_page(args))
        labels = [lab for lab in args.labels.split(",") if lab]
        since = dateutil_parse(args.since) if args.since else None
        if args.repo:
            owner, repo = split_repo(args.repo)
            options = IssueListByRepoOptions(
                milestone=args.milestone,
                state=args.state,
                assignee=args.assignee,
                creator=args.creator,
                mentioned=args.mentioned,
                labels=labels,
                sort=args.sort,
                direction=args.direction,
                since=since,
                list_options=page,
            )
            issues, resp = service.list_by_repo(owner, repo, options)
        else:
            options = IssueListOptions(
                filter=args.filter,
                state=args.state,
                labels=labels,
                sort=args.sort,
                direction=args.direction,
                since=since,
                list_options=page,
            )
            if args.org:
                issues, resp = service.list_by_org(args.org, options)
            else:
                issues, resp = service.list(args.all_repos, options)
        if resp.next_page:
            logger.info(f"More issues available, next page: {resp.next_page}")
        return issues

    owner, repo = split_repo(args.repo)
    if args.command == "get":
        issue, _ = service.get(owner, repo, args.number)
    elif args.command == "create":
        issue, _ = service.create(owner, repo, _issue_request(args))
        logger.info(f"Created issue: {issue.html_url}")
    elif args.command == "edit":
        issue, _ = service.edit(owner, repo, args.number, _issue_request(args))
    elif args.command == "remove-milestone":
        issue, _ = service.remove_milestone(owner, repo, args.number)
    elif args.command == "lock":
        options = LockIssueOptions(lock_reason=args.reason) if args.reason else None
        service.lock(owner, repo, args.number, options)
        logger.info(f"Locked issue {args.repo}#{args.number}")
        return None
    elif args.command == "unlock":
        service.unlock(owner, repo, args.number)
        logger.info(f"Unlocked issue {args.repo}#{args.number}")
        return None
    else:
        raise ValueError(f"Unknown issues command: {args.command}")
    return [issue]


def run_milestones_command(gh: GithubAPI, args) -> Optional[List]:
    service = gh.issues
    owner, repo = split_repo(args.repo)
    if args.command == "list":
        options = MilestoneListOptions(
            state=args.state,
            sort=args.sort,
            direction=args.direction,
            list_options=ListOptions(page=args.page, per_page=_per_page(args)),
        )
        milestones, _ = service.list_milestones(owner, repo, options)
        return milestones
    if args.command == "get":
        milestone, _ = service.get_milestone(owner, repo, args.number)
    elif args.command == "create":
        milestone, _ = service.create_milestone(owner, repo, _milestone(args))
    elif args.command == "edit":
        milestone, _ = service.edit_milestone(owner, repo, args.number, _milestone(args))
    elif args.command == "delete":
        service.delete_milestone(owner, repo, args.number)
        logger.info(f"Deleted milestone {args.repo}#{args.number}")
        return None
    else:
        raise ValueError(f"Unknown milestones command: {args.command}")
    return [milestone]


def print_records(records: List, as_json: bool, out=None) -> None:
    out = out or sys.stdout
    if as_json:
        json.dump([to_json_value(r) for r in records], out, indent=2)
        out.write("\n")
        return
    for record in records:
        if isinstance(record, Issue):
            out.write(format_issue(record) + "\n")
        else:
            out.write(format_milestone(record) + "\n")


def get_environment_token() -> str:
    try:
        logger.info(f"Looking for token in envvar {ENV_GITHUB_TOKEN}")
        token = os.environ[ENV_GITHUB_TOKEN]
        logger.info("Using token from environment")
        return token
    except KeyError:
        for path in GITHUB_ACCESS_TOKEN_PATHS:
            logger.info(f"Looking for token in file: {path}")
            if os.path.exists(path):
                logger.info(f"Using token from file: {path}")
                with open(path, "r") as f:
                    token = f.read().strip()
                    return token


def main(argv=None) -> int:
    """Entry point"""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    set_verbosity(verbose=args.verbose, quiet=args.quiet)

    gh = GithubAPI(token=get_environment_token())
    try:
        if args.resource == "issues":
            records = run_issues_command(gh, args)
        else:
            records = run_milestones_command(gh, args)
    except (GithubError, requests.RequestException, ValueError) as e:
        logger.error(str(e))
        return 1

    if records is not None:
        print_records(records, args.as_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
