"""
CLI client for the Diff Voyager API.

Usage:
    diff-voyager project create my-site https://example.com
    diff-voyager project get my-site
    diff-voyager project list
    diff-voyager snapshot create my-site --full
    diff-voyager snapshot list my-site
    diff-voyager job list --status PENDING
    diff-voyager job get <job_id>

The API server defaults to API_URL (or http://localhost:3000); override it
with --api.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from dotenv import load_dotenv

from diff_voyager.infra.settings import DEFAULT_API_URL
from diff_voyager.scheduler import JobStatus


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1

REQUEST_TIMEOUT_SECONDS = 10.0


class ApiError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")


class ApiClient:
    """Thin synchronous wrapper around the HTTP API."""

    def __init__(self, base_url: str, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        with httpx.Client(timeout=self.timeout) as client:
            response = client.request(method, url, **kwargs)

        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, detail)

        return response.json()

    # Projects

    def create_project(self, name: str, url: str) -> dict:
        return self._request("POST", "/api/projects", json={"name": name, "url": url})

    def get_project(self, identifier: str) -> dict:
        return self._request("GET", f"/api/projects/{quote(identifier, safe='')}")

    def list_projects(self) -> dict:
        return self._request("GET", "/api/projects")

    # Snapshots

    def create_snapshot(self, project_id: str, full_scan: bool) -> dict:
        return self._request(
            "POST",
            "/api/snapshots",
            json={"project_id": project_id, "full_scan": full_scan},
        )

    def list_snapshots(self, identifier: str) -> dict:
        return self._request("GET", f"/api/projects/{quote(identifier, safe='')}/snapshots")

    # Jobs

    def list_jobs(self, status: Optional[str] = None) -> dict:
        params = {"status": status} if status else None
        return self._request("GET", "/api/jobs", params=params)

    def get_job(self, job_id: str) -> dict:
        return self._request("GET", f"/api/jobs/{quote(job_id, safe='')}")


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for CLI execution.

    Args:
        verbose: If True, set DEBUG level; otherwise WARNING
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_project(args: argparse.Namespace, client: ApiClient) -> Any:
    if args.action == "create":
        return client.create_project(args.name, args.url)
    if args.action == "get":
        return client.get_project(args.identifier)
    return client.list_projects()


def cmd_snapshot(args: argparse.Namespace, client: ApiClient) -> Any:
    if args.action == "create":
        return client.create_snapshot(args.project, full_scan=args.full)
    return client.list_snapshots(args.project)


def cmd_job(args: argparse.Namespace, client: ApiClient) -> Any:
    if args.action == "get":
        return client.get_job(args.job_id)
    return client.list_jobs(status=args.status)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="diff-voyager",
        description="Diff Voyager CLI - manage projects and snapshots for visual regression testing",
    )

    parser.add_argument(
        "--api",
        default=os.getenv("API_URL", DEFAULT_API_URL),
        help=f"API server URL (default: API_URL or {DEFAULT_API_URL})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # project commands
    project_parser = subparsers.add_parser("project", help="Manage projects")
    project_sub = project_parser.add_subparsers(dest="action", required=True)

    proj_create = project_sub.add_parser("create", help="Create a new project")
    proj_create.add_argument("name", help="Project name")
    proj_create.add_argument("url", help="Base URL to monitor")

    proj_get = project_sub.add_parser("get", help="Get project by UUID or name")
    proj_get.add_argument("identifier", help="Project UUID or name")

    project_sub.add_parser("list", help="List all projects")

    # snapshot commands
    snapshot_parser = subparsers.add_parser("snapshot", help="Manage snapshots")
    snapshot_sub = snapshot_parser.add_subparsers(dest="action", required=True)

    snap_create = snapshot_sub.add_parser("create", help="Create a snapshot for a project")
    snap_create.add_argument("project", help="Project UUID or name")
    scan_mode = snap_create.add_mutually_exclusive_group()
    scan_mode.add_argument(
        "--full",
        dest="full",
        action="store_true",
        help="Crawl the entire domain"
    )
    scan_mode.add_argument(
        "--single",
        dest="full",
        action="store_false",
        help="Capture the project URL only (default)"
    )
    snap_create.set_defaults(full=False)

    snap_list = snapshot_sub.add_parser("list", help="List a project's snapshots")
    snap_list.add_argument("project", help="Project UUID or name")

    # job commands
    job_parser = subparsers.add_parser("job", help="Inspect queued jobs")
    job_sub = job_parser.add_subparsers(dest="action", required=True)

    job_list = job_sub.add_parser("list", help="List jobs")
    job_list.add_argument(
        "--status",
        choices=[s.value for s in JobStatus],
        help="Only show jobs in this status"
    )

    job_get = job_sub.add_parser("get", help="Get job details")
    job_get.add_argument("job_id", help="Job ID")

    return parser


COMMANDS = {
    "project": cmd_project,
    "snapshot": cmd_snapshot,
    "job": cmd_job,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_SUCCESS

    client = ApiClient(args.api)
    try:
        result = handler(args, client)
    except ApiError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return EXIT_ERROR
    except httpx.RequestError as e:
        print(f"Error: cannot reach API at {args.api}: {e}", file=sys.stderr)
        return EXIT_ERROR

    _print_json(result)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
