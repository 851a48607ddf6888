"""
Tenant Log Service Client

Registers an application, submits log entries and reads them back.

Usage:
    python scripts/log_client.py register billing-api
    python scripts/log_client.py post --api-key KEY --app-id ID --class-name Billing "charge failed"
    python scripts/log_client.py get --api-key KEY --app-id ID --date 2024-01-01
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_URL = os.environ.get("LOG_SERVICE_URL", "http://localhost:8000")


class LogServiceClient:
    """
    Client for the Tenant Log Service HTTP API.
    """

    def __init__(self, api_url: str, timeout: float = 30.0):
        """
        Initialize the client.

        Args:
            api_url: Base URL of the log service
            timeout: Request timeout in seconds
        """
        self.api_url = api_url.rstrip('/')
        self.client = httpx.Client(timeout=timeout)

    def register(self, app_name: str) -> Dict[str, str]:
        """
        Register an application.

        Returns:
            ``{"appName", "appId", "apiKey"}``; keep the api key safe.

        Raises:
            httpx.HTTPStatusError: On API errors (409 if the name is taken)
        """
        response = self.client.post(
            f"{self.api_url}/v1/register",
            params={"appName": app_name}
        )
        response.raise_for_status()
        return response.json()

    def post_log(
        self,
        api_key: str,
        app_id: str,
        message: str,
        class_name: str,
        log_level: str = "info"
    ) -> None:
        """
        Submit one log entry.

        Raises:
            httpx.HTTPStatusError: On API errors (401 on bad credentials)
        """
        response = self.client.post(
            f"{self.api_url}/v1/logs",
            params={"apiKey": api_key, "appId": app_id},
            json={"message": message, "logLevel": log_level, "className": class_name}
        )
        response.raise_for_status()

    def get_logs(
        self,
        api_key: str,
        app_id: str,
        date: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch log entries, optionally for one day (YYYY-MM-DD).

        Raises:
            httpx.HTTPStatusError: On API errors
        """
        params = {"apiKey": api_key, "appId": app_id}
        if date:
            params["date"] = date

        response = self.client.get(f"{self.api_url}/v1/logs", params=params)
        response.raise_for_status()
        return response.json()["logs"]

    def close(self):
        """Close the HTTP client."""
        self.client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tenant Log Service client")
    parser.add_argument("--url", default=DEFAULT_URL, help="Service base URL")
    commands = parser.add_subparsers(dest="command", required=True)

    register = commands.add_parser("register", help="Register an application")
    register.add_argument("app_name")

    post = commands.add_parser("post", help="Submit a log entry")
    post.add_argument("--api-key", required=True)
    post.add_argument("--app-id", required=True)
    post.add_argument("--class-name", required=True)
    post.add_argument("--level", default="info")
    post.add_argument("message")

    get = commands.add_parser("get", help="List log entries")
    get.add_argument("--api-key", required=True)
    get.add_argument("--app-id", required=True)
    get.add_argument("--date", default=None, help="YYYY-MM-DD")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    client = LogServiceClient(args.url)

    try:
        if args.command == "register":
            tenant = client.register(args.app_name)
            print(json.dumps(tenant, indent=2))
            print("\nStore the apiKey now: it will not be shown again.", file=sys.stderr)
        elif args.command == "post":
            client.post_log(args.api_key, args.app_id, args.message, args.class_name, args.level)
            print("Log entry stored")
        else:
            entries = client.get_logs(args.api_key, args.app_id, args.date)
            print(json.dumps(entries, indent=2))
    except httpx.HTTPStatusError as e:
        try:
            detail = e.response.json().get("detail", e.response.text)
        except ValueError:
            detail = e.response.text
        print(f"Error {e.response.status_code}: {detail}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
