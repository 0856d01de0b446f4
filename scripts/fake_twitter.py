#!/usr/bin/env python3
"""
Fake X/Twitter user lookup API for local development and testing.

Implements the one endpoint handle-check uses:
- GET /2/users/by/username/{username} (bearer token required)

Responses mirror the real API's shapes: a user record for taken handles,
a "Not Found Error" entry for free ones, and a "Forbidden" error for
suspended accounts.

Run with: python scripts/fake_twitter.py --port 9010
Then:     TWITTER_BEARER_TOKEN=fake-bearer-token \
          python -m handle_check.run --api-base http://127.0.0.1:9010 jack
"""

import argparse
import json
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import unquote, urlparse

DEFAULT_TOKEN = "fake-bearer-token"

# Fake user database, keyed by lowercase username (lookups are case-insensitive)
FAKE_USERS = {
    "jack": {"id": "12", "name": "jack", "username": "jack"},
    "twitter": {"id": "783214", "name": "X", "username": "Twitter"},
    "python_dev": {"id": "1000001", "name": "Python Dev", "username": "python_dev"},
    "taken_handle": {"id": "1000002", "name": "Taken", "username": "taken_handle"},
}

SUSPENDED_USERS = {"suspended1"}

# Usernames that make the fake server fail, to exercise error handling
FAILING_USERS = {"server_error"}

USER_LOOKUP_PREFIX = "/2/users/by/username/"


class FakeTwitterHandler(BaseHTTPRequestHandler):
    """HTTP handler implementing the fake user lookup endpoint."""

    token = DEFAULT_TOKEN

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        """Override to add prefix."""
        print(f"[FakeTwitter] {args[0]}")

    def send_json(self, data: dict, status: int = 200) -> None:
        """Send a JSON response."""
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_GET(self) -> None:
        path = urlparse(self.path).path

        if not path.startswith(USER_LOOKUP_PREFIX):
            self.send_json(
                {"title": "Not Found", "status": 404, "detail": f"Unknown endpoint: {path}"},
                status=404,
            )
            return

        if not self.verify_token():
            return

        self.handle_user_lookup(unquote(path[len(USER_LOOKUP_PREFIX) :]))

    def verify_token(self) -> bool:
        """Verify the bearer token in the Authorization header."""
        auth_header = self.headers.get("Authorization", "")
        if auth_header != f"Bearer {self.token}":
            self.send_json(
                {
                    "title": "Unauthorized",
                    "type": "about:blank",
                    "status": 401,
                    "detail": "Unauthorized",
                },
                status=401,
            )
            return False
        return True

    def handle_user_lookup(self, username: str) -> None:
        key = username.lower()

        if key in FAILING_USERS:
            self.send_json({"title": "Service Unavailable", "status": 503}, status=503)
            return

        if key in SUSPENDED_USERS:
            self.send_json(
                {
                    "errors": [
                        {
                            "value": username,
                            "detail": f"User has been suspended: [{username}].",
                            "title": "Forbidden",
                            "resource_type": "user",
                            "parameter": "username",
                            "resource_id": username,
                            "type": "https://api.twitter.com/2/problems/resource-not-found",
                        }
                    ]
                }
            )
            return

        user = FAKE_USERS.get(key)
        if user:
            self.send_json({"data": user})
            return

        self.send_json(
            {
                "errors": [
                    {
                        "value": username,
                        "detail": f"Could not find user with username: [{username}].",
                        "title": "Not Found Error",
                        "resource_type": "user",
                        "parameter": "username",
                        "resource_id": username,
                        "type": "https://api.twitter.com/2/problems/resource-not-found",
                    }
                ]
            }
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Run fake X/Twitter user lookup API")
    parser.add_argument(
        "--port",
        type=int,
        default=9010,
        help="Port to listen on (default: 9010)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=DEFAULT_TOKEN,
        help=f"Accepted bearer token (default: {DEFAULT_TOKEN})",
    )
    args = parser.parse_args()

    FakeTwitterHandler.token = args.token
    server = HTTPServer((args.host, args.port), FakeTwitterHandler)
    print(f"Fake X/Twitter API running at http://{args.host}:{args.port}")
    print(f"Bearer token: {args.token}")
    print("Taken handles:")
    for user in FAKE_USERS.values():
        print(f"  @{user['username']}")
    print(f"Suspended: {', '.join(sorted(SUSPENDED_USERS))}")
    print(f"Server errors: {', '.join(sorted(FAILING_USERS))}")
    print()

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        server.shutdown()


if __name__ == "__main__":
    main()
