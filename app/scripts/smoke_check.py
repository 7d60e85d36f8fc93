"""
End-to-end smoke check against a running server: wait until it answers, then
register a throwaway user, log in and fetch /auth/me. Run from project root:
  python -m app.scripts.smoke_check --base-url http://localhost:8000/api
Exits 0 when every step succeeds, 1 on the first failure.
"""
import argparse
import logging
import sys
import time

import httpx

from app.utils.validation import generate_reference_number

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

READY_ATTEMPTS = 30
READY_DELAY_SEC = 2.0
REQUEST_TIMEOUT_SEC = 5.0


class SmokeCheckError(Exception):
    """Raised when a smoke-check step fails."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def wait_until_ready(
    client: httpx.Client,
    attempts: int = READY_ATTEMPTS,
    delay: float = READY_DELAY_SEC,
) -> None:
    """Poll GET /health/ until it answers 200; raise SmokeCheckError after the last attempt."""
    last_error = ""
    for remaining in range(attempts - 1, -1, -1):
        try:
            resp = client.get("/health/")
            if resp.status_code == 200:
                logger.info("Server is ready: %s", resp.json())
                return
            last_error = f"status {resp.status_code}"
        except httpx.HTTPError as e:
            last_error = str(e)
        if remaining:
            logger.info("Server not ready (%s), retrying... (%s attempts left)", last_error, remaining)
            time.sleep(delay)
    raise SmokeCheckError(f"Server not ready after {attempts} attempts: {last_error}")


def _expect(resp: httpx.Response, step: str) -> dict:
    if resp.status_code != 200:
        try:
            detail = resp.json().get("error", resp.text)
        except ValueError:
            detail = resp.text
        raise SmokeCheckError(f"{step} failed ({resp.status_code}): {detail}")
    return resp.json()


def run_auth_flow(client: httpx.Client) -> dict:
    """Register, log in, and read back the same user. Returns the /auth/me user."""
    email = f"smoke-{generate_reference_number().lower()}@example.com"
    password = "smoke-check-password"

    registered = _expect(
        client.post(
            "/auth/register",
            json={"name": "Smoke Check", "email": email, "password": password, "phone": "+971501234567"},
        ),
        "register",
    )["user"]
    logger.info("Registered user id=%s", registered["id"])

    login = _expect(client.post("/auth/login", json={"email": email, "password": password}), "login")
    token = login["token"]
    if not token:
        raise SmokeCheckError("login returned an empty token")

    me = _expect(client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}), "me")["user"]
    if me["id"] != registered["id"] or me["email"] != email:
        raise SmokeCheckError(f"me returned a different user: {me}")
    logger.info("Current user: %s (%s)", me["name"], me["email"])
    return me


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Smoke-check a running portal API.")
    parser.add_argument("--base-url", default="http://localhost:8000/api", help="API base URL including prefix")
    parser.add_argument("--attempts", type=int, default=READY_ATTEMPTS)
    args = parser.parse_args(argv)

    with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=REQUEST_TIMEOUT_SEC) as client:
        try:
            wait_until_ready(client, attempts=args.attempts)
            run_auth_flow(client)
        except SmokeCheckError as e:
            logger.error("Smoke check failed: %s", e.message)
            return 1
    logger.info("Smoke check completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
