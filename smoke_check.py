#!/usr/bin/env python3
"""
End-to-end check against a running TinyLink server.

Usage:
    python smoke_check.py
    BASE_URL=http://localhost:4000 python smoke_check.py

Checks, in order:
- GET /healthz returns 200 and ok:true
- POST /api/links creates a link (201)
- POST with the same code returns 409
- GET /api/links/{code} returns the record
- GET /{code} returns a 302 redirect
- DELETE /api/links/{code} succeeds and GET /{code} then returns 404
"""

import os
import sys
import time

import httpx

BASE = os.environ.get("BASE_URL", "http://localhost:4000").rstrip("/")


class CheckFailed(Exception):
    pass


def expect(response: httpx.Response, expected_status: int) -> httpx.Response:
    if response.status_code != expected_status:
        raise CheckFailed(
            f"Expected status {expected_status} but got {response.status_code} "
            f"for {response.request.method} {response.request.url}\nBody: {response.text}"
        )
    return response


def run_checks(client: httpx.Client) -> None:
    body = expect(client.get("/healthz"), 200).json()
    if not body.get("ok"):
        raise CheckFailed(f"/healthz ok:false {body}")
    print("PASS: /healthz")

    code = "testA1"
    long_url = f"https://example.com/hello?ts={int(time.time() * 1000)}"
    created = expect(client.post("/api/links", json={"url": long_url, "code": code}), 201).json()
    print(f"PASS: create link {created['code']}")

    expect(client.post("/api/links", json={"url": long_url, "code": code}), 409)
    print("PASS: duplicate code returns 409")

    record = expect(client.get(f"/api/links/{code}"), 200).json()
    print(f"PASS: GET /api/links/{{code}} {record['code']}")

    expect(client.get(f"/{code}"), 302)
    print("PASS: redirect 302")

    expect(client.delete(f"/api/links/{code}"), 200)
    print("PASS: delete")

    expect(client.get(f"/{code}"), 404)
    print("PASS: redirect returns 404 after delete")


def main() -> int:
    print(f"Running smoke checks against {BASE}")
    try:
        with httpx.Client(base_url=BASE, follow_redirects=False, timeout=10) as client:
            run_checks(client)
    except CheckFailed as e:
        print(f"FAIL: {e}")
        return 2
    except httpx.HTTPError as e:
        print(f"Error running checks: {e}")
        return 2
    print("All checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
