#!/usr/bin/env python3
"""
Smoke test for a running jobdash instance using urllib.request (no external deps)

    BASE_URL=http://127.0.0.1:8080/jobdash python scripts/smoke.py
"""
import urllib.request
import urllib.error
import json
import os
import sys

BASE_URL = os.getenv("BASE_URL", "http://127.0.0.1:8080").rstrip("/")


def check(path, expected_status=200, method="GET", check_json=None):
    """Hit an endpoint and return True when status and JSON keys match"""
    url = f"{BASE_URL}{path}"
    req = urllib.request.Request(url, method=method)
    try:
        with urllib.request.urlopen(req) as response:
            status = response.status
            body = response.read()
    except urllib.error.HTTPError as e:
        status = e.code
        body = e.read()
    except Exception as e:
        print(f"❌ {method} {path}: error - {e}")
        return False

    if status != expected_status:
        print(f"❌ {method} {path}: expected status {expected_status}, got {status}")
        return False

    if check_json:
        data = json.loads(body.decode("utf-8"))
        for key, expected_value in check_json.items():
            if data.get(key) != expected_value:
                print(f"❌ {method} {path}: expected {key}={expected_value}, got {data.get(key)}")
                return False

    print(f"✅ {method} {path}: status {status}")
    return True


def main():
    print("🚀 Running smoke tests against", BASE_URL)

    tests = [
        ("/api/health", 200, "GET", {"ok": True, "db": True}),
        ("/api/jobs?limit=1", 200, "GET", {"ok": True}),
        ("/api/jobs/1", 403, "DELETE", {"ok": False, "error": "Forbidden"}),
        ("/", 200, "GET", None),
    ]

    failed = sum(1 for path, status, method, expect in tests if not check(path, status, method, expect))

    if failed:
        print(f"\n❌ {failed} test(s) failed")
        sys.exit(1)
    print("\n✅ All smoke tests passed")


if __name__ == "__main__":
    main()
