#!/usr/bin/env python3
"""
Smoke test a running API deployment of the link shortener.

Exits 0 when every check passes, 1 otherwise.

Usage:
    python validate_service.py --url https://sho.rt [--skip-qr]
"""

import argparse
import sys
import time
from typing import Callable, List, Optional, Tuple

import requests


CheckResult = Tuple[bool, str]


class ServiceValidator:
    """Runs HTTP checks against a live deployment and records the outcome."""

    def __init__(self, base_url: str, include_qr: bool = True, timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.include_qr = include_qr
        self.timeout = timeout
        self.session = requests.Session()
        self.results: List[Tuple[str, bool]] = []

        self.test_url = f"https://example.com/validate/{int(time.time())}"
        self.short_code: Optional[str] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def run_check(self, name: str, check: Callable[[], CheckResult]) -> bool:
        """Run one check; connection problems count as a failure."""
        try:
            passed, details = check()
        except requests.RequestException as e:
            passed, details = False, f"request failed: {e}"
        except ValueError as e:
            passed, details = False, f"bad response body: {e}"

        self.results.append((name, passed))
        print(f"{'PASS' if passed else 'FAIL'}  {name:<24} {details}")
        return passed

    def check_health(self) -> CheckResult:
        response = self.session.get(self._url("/api/health"), timeout=self.timeout)
        status = response.json().get("status") if response.status_code == 200 else None
        return status == "healthy", f"status={status or response.status_code}"

    def check_landing_page(self) -> CheckResult:
        response = self.session.get(self._url("/"), timeout=self.timeout)
        content_type = response.headers.get("content-type", "")
        return response.status_code == 200 and "text/html" in content_type, content_type

    def check_shorten(self) -> CheckResult:
        response = self.session.post(
            self._url("/api/shorten"), json={"url": self.test_url}, timeout=self.timeout
        )
        if response.status_code != 200:
            return False, f"status {response.status_code}"

        data = response.json()
        self.short_code = data.get("shortCode")
        passed = bool(self.short_code) and data.get("originalUrl") == self.test_url
        return passed, data.get("shortUrl", "")

    def check_resolve(self) -> CheckResult:
        response = self.session.get(
            self._url(f"/api/resolve/{self.short_code}"), timeout=self.timeout
        )
        passed = response.status_code == 200 and response.json().get("originalUrl") == self.test_url
        return passed, f"status {response.status_code}"

    def check_redirect(self) -> CheckResult:
        response = self.session.get(
            self._url(f"/{self.short_code}"), allow_redirects=False, timeout=self.timeout
        )
        location = response.headers.get("Location", "")
        return response.status_code == 302 and location == self.test_url, f"-> {location or 'none'}"

    def check_click_count(self) -> CheckResult:
        response = self.session.get(self._url("/api/urls"), timeout=self.timeout)
        if response.status_code != 200:
            return False, f"status {response.status_code}"

        entry = next(
            (u for u in response.json().get("urls", []) if u.get("shortCode") == self.short_code),
            None,
        )
        if entry is None:
            return False, "created code missing from listing"
        # resolve and redirect each count once
        return entry.get("clicks", 0) >= 2, f"clicks={entry.get('clicks')}"

    def check_rejects_ftp(self) -> CheckResult:
        response = self.session.post(
            self._url("/api/shorten"), json={"url": "ftp://example.com/file"}, timeout=self.timeout
        )
        return response.status_code == 400, f"status {response.status_code}"

    def check_unknown_code(self) -> CheckResult:
        response = self.session.get(self._url("/api/resolve/doesNotExist"), timeout=self.timeout)
        return response.status_code == 404, f"status {response.status_code}"

    def check_preflight(self) -> CheckResult:
        response = self.session.options(self._url("/api/shorten"), timeout=self.timeout)
        origin = response.headers.get("Access-Control-Allow-Origin")
        return response.status_code == 200 and origin == "*", f"allow-origin={origin}"

    def check_qr(self) -> CheckResult:
        response = self.session.post(
            self._url("/api/qr"),
            json={"url": "https://example.com", "size": 150},
            timeout=self.timeout * 3,
        )
        if response.status_code != 200:
            return False, f"status {response.status_code}"
        return response.json().get("qrCode", "").startswith("data:image/"), "data URL"

    def run(self) -> bool:
        print(f"Validating {self.base_url}\n")

        if not self.run_check("landing page", self.check_landing_page):
            print(f"\nService does not answer at {self.base_url}, stopping.")
            return False

        self.run_check("health", self.check_health)

        if self.run_check("shorten", self.check_shorten):
            self.run_check("resolve", self.check_resolve)
            self.run_check("redirect", self.check_redirect)
            self.run_check("click count", self.check_click_count)

        self.run_check("invalid URL rejected", self.check_rejects_ftp)
        self.run_check("unknown code", self.check_unknown_code)
        self.run_check("CORS preflight", self.check_preflight)

        if self.include_qr:
            self.run_check("QR code", self.check_qr)

        failed = [name for name, passed in self.results if not passed]
        print(f"\n{len(self.results) - len(failed)}/{len(self.results)} checks passed")
        for name in failed:
            print(f"  failed: {name}")

        return not failed


def main():
    parser = argparse.ArgumentParser(description="Validate a link shortener API deployment")
    parser.add_argument(
        "--url",
        default="http://localhost:9200",
        help="Base URL of the service (default: http://localhost:9200)"
    )
    parser.add_argument(
        "--skip-qr",
        action="store_true",
        help="Skip the QR check (it calls an external service)"
    )
    args = parser.parse_args()

    validator = ServiceValidator(args.url, include_qr=not args.skip_qr)

    try:
        sys.exit(0 if validator.run() else 1)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(2)


if __name__ == "__main__":
    main()
