#!/usr/bin/env python3
import os
import sys

import httpx

IMAGE_PATH = "/maintenance-image.png"


def _required_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise SystemExit(f"Missing required environment variable: {name}")
    return value


def _is_enabled(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _assert_status(endpoint: str, response: httpx.Response, expected: int) -> None:
    if response.status_code != expected:
        content_type = response.headers.get("Content-Type", "unknown")
        raise SystemExit(f"{endpoint} expected {expected}, got {response.status_code} (content-type={content_type})")


def _print_result(endpoint: str, response: httpx.Response, extra: str = "") -> None:
    parts = [f"{endpoint} -> {response.status_code}"]
    content_type = response.headers.get("Content-Type", "")
    if content_type:
        parts.append(f"content-type={content_type}")
    request_id = response.headers.get("X-Request-Id", "")
    if request_id:
        parts.append(f"request_id={request_id}")
    if extra:
        parts.append(extra)
    print(" ".join(parts))


def check_maintenance(client: httpx.Client, base_url: str) -> None:
    expected_code = int(os.getenv("SMOKE_RESPONSE_CODE", "503"))

    page = client.get(f"{base_url}/health")
    _assert_status("GET /health (maintenance)", page, expected_code)
    if not page.content:
        raise SystemExit("GET /health (maintenance) returned an empty maintenance page")
    _print_result("GET /health (maintenance)", page, extra=f"bytes={len(page.content)}")

    image = client.get(f"{base_url}{IMAGE_PATH}")
    if image.status_code == 200 and image.headers.get("Content-Type") != "image/png":
        raise SystemExit(f"GET {IMAGE_PATH} returned unexpected content type")
    if image.status_code not in {200, 404}:
        raise SystemExit(f"GET {IMAGE_PATH} expected 200 or 404, got {image.status_code}")
    _print_result(f"GET {IMAGE_PATH}", image, extra=f"bytes={len(image.content)}")


def check_forwarding(client: httpx.Client, base_url: str) -> None:
    health = client.get(f"{base_url}/health")
    _assert_status("GET /health", health, 200)
    if health.json().get("status") != "ok":
        raise SystemExit("GET /health did not report status=ok")
    _print_result("GET /health", health)

    image = client.get(f"{base_url}{IMAGE_PATH}")
    _assert_status(f"GET {IMAGE_PATH} (forwarded)", image, 404)
    _print_result(f"GET {IMAGE_PATH} (forwarded)", image)


def main() -> int:
    base_url = _required_env("SMOKE_BASE_URL").rstrip("/")
    expect_maintenance = _is_enabled(os.getenv("SMOKE_EXPECT_MAINTENANCE", "0"))
    timeout_sec = float(os.getenv("SMOKE_TIMEOUT_SEC", "10"))

    with httpx.Client(timeout=timeout_sec) as client:
        if expect_maintenance:
            check_maintenance(client, base_url)
        else:
            check_forwarding(client, base_url)

    print("Smoke completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
