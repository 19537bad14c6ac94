from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.parse
import urllib.request


def fetch(url: str) -> tuple[int, bytes]:
    req = urllib.request.Request(url)
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def wait_for(url: str, timeout: int) -> bytes:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, body = fetch(url)
            if status == 200:
                return body
        except (urllib.error.URLError, OSError) as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for a running landscape server.")
    parser.add_argument("--base", default="http://localhost:8080")
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.base.rstrip("/")

    wait_for(f"{base}/health", args.timeout)
    layout = json.loads(wait_for(f"{base}/api/layout", args.timeout).decode("utf-8"))
    points = layout.get("points", [])
    if not points:
        raise RuntimeError("Layout has no points")

    first = points[0]
    query = urllib.parse.urlencode({"px": first["pixel_x"], "py": first["pixel_y"]})
    hit = json.loads(wait_for(f"{base}/api/hit?{query}", args.timeout).decode("utf-8"))
    if hit.get("name") != first["name"]:
        raise RuntimeError(f"Hit test resolved {hit.get('name')!r}, expected {first['name']!r}")

    print("Smoke test passed.")


if __name__ == "__main__":
    main()
