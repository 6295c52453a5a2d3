"""Report the runtime stack and, when configured, whether the target store answers."""

from __future__ import annotations

import os
import sys
from importlib import metadata

DISTRIBUTIONS = ["Faker", "fastapi", "httpx", "pydantic", "typer", "uvicorn"]


def _missing_distributions() -> list[str]:
    missing: list[str] = []
    for name in DISTRIBUTIONS:
        try:
            print(f"{name:<10} {metadata.version(name)}")
        except metadata.PackageNotFoundError:
            missing.append(name)
    return missing


def _check_store(url: str) -> str | None:
    import httpx

    try:
        httpx.get(url, timeout=5.0)
    except httpx.HTTPError as exc:
        return f"{url}: {exc}"
    return None


def main() -> None:
    if sys.version_info < (3, 11):
        sys.exit("Python 3.11+ is required")

    missing = _missing_distributions()
    if missing:
        sys.exit(f"Missing distributions: {', '.join(missing)}")

    store_url = os.environ.get("SEEDER_STORE_URL")
    if store_url:
        problem = _check_store(store_url)
        if problem:
            sys.exit(f"Store unreachable: {problem}")
        print(f"store      {store_url} reachable")

    print("Seeder environment looks good.")


if __name__ == "__main__":
    main()
