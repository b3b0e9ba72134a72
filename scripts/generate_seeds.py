#!/usr/bin/env python3
"""Create seed codes for a location and print them as CSV.

Usage:
    export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
    export KEYCLOAK_REALM=rdsguard KEYCLOAK_CLIENT_ID=rdsguard-api KEYCLOAK_CLIENT_SECRET=...
    export SEED_USER=manager SEED_PASSWORD=secret
    uv run python scripts/generate_seeds.py --location <uuid> [--count 10] [--fallback]
"""
from __future__ import annotations

import argparse
import csv
import os
import sys

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate seed codes for a location")
    parser.add_argument("--location", required=True, help="Location id the seeds belong to")
    parser.add_argument("--count", type=int, default=10, help="Number of seeds to create")
    parser.add_argument("--fallback", action="store_true", help="Mark seeds as fallback seeds")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    token = get_token(
        os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
        os.environ.get("KEYCLOAK_REALM", "rdsguard"),
        os.environ.get("KEYCLOAK_CLIENT_ID", "rdsguard-api"),
        os.environ.get("KEYCLOAK_CLIENT_SECRET", ""),
        os.environ.get("SEED_USER", ""),
        os.environ.get("SEED_PASSWORD", ""),
    )

    writer = csv.writer(sys.stdout)
    writer.writerow(["id", "code", "location_id", "is_fallback"])
    with httpx.Client(
        base_url=api_url,
        headers={"Authorization": f"Bearer {token}"},
        timeout=30.0,
    ) as client:
        for _ in range(args.count):
            r = client.post(
                "/v1/seeds",
                json={"location_id": args.location, "is_fallback": args.fallback},
            )
            if r.status_code != 201:
                print(f"Seed creation failed: {r.status_code} {r.text}", file=sys.stderr)
                return 1
            seed = r.json()
            writer.writerow([seed["id"], seed["code"], seed["location_id"], seed["is_fallback"]])
    return 0


if __name__ == "__main__":
    sys.exit(main())
