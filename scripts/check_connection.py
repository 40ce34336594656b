#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the front-end can reach the job board API and to see
what session is stored locally.
Usage: python scripts/check_connection.py
"""
import asyncio

from jobboard.core.config import get_settings
from jobboard.core.session import get_session_store
from jobboard.services.api_client import close_api_client, get_api_client


async def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB BOARD ADMIN - CONNECTION CHECK")
    print("=" * 50)

    # API
    print("\n[1] Checking job board API...")
    print(f"    URL: {settings.api_base_url}")
    if not settings.api_key:
        print("    ⚠️  API_KEY not configured, requests will be rejected")
    if await get_api_client().ping():
        print("    ✅ API: REACHABLE")
    else:
        print("    ❌ API: UNREACHABLE")

    # Stored session
    print("\n[2] Checking stored session...")
    print(f"    File: {settings.session_file}")
    session = get_session_store()
    session.init()
    if session.is_authenticated:
        print(f"    ✅ Logged in as {session.user.email} ({session.role.value})")
    else:
        print("    ⚠️  No valid session stored (login required)")

    await close_api_client()

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
