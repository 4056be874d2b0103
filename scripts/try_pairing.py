#!/usr/bin/env python3
"""
Manual pairing script.

Runs the pairing workflow against the real site without starting the HTTP
server. Uses the credentials from your .env file.

Usage:
    python scripts/try_pairing.py --otp 123456 --label "Kitchen TV"
    python scripts/try_pairing.py --otp 123456 --label "Kitchen TV" --headed
"""

import argparse
import asyncio
import dataclasses
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pairing.automation import pair_device
from pairing.config import settings

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


async def run(otp: str, label: str, headed: bool) -> bool:
    if settings.missing_credentials():
        print("\n⚠️  ERROR: NANOMID_EMAIL / NANOMID_PASSWORD not set!")
        print("   Please set them in your .env file or export them.")
        return False

    run_settings = dataclasses.replace(settings, HEADLESS=not headed)

    print("\n" + "=" * 60)
    print("PAIRING TEST")
    print("=" * 60)
    print(f"\nSite:   {run_settings.NANOMID_BASE_URL}")
    print(f"Label:  {label}")
    print(f"Mode:   {'headed' if headed else 'headless'}")

    result = await pair_device(run_settings, otp=otp, label=label)

    print("\n" + "=" * 60)
    if result["ok"]:
        print("✅ Pairing confirmed")
    else:
        print(f"❌ {result['error']}")
        if run_settings.ERROR_SCREENSHOT_PATH:
            print(f"   Screenshot (if captured): {run_settings.ERROR_SCREENSHOT_PATH}")
    print("=" * 60)
    return result["ok"]


def main():
    parser = argparse.ArgumentParser(description="Pair a device from the command line")
    parser.add_argument("--otp", required=True, help="Quickcode shown on the device")
    parser.add_argument("--label", required=True, help="Device name to register")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    args = parser.parse_args()

    ok = asyncio.run(run(args.otp.strip(), args.label.strip(), args.headed))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
