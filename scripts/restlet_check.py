"""Check connectivity to the configured NetSuite RESTlet.

Usage:
    python scripts/restlet_check.py [check|info]

Examples:
    python scripts/restlet_check.py check
    python scripts/restlet_check.py info

Credentials are read from NETSUITE_* environment variables (or .env).
"""

import argparse
import asyncio
import json
import sys

from suitelink.core.config import settings
from suitelink.domains.restlet.client import RestletClient
from suitelink.domains.restlet.exceptions import MissingCredentialsError
from suitelink.domains.restlet.urls import parse_script_deploy


def dim(text: str) -> str:
    return f"\033[2m{text}\033[0m"


def bold(text: str) -> str:
    return f"\033[1m{text}\033[0m"


def green(text: str) -> str:
    return f"\033[32m{text}\033[0m"


def red(text: str) -> str:
    return f"\033[31m{text}\033[0m"


def render_credentials() -> None:
    print(f"  {dim('Credentials:')}")
    for name, status in settings.credential_status().items():
        color = green if status == "Set" else red
        print(f"    {name:<16} {color(status)}")


async def run_check(client: RestletClient) -> bool:
    """Run three read-only actions concurrently and report each."""
    calls = {
        "templates": client.get_templates(),
        "customers": client.list_demo_customers(),
        "billingTypes": client.get_billing_types(),
    }
    results = dict(zip(calls, await asyncio.gather(*calls.values())))

    for name, result in results.items():
        verdict = green("ok") if result.success else red("failed")
        print(f"  {bold(name):<24} {verdict}")
        if result.error:
            print(f"    {dim('Error:')} {red(result.error)}")

    ok = all(result.success for result in results.values())
    message = "NetSuite connection successful" if ok else "NetSuite connection failed"
    print(f"\n  {(green if ok else red)(bold(message))}")
    return ok


async def run_info(client: RestletClient) -> bool:
    """Print deployment ids and the RESTlet's own getInfo payload."""
    ids = parse_script_deploy(settings.NETSUITE_RESTLET_URL)
    print(f"  {dim('Script:')} {ids.get('script', '?')}")
    print(f"  {dim('Deploy:')} {ids.get('deploy', '?')}")

    info = await client.get_info()
    if info.success:
        print(f"  {dim('RESTlet info:')}")
        print(json.dumps(info.data, indent=2))
    else:
        print(f"  {red(info.error or 'getInfo failed')}")
    return info.success


async def main_async(command: str) -> int:
    print(f"{'─' * 60}")
    print(f"  {bold('NetSuite RESTlet')} {dim(command)}")
    print(f"  {dim('URL:')} {settings.NETSUITE_RESTLET_URL or 'Missing'}")
    render_credentials()
    print(f"{'─' * 60}")

    try:
        client = RestletClient.from_settings()
    except MissingCredentialsError as e:
        print(red(f"\n  {e}"))
        return 1

    async with client:
        ok = await (run_check(client) if command == "check" else run_info(client))
    return 0 if ok else 1


def main():
    parser = argparse.ArgumentParser(description="NetSuite RESTlet connection check")
    parser.add_argument("command", nargs="?", default="check", choices=["check", "info"])
    args = parser.parse_args()
    sys.exit(asyncio.run(main_async(args.command)))


if __name__ == "__main__":
    main()
