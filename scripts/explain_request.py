#!/usr/bin/env python3
"""
Explain how a request would be handled.

Runs the driver pipeline for a project root and a request path and prints
the resulting decision without serving anything.

Usage:
    python scripts/explain_request.py ~/Sites/blog /wp-admin
    python scripts/explain_request.py ~/Sites/network /site2/wp-content/uploads/a.jpg --json

Exit codes:
    0 - A driver serves the project
    1 - No driver serves the project
"""

import argparse
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from api.dispatch import default_drivers, select_driver
from core.logging import configure_logging


def explain(site_path, uri, site_name=None, host=None):
    """Resolve uri against site_path. Returns (driver_name, decision) or (None, None)."""
    site_path = os.path.abspath(os.path.expanduser(site_path))
    site_name = site_name or os.path.basename(site_path.rstrip('/'))

    driver, site = select_driver(default_drivers(), site_path, site_name)
    if driver is None:
        return None, None
    return type(driver).__name__, driver.resolve_site(site, uri, host)


def main():
    parser = argparse.ArgumentParser(description='Explain how a request to a local site is handled')
    parser.add_argument('site_path', help='Project root')
    parser.add_argument('uri', help='Request path, e.g. /wp-admin/')
    parser.add_argument('--site-name', help='Site name (defaults to the directory name)')
    parser.add_argument('--host', help='Host header to assume')
    parser.add_argument('--json', action='store_true', help='Print the decision as JSON')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log pipeline steps')
    args = parser.parse_args()

    load_dotenv()
    configure_logging('DEBUG' if args.verbose else 'WARNING', include_timestamp=False)

    driver_name, decision = explain(args.site_path, args.uri, args.site_name, args.host)
    if decision is None:
        print(f"No driver serves {args.site_path}")
        return 1

    if args.json:
        print(json.dumps({
            'driver': driver_name,
            'kind': decision.kind.value,
            'path': decision.path,
            'location': decision.location,
            'environ': decision.front_controller.environ if decision.front_controller else None,
        }, indent=2))
    else:
        print(f"Driver:   {driver_name}")
        print(f"Decision: {decision.kind.value}")
        if decision.path:
            print(f"Path:     {decision.path}")
        if decision.location:
            print(f"Location: {decision.location}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
