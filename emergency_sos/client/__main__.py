"""Command line SOS client.

    python -m emergency_sos.client health
    python -m emergency_sos.client contacts add "Alex" "+15551234567"
    python -m emergency_sos.client sos --lat 40.0 --lng -74.0
    python -m emergency_sos.client history --limit 5
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from emergency_sos.client.api import SosApiClient, SosApiError
from emergency_sos.client.app import SosClientApp, SosInProgressError, SyncResult
from emergency_sos.client.contact_cache import ContactCache
from emergency_sos.client.location import LocationError, StaticLocationProvider
from emergency_sos.core.config import settings
from emergency_sos.core.errors import ValidationError


def _print_sync(action: str, result: SyncResult) -> None:
    if result.synced:
        print(f"{action}; synced")
    else:
        print(f"{action} locally; sync failed: {result.error}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="emergency-sos", description="Emergency SOS client")
    parser.add_argument("--api", default=settings.api_base_url, help="API base URL")
    parser.add_argument("--cache", default=settings.contacts_cache_path, help="Local contacts file")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("health", help="Check server health")

    contacts = sub.add_parser("contacts", help="Manage emergency contacts")
    contacts_sub = contacts.add_subparsers(dest="action", required=True)
    add = contacts_sub.add_parser("add")
    add.add_argument("name")
    add.add_argument("phone")
    delete = contacts_sub.add_parser("delete")
    delete.add_argument("phone")
    contacts_sub.add_parser("list")
    contacts_sub.add_parser("sync")

    sos = sub.add_parser("sos", help="Send an SOS")
    sos.add_argument("--lat", type=float, required=True)
    sos.add_argument("--lng", type=float, required=True)
    sos.add_argument("--accuracy", type=float, default=None)

    history = sub.add_parser("history", help="List recent SOS events recorded by the server")
    history.add_argument("--limit", type=int, default=20)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    provider = None
    if args.command == "sos":
        provider = StaticLocationProvider(args.lat, args.lng, args.accuracy)

    with SosApiClient(args.api) as api:
        app = SosClientApp(ContactCache(args.cache), api, provider, settings.location_timeout_ms)

        if args.command == "health":
            health = app.check_server()
            if health is None:
                print("server_unreachable")
                return 1
            print(json.dumps(health, indent=2))
            return 0

        if args.command == "contacts":
            try:
                if args.action == "add":
                    _print_sync("Contact added", app.add_contact(args.name, args.phone))
                elif args.action == "delete":
                    _print_sync("Contact deleted", app.delete_contact(args.phone))
                elif args.action == "sync":
                    _print_sync("Contacts pushed", app.sync())
                else:
                    for contact in app.contacts:
                        print(f"{contact.name}\t{contact.phone}")
            except ValidationError as exc:
                print(f"error: {exc}")
                return 2
            return 0

        if args.command == "history":
            try:
                events = api.recent_sos(args.limit)
            except SosApiError as exc:
                print(f"Error: {exc}")
                return 1
            for event in events:
                print(f"{event['time']}\t{event['lat']},{event['lng']}")
            return 0

        try:
            report = asyncio.run(app.trigger_sos())
        except (LocationError, SosApiError, SosInProgressError) as exc:
            print(f"Error: {exc}")
            return 1
        print(f"Success! SMS sent to {report.recipient_count} contacts")
        print(report.map_link)
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
