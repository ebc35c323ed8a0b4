"""Lightweight REST client for the idealxi API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the idealxi REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("ratings", type=Path, nargs="?", help="Ratings ledger CSV to import first")
    parser.add_argument("--preset", default="4-3-3", help="Formation preset to build the team for")
    parser.add_argument("--formation-id", help="Stored formation to build the team for", default=None)
    parser.add_argument("--discard", nargs="*", default=[], help="Card IDs to leave out")
    parser.add_argument("--list-players", action="store_true", help="List stored players and exit")
    parser.add_argument("--list-formations", action="store_true", help="List stored formations and exit")
    parser.add_argument("--export-path", type=Path, help="Download the team as CSV to this path")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_players or args.list_formations:
            if args.list_players:
                resp = client.get("/players")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.list_formations:
                resp = client.get("/formations")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            return

        if args.ratings is not None:
            files = {"ratings": (args.ratings.name, args.ratings.read_bytes(), "text/csv")}
            resp = client.post("/roster/import", files=files)
            resp.raise_for_status()
            print("Import report:", json.dumps(resp.json(), indent=2))

        request = {"discarded_card_ids": args.discard}
        if args.formation_id:
            request["formation_id"] = args.formation_id
        else:
            request["preset"] = args.preset

        if args.export_path:
            resp = client.post("/ideal-team/export.csv", json=request)
            if resp.status_code == 404:
                raise SystemExit(f"formation {args.formation_id} not found")
            resp.raise_for_status()
            args.export_path.write_text(resp.text, encoding="utf-8")
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.post("/ideal-team", json=request)
        if resp.status_code == 404:
            raise SystemExit(f"formation {args.formation_id} not found")
        resp.raise_for_status()
        payload = resp.json()
        print(f"{payload['formation_name']}: {payload['vacancies']} vacant assignments")
        for slot in payload["slots"]:
            starter = slot["starter"]
            substitute = slot["substitute"]
            print(
                f"{slot['position']:<4} {starter['player_name']} ({starter['stats']['average']:.1f})"
                f" / {substitute['player_name']} [{substitute['reason']}]"
            )


if __name__ == "__main__":
    main()
