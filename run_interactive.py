# run_interactive.py

from __future__ import annotations

from mentor_matching.data.loader import results_to_frame
from mentor_matching.data.sample_dataset import make_sample_registry
from mentor_matching.errors import MatchingError
from mentor_matching.lifecycle.registry import ConnectionRegistry


def _ask_int(prompt: str):
    raw = input(prompt).strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        print("Please enter a number.")
        return None


def _show_connections(registry: ConnectionRegistry) -> None:
    print("\n=== CONNECTIONS ===")
    for c in registry.list_connections():
        ratings = ""
        if c.startup_rating or c.mentor_rating:
            ratings = f" [startup {c.startup_rating}, mentor {c.mentor_rating}]"
        print(f"{c.id:>3}: mentor {c.mentor_id} -> startup {c.startup_id} | {c.status}{ratings}")


def _match_and_connect(registry: ConnectionRegistry) -> None:
    for st in registry.startups():
        print(f"  {st.id}: {st.name}")
    sid = _ask_int("Startup id: ")
    if sid is None:
        return
    results = registry.match_for_startup(sid)
    print(results_to_frame(results).to_string(index=False))

    mid = _ask_int("Mentor id to connect (blank to skip): ")
    if mid is None:
        return
    if any(r.mentor.id == mid and r.already_connected for r in results):
        print("That mentor already has a pending or active connection with this startup.")
        return
    notes = input("Notes: ").strip()
    conn = registry.create_connection(mid, sid, notes)
    print(f"Created connection {conn.id} ({conn.status}).")


def _change_status(registry: ConnectionRegistry) -> None:
    _show_connections(registry)
    cid = _ask_int("Connection id: ")
    if cid is None:
        return
    status = input("New status [Active/Completed]: ").strip()
    conn = registry.transition(cid, status)
    print(f"Connection {conn.id} is now {conn.status}.")


def _rate(registry: ConnectionRegistry) -> None:
    _show_connections(registry)
    cid = _ask_int("Connection id: ")
    if cid is None:
        return
    sr = _ask_int("Startup rating 1-5 (blank to skip): ")
    mr = _ask_int("Mentor rating 1-5 (blank to skip): ")
    conn = registry.rate(cid, sr, mr)
    print(f"Connection {conn.id} ratings: startup {conn.startup_rating}, mentor {conn.mentor_rating}.")


def main():
    registry = make_sample_registry()
    actions = {
        "1": _match_and_connect,
        "2": _change_status,
        "3": _rate,
        "4": _show_connections,
    }

    while True:
        print("\n========== MENU ==========")
        print("1) Match a startup and create a connection")
        print("2) Change a connection's status")
        print("3) Rate a connection")
        print("4) List connections")
        print("5) Quit")
        choice = input("Your choice [1-5]: ").strip()

        if choice == "5":
            print("Bye.")
            return
        action = actions.get(choice)
        if action is None:
            print("Invalid choice, please select 1–5.")
            continue
        try:
            action(registry)
        except MatchingError as exc:
            print(f"Rejected: {exc}")


if __name__ == "__main__":
    main()
