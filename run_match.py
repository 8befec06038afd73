# run_match.py

import os

import pandas as pd

from mentor_matching.assignment.cohort_milp import assign_cohort
from mentor_matching.config import (
    MENTORS_CSV_PATH,
    STARTUPS_CSV_PATH,
    CONNECTIONS_CSV_PATH,
    INTERACTIONS_CSV_PATH,
)
from mentor_matching.data.loader import load_registry, results_to_frame
from mentor_matching.data.sample_dataset import make_sample_registry
from mentor_matching.diagnostics import analyze_mentor_load, summarize_connections


def load_snapshot():
    # If CSVs exist, use them; otherwise the built-in sample incubator
    if os.path.exists(MENTORS_CSV_PATH) and os.path.exists(STARTUPS_CSV_PATH):
        print(f"Found CSVs at {MENTORS_CSV_PATH} / {STARTUPS_CSV_PATH}. Loading snapshot...")
        return load_registry(
            MENTORS_CSV_PATH,
            STARTUPS_CSV_PATH,
            CONNECTIONS_CSV_PATH,
            INTERACTIONS_CSV_PATH,
        )
    print("No CSV snapshot found, using the sample dataset.")
    return make_sample_registry()


def main():
    registry = load_snapshot()

    pd.set_option("display.width", 160)
    pd.set_option("display.max_colwidth", 60)

    # ============================
    #  RANKED MATCHES PER STARTUP
    # ============================
    for st in sorted(registry.startups(), key=lambda s: s.id):
        if not st.active:
            continue
        results = registry.match_for_startup(st.id)
        print(f"=== {st.name} (id {st.id}) needs: {', '.join(st.needs) or '-'} ===")
        print(results_to_frame(results).to_string(index=False))
        print()

    # ============================
    #  CONNECTIONS
    # ============================
    conns = registry.list_connections()
    df_conn = pd.DataFrame([c.to_dict() for c in conns])
    print("=== CONNECTIONS ===")
    if not df_conn.empty:
        print(df_conn[["id", "mentor_id", "startup_id", "status", "notes"]].to_string(index=False))
    print()

    summary = summarize_connections(registry)
    print("=== PIPELINE SUMMARY ===")
    print(f"Active mentors : {summary['mentors']}")
    print(f"Active startups: {summary['startups']}")
    for status, count in summary["by_status"].items():
        print(f"  {status:<10}: {count}")
    print("Top mentors by active connections:")
    for m in summary["top_mentors"]:
        print(f"  - {m['name']} ({m['industry']}): {m['connections']}")
    print()

    # ============================
    #  LOAD DIAGNOSTICS
    # ============================
    diag = analyze_mentor_load(registry)
    print("=== MENTOR LOAD ===")
    if diag["messages"]:
        for msg in diag["messages"]:
            print("-", msg)
    else:
        print("- No capacity issues detected.")
    print("Suggestion:", diag["suggestion"])
    print()

    # =====================================
    #  COHORT MILP: one new mentor each
    # =====================================
    print("=== COHORT PROPOSAL (one new mentor per startup) ===")
    status, proposals = assign_cohort(
        registry.startups(),
        registry.mentor_pool(),
        registry.list_connections(),
    )
    print("Solver status:", status)
    startup_names = {s.id: s.name for s in registry.startups()}
    mentor_names = {m.id: m.name for m in registry.mentors()}
    for s_id, m_id, score in proposals:
        print(f"{startup_names[s_id]} <- {mentor_names[m_id]} (score {score})")
    print()


if __name__ == "__main__":
    main()
