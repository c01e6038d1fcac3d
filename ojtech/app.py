import argparse
import json
from pathlib import Path
from .env import load_env, load_settings

from . import __version__
from .cleanup import prune_closed_job_matches
from .database import get_session, init_database
from .labels import match_label
from .logger import configure_logger, get_logger
from .matching import generate_all_matches, generate_matches_for_candidate, generate_matches_for_job
from .retry import RetryError
from .schema import validate_candidate, validate_job
from .scoring import score_breakdown
from .storage import list_matches, upsert_candidate, upsert_job


def _split_skills(value: str | None) -> list[str]:
    return [s.strip() for s in value.split(",") if s.strip()] if value else []


def _read_json(path_arg: str) -> dict:
    input_path = Path(path_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def _db_path(args: argparse.Namespace) -> Path:
    db_path = Path(args.db) if args.db else load_settings().db_path
    init_database(db_path)
    return db_path


def cmd_score(args: argparse.Namespace) -> None:
    result = score_breakdown(_split_skills(args.candidate), _split_skills(args.required))
    print(f"Score: {result.score}% ({match_label(result.score)})")
    if args.explain:
        for r in result.requirements:
            via = f" via '{r.matched_variant}'" if r.matched_variant else ""
            print(f" - {r.required}: {r.kind} {r.weight:.2f}{via}")


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    errors = validate_candidate(data) if args.kind == "candidate" else validate_job(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def _ingest(args: argparse.Namespace, validate, upsert, key: str) -> None:
    data = _read_json(args.input)
    errors = validate(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    session = get_session(_db_path(args))
    try:
        outcome = upsert(session, data)
    finally:
        session.close()
    print(f"{key}: {data[key].strip()}")
    print(f"Status: {outcome['status']}")


def cmd_add_candidate(args: argparse.Namespace) -> None:
    _ingest(args, validate_candidate, upsert_candidate, "candidate_id")


def cmd_add_job(args: argparse.Namespace) -> None:
    _ingest(args, validate_job, upsert_job, "job_id")


def _print_counts(counts: dict) -> None:
    print(
        f"Done. created={counts['created']} updated={counts['updated']} "
        f"no-change={counts['unchanged']} skipped={counts['skipped']}"
    )


def cmd_match_candidate(args: argparse.Namespace) -> None:
    try:
        counts = generate_matches_for_candidate(_db_path(args), args.id)
    except (ValueError, RetryError) as e:
        raise SystemExit(str(e))
    _print_counts(counts)
    get_logger().log_metrics_summary()


def cmd_match_job(args: argparse.Namespace) -> None:
    try:
        counts = generate_matches_for_job(_db_path(args), args.id)
    except (ValueError, RetryError) as e:
        raise SystemExit(str(e))
    _print_counts(counts)
    get_logger().log_metrics_summary()


def cmd_match_all(args: argparse.Namespace) -> None:
    try:
        result = generate_all_matches(_db_path(args), batch_size=args.batch_size)
    except (ValueError, RetryError) as e:
        raise SystemExit(str(e))
    print(
        f"Done. candidates={result['processed_candidates']} "
        f"failed={result['failed_candidates']} matches={result['total_matches']}"
    )
    get_logger().log_metrics_summary()


def cmd_list_matches(args: argparse.Namespace) -> None:
    session = get_session(_db_path(args))
    try:
        matches = list_matches(session, candidate_id=args.candidate, job_id=args.job)
        if not matches:
            print("No matches found.")
            return
        print(f"Found {len(matches)} matches:\n")
        for m in matches:
            print(f"{m.candidate_id} -> {m.job_id}: {m.match_score}% ({match_label(m.match_score)}) [{m.status}]")
    finally:
        session.close()


def cmd_prune(args: argparse.Namespace) -> None:
    before, after = prune_closed_job_matches(_db_path(args))
    print(f"Pruned {before - after} matches, {after} remaining.")


def main(argv: list[str] | None = None):
    # Load .env if present (OJTECH_DB_PATH, OJTECH_LOG_LEVEL, etc.)
    load_env()
    try:
        configure_logger()
    except ValueError as e:
        raise SystemExit(str(e))

    parser = argparse.ArgumentParser(prog="ojtech", description="OJTech skill matching CLI")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Path to SQLite database (default: OJTECH_DB_PATH or data/ojtech.db)")

    subparsers = parser.add_subparsers(dest="command")
    sc = subparsers.add_parser("score", help="Score candidate skills against required skills")
    sc.add_argument("--candidate", required=True, help="Comma-separated candidate skills. Example: \"React,Node.js\"")
    sc.add_argument("--required", required=True, help="Comma-separated required skills")
    sc.add_argument("--explain", action="store_true", help="Show how each required skill was matched")
    sc.set_defaults(func=cmd_score)

    val = subparsers.add_parser("validate", help="Validate a candidate or job JSON record")
    val.add_argument("--kind", required=True, choices=["candidate", "job"], help="Record kind")
    val.add_argument("--input", required=True, help="Path to JSON input")
    val.set_defaults(func=cmd_validate)

    addc = subparsers.add_parser("add-candidate", help="Ingest a candidate JSON record")
    addc.add_argument("--input", required=True, help="Path to candidate JSON")
    addc.set_defaults(func=cmd_add_candidate)

    addj = subparsers.add_parser("add-job", help="Ingest a job JSON record")
    addj.add_argument("--input", required=True, help="Path to job JSON")
    addj.set_defaults(func=cmd_add_job)

    mc = subparsers.add_parser("match-candidate", help="Score one candidate against all open jobs")
    mc.add_argument("--id", required=True, help="Candidate ID")
    mc.set_defaults(func=cmd_match_candidate)

    mj = subparsers.add_parser("match-job", help="Score all candidates against one job")
    mj.add_argument("--id", required=True, help="Job ID")
    mj.set_defaults(func=cmd_match_job)

    ma = subparsers.add_parser("match-all", help="Score every candidate against all open jobs")
    ma.add_argument("--batch-size", type=int, help="Candidates per batch (default: OJTECH_BATCH_SIZE or 5)")
    ma.set_defaults(func=cmd_match_all)

    lm = subparsers.add_parser("list-matches", help="List stored matches, best first")
    lm.add_argument("--candidate", help="Only matches for this candidate")
    lm.add_argument("--job", help="Only matches for this job")
    lm.set_defaults(func=cmd_list_matches)

    pr = subparsers.add_parser("prune", help="Delete matches for jobs that are no longer open")
    pr.set_defaults(func=cmd_prune)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
