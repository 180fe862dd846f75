import sys
import json
import logging
import argparse

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import ConfigurationError
from core.matcher.insights import competition_level, match_quality_label
from core.matcher.models import MatchPerspective

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def _result_payload(result):
    payload = result.to_dict()
    payload["quality"] = match_quality_label(result.score)
    return payload


def build_context(args) -> AppContext:
    config = load_config(args.config)
    if args.profiles:
        config.data.profiles_file = args.profiles
    if args.deterministic:
        config.llm.enabled = False
    return AppContext.build(config)


def cmd_score(context: AppContext, args) -> int:
    job = context.repository.get_job(args.job)
    candidate = context.repository.get_candidate(args.candidate)
    if job is None or candidate is None:
        missing = f"job {args.job}" if job is None else f"candidate {args.candidate}"
        logger.error(f"Unknown {missing}")
        return 1

    perspective = MatchPerspective(args.perspective)
    result = context.orchestrator.score_pair(job, candidate, perspective, refresh=args.refresh)
    print(json.dumps(_result_payload(result), indent=2))
    return 0


def cmd_match_job(context: AppContext, args) -> int:
    results = context.orchestrator.find_matches_for_job(args.job, limit=args.limit, refresh=args.refresh)
    print(json.dumps({
        "job_id": args.job,
        "matches": [_result_payload(r) for r in results]
    }, indent=2))
    return 0


def cmd_match_candidate(context: AppContext, args) -> int:
    results = context.orchestrator.find_matches_for_candidate(args.candidate, limit=args.limit, refresh=args.refresh)
    matches = []
    for result in results:
        payload = _result_payload(result)
        payload["competition_level"] = competition_level(context.repository.count_bids(result.job_id))
        matches.append(payload)
    print(json.dumps({"candidate_id": args.candidate, "matches": matches}, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gig Match scoring CLI")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (defaults apply if missing)')
    parser.add_argument('--profiles', type=str, default=None,
                        help='JSON file with "jobs" and "candidates" (overrides data.profiles_file)')
    parser.add_argument('--deterministic', action='store_true',
                        help='Skip external scoring even if an API key is configured')
    parser.add_argument('--refresh', action='store_true',
                        help='Ignore cached scores')

    subparsers = parser.add_subparsers(dest='command', required=True)

    score = subparsers.add_parser('score', help='Score one job/candidate pair')
    score.add_argument('--job', required=True, help='Job id')
    score.add_argument('--candidate', required=True, help='Candidate id')
    score.add_argument('--perspective', choices=[p.value for p in MatchPerspective],
                       default=MatchPerspective.EMPLOYER.value)
    score.set_defaults(handler=cmd_score)

    match_job = subparsers.add_parser('match-job', help='Rank candidates for a job')
    match_job.add_argument('job', help='Job id')
    match_job.add_argument('--limit', type=int, default=None)
    match_job.set_defaults(handler=cmd_match_job)

    match_candidate = subparsers.add_parser('match-candidate', help='Rank jobs for a candidate')
    match_candidate.add_argument('candidate', help='Candidate id')
    match_candidate.add_argument('--limit', type=int, default=None)
    match_candidate.set_defaults(handler=cmd_match_candidate)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        context = build_context(args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    return args.handler(context, args)


if __name__ == "__main__":
    sys.exit(main())
