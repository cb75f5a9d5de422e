import argparse
import json
import logging
import sys

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import AdapterFailureException
from core.search.filters import FilterSpec

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_search(ctx: AppContext, args) -> int:
    """Run one search from the command line and print the scored jobs as JSON."""
    if args.resume:
        with open(args.resume, "r", encoding="utf-8") as f:
            ctx.resumes.save(args.user, f.read(), file_name=args.resume)

    filters = FilterSpec(
        query=args.query,
        skills=args.skills,
        date_posted=args.date_posted,
        job_type=args.job_type,
        work_mode=args.work_mode,
        location=args.location,
        page=args.page,
        page_size=args.limit or ctx.config.search.default_page_size
    )

    try:
        result = ctx.search_service.search(args.user, filters, args.match_score)
    except AdapterFailureException as e:
        logger.error(f"Search failed: {e}")
        return 1

    print(json.dumps({
        "jobs": [job.to_dict() for job in result.jobs],
        "best_matches": [job.id for job in result.best_matches],
        "total": result.total,
        "page": result.page,
        "has_more": result.has_more,
    }, indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(description="JobTrack")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    sub = parser.add_subparsers(dest='command')

    sub.add_parser('serve', help='Run the web API (default)')

    search = sub.add_parser('search', help='Search and score jobs once')
    search.add_argument('--query', default='')
    search.add_argument('--skills', default='', help='Comma-separated skills')
    search.add_argument('--date-posted', default='any', choices=['last24h', 'lastWeek', 'lastMonth', 'any'])
    search.add_argument('--job-type', default=None)
    search.add_argument('--work-mode', default=None)
    search.add_argument('--location', default='')
    search.add_argument('--match-score', default='all', choices=['all', 'high', 'medium'])
    search.add_argument('--page', type=int, default=1)
    search.add_argument('--limit', type=int, default=None, help='Page size; defaults to search.default_page_size')
    search.add_argument('--resume', default=None, help='Plain-text résumé to score against')
    search.add_argument('--user', default='cli')

    args = parser.parse_args()

    if args.command == 'search':
        ctx = AppContext.build(load_config(args.config))
        sys.exit(run_search(ctx, args))

    from web.backend.app import main as serve
    serve()


if __name__ == "__main__":
    main()
