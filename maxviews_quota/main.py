#!/usr/bin/env python3
"""Main entry point for the maxviews-quota tool."""

import argparse
import asyncio
import json
import logging
import sys


async def _print_course_views(course_id: str, user_id: str) -> int:
    from maxviews_quota.quota.course_report import evaluate_course
    from maxviews_quota.server import create_container

    container = create_container()
    logging.basicConfig(level=container.config.log_level().upper())
    evaluations = await evaluate_course(
        container.scanner(), container.evaluator(), course_id, user_id
    )
    print(
        json.dumps(
            {
                "course_id": course_id,
                "user_id": user_id,
                "items": [evaluation.to_dict() for evaluation in evaluations],
            },
            indent=2,
        )
    )
    return 0


def main() -> int:
    """Run the main application.

    Returns:
        An integer exit code.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Course content view quota tool"
    )
    parser.add_argument("--server", action="store_true", help="Start the web server")
    parser.add_argument("--port", type=int, default=8000, help="Web server port")
    parser.add_argument("--course", help="Course to evaluate")
    parser.add_argument("--user", help="User to evaluate the course for")

    args: argparse.Namespace = parser.parse_args()

    if args.server:
        from maxviews_quota.server import app
        import uvicorn
        uvicorn.run(app, host="0.0.0.0", port=args.port)
        return 0

    if args.course and args.user:
        return asyncio.run(_print_course_views(args.course, args.user))

    parser.print_usage()
    print("Use --server to start the web server, or --course and --user to evaluate views")
    return 1


if __name__ == "__main__":
    sys.exit(main())
