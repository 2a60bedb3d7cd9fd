"""
Command line entry point: ``python -m followfeed <command>``.

Commands:
    init-db         create missing tables and columns
    schedule:run    run the tasks due this minute (what cron calls)
    schedule:work   run due tasks every minute in the foreground
    schedule:list   show registered tasks and their next run
    crontab         print the cron.d entry for the host
"""
import argparse
import logging
from datetime import datetime
from typing import List, Optional

from dotenv import load_dotenv

from followfeed.core.config import settings
from followfeed.utils.logger import safe_print, setup_logging

logger = logging.getLogger(__name__)


def init_db(args) -> int:
    from followfeed.db.init_db import sync_database
    sync_database()
    return 0


def schedule_run(args) -> int:
    from followfeed.scheduling.runner import run_schedule_tick
    ran = run_schedule_tick()
    logger.info("Ran %d scheduled task(s): %s", len(ran), ", ".join(ran) or "none")
    return 0


def schedule_work(args) -> int:
    from followfeed.scheduling.runner import run_blocking_scheduler
    run_blocking_scheduler()
    return 0


def schedule_list(args) -> int:
    from followfeed.scheduling.runner import schedule
    now = datetime.utcnow()
    for task in schedule.tasks:
        flags = " [one server]" if task.on_one_server else ""
        safe_print(f"{task.expression}\t{task.name}{flags}\tnext: {task.expression.next_after(now):%Y-%m-%d %H:%M} UTC")
    return 0


def crontab(args) -> int:
    from followfeed.scheduling.crontab import cron_file, scheduler_entry
    if args.file:
        safe_print(cron_file(settings), end="")
    else:
        safe_print(scheduler_entry(settings).render())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="followfeed", description="followfeed management commands")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    subparsers.required = True

    subparsers.add_parser("init-db", help="Create missing tables and columns").set_defaults(func=init_db)
    subparsers.add_parser("schedule:run", help="Run the scheduled tasks due now").set_defaults(func=schedule_run)
    subparsers.add_parser("schedule:work", help="Run due scheduled tasks every minute").set_defaults(func=schedule_work)
    subparsers.add_parser("schedule:list", help="List scheduled tasks").set_defaults(func=schedule_list)

    crontab_parser = subparsers.add_parser("crontab", help="Print the cron entry that drives the scheduler")
    crontab_parser.add_argument("--file", action="store_true", help="Print a complete /etc/cron.d file")
    crontab_parser.set_defaults(func=crontab)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    setup_logging(settings.LOG_LEVEL)
    args = build_parser().parse_args(argv)
    return args.func(args)
