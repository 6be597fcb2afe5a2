#!/usr/bin/env python3
#USE VENV: source venv/bin/activate
"""
Run script for the fire inventory maintenance back end
"""

from fire_inventory import create_app
from fire_inventory.build import build_database
from fire_inventory.logger import get_logger
import sys
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

import argparse

# Run 'python generate_env.py' to create a .env file with a secure SECRET_KEY.

app = create_app()
logger = get_logger("fire_inventory.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Fire Inventory Maintenance')
    parser.add_argument('--build-only', action='store_true',
                        help='Build database tables only, do not insert debug data and do not start the server')
    parser.add_argument('--enable-debug-data', action='store_true', default=True,
                        help='Enable debug data insertion (default: enabled if flag not present)')
    parser.add_argument('--no-debug-data', action='store_false', dest='enable_debug_data',
                        help='Disable debug data insertion')
    parser.add_argument('--run-job', metavar='JOB_NAME',
                        help='Run a single scheduled job (e.g. maintenance-auto-generator) and exit')
    parser.add_argument('--run-all-jobs', action='store_true',
                        help='Run every scheduled job and exit')

    return parser.parse_args()


def run_jobs(args):
    """Run scheduled jobs from the command line; returns the process exit code"""
    from fire_inventory.buisness.scheduling import JobRunner, UnknownJobError, build_default_registry

    with app.app_context():
        runner = JobRunner(build_default_registry())

        if args.run_job:
            try:
                outcome = runner.run(args.run_job)
            except UnknownJobError as e:
                logger.error(str(e))
                return 2
            logger.info(f"Job {outcome.job_name}: {outcome.status} {outcome.details or outcome.error}")
            return 0 if outcome.succeeded else 1

        summary = runner.run_all()
        logger.info(summary['message'])
        return 0 if summary['success'] else 1


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting Fire Inventory Maintenance...")

    build_database(
        enable_debug_data=args.enable_debug_data and not (args.build_only or args.run_job or args.run_all_jobs),
        app=app
    )

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    if args.run_job or args.run_all_jobs:
        sys.exit(run_jobs(args))

    # Read configuration from environment variables
    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST: Server host (default: 127.0.0.1 for security)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')

    # FLASK_PORT: Server port (default: 5000)
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
