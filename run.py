#!/usr/bin/env python3
"""
GOOGLE CHAT CONNECTOR - Run Google Chat API operations from a job file.

Usage:
    python run.py --job ./jobs/send_message.json        # Run a job
    python run.py --job ./jobs/list_spaces.json --debug # Enable debug output
    python run.py --job ./jobs/bulk.json --continue-on-fail
                                                        # Record failed items as errors
"""

import sys
import argparse

from google_chat_connector.orchestrator import ChatOrchestrator


def main():
    parser = argparse.ArgumentParser(
        description="Google Chat Connector - Run Chat API operations over a list of items"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--job", "-j", required=True, help="Path to job JSON file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        help="Record failing items as {\"error\": ...} instead of aborting",
    )

    args = parser.parse_args()

    # Initialize
    orchestrator = ChatOrchestrator(env_file=args.env)

    # Apply CLI overrides
    if args.debug:
        orchestrator.debug = True
    if args.continue_on_fail:
        orchestrator.continue_on_fail = True

    # Print header
    print(f"\n{'='*60}")
    print("GOOGLE CHAT CONNECTOR")
    print("="*60)
    print(f"API: {orchestrator.api_base_url}")
    print(f"Continue on fail: {'Enabled' if orchestrator.continue_on_fail else 'Disabled'}")
    orchestrator.print_proxy_status()

    # Validate configuration
    if not orchestrator.validate_config():
        sys.exit(1)

    # Cleanup old output
    if orchestrator.output_manager.retention_days > 0:
        deleted = orchestrator.output_manager.cleanup_old_folders(orchestrator.debug)
        if deleted > 0:
            print(f"Cleaned up {deleted} old output folder(s)")

    # Run job
    results = orchestrator.run(args.job)

    # Print summary
    orchestrator.print_summary(results)

    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
