"""
CLI runner for handle-check.

Usage:
    python -m handle_check.run [OPTIONS] [USERNAME]

    # Validate a handle and check whether it is taken
    python -m handle_check.run jack

    # Format validation only, no API call
    python -m handle_check.run --offline my__name

    # Type handles line by line; ":2" applies suggestion 2
    python -m handle_check.run --interactive
"""

import argparse
import asyncio
import json
import logging
import re
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, CheckerConfig
from .models import (
    Availability,
    AvailabilityState,
    DisplayStatus,
    display_status,
    profile_url,
    status_message,
)
from .orchestrator import AvailabilityOrchestrator
from .twitter import TwitterClient

logger = logging.getLogger("handle-check")

SUGGESTION_COMMAND = re.compile(r":(\d+)", re.ASCII)


async def skip_check(handle: str) -> Availability:
    """Stand-in remote check used when availability checking is off."""
    return Availability.UNKNOWN


def render_state(state: AvailabilityState, check_availability: bool = True) -> str:
    """Render a state snapshot as terminal text."""
    status = display_status(state)
    if status is DisplayStatus.IDLE:
        headline, detail = status_message(status)
        return f"{headline}: {detail}"

    lines = [f"@{state.handle}"]

    validation = state.validation
    if validation is not None and validation.is_valid:
        if check_availability:
            headline, detail = status_message(status)
            lines.append(f"  {headline} {detail}")
            lines.append(f"  {profile_url(state.handle)}")
        lines.append("  Format is valid! Username meets all Twitter requirements")
    elif status is DisplayStatus.CHECKING:
        lines.append(f"  {status_message(status)[0]}")

    if validation is not None and validation.errors:
        lines.append("  Issues to fix:")
        lines.extend(f"    - {error}" for error in validation.errors)

    if validation is not None and validation.suggestions:
        lines.append("  Suggestions:")
        lines.extend(
            f"    {i}. @{suggestion}" for i, suggestion in enumerate(validation.suggestions, 1)
        )

    return "\n".join(lines)


def build_orchestrator(config: CheckerConfig) -> AvailabilityOrchestrator:
    """Create an orchestrator wired to the configured lookup client."""
    if config.check_availability:
        client = TwitterClient.from_config(config.twitter)
        check_exists = client.check_exists
    else:
        check_exists = skip_check

    return AvailabilityOrchestrator(
        check_exists=check_exists,
        debounce_seconds=config.debounce_seconds,
    )


async def check_once(config: CheckerConfig, username: str) -> AvailabilityState:
    """Validate and check a single handle, returning the settled state."""
    orchestrator = build_orchestrator(config)
    # Nothing to debounce for a single value
    orchestrator.debounce_seconds = 0
    orchestrator.submit(username)
    await orchestrator.wait_idle()
    return orchestrator.state


async def run_interactive(config: CheckerConfig) -> None:
    """
    Feed stdin lines to the orchestrator as edits.

    A line of the form ":N" applies suggestion N from the latest result.
    """
    orchestrator = build_orchestrator(config)
    loop = asyncio.get_running_loop()

    def show(state: AvailabilityState) -> None:
        if not state.is_typing:
            print(render_state(state, config.check_availability), flush=True)

    orchestrator.subscribe(show)

    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            text = line.rstrip("\n")

            command = SUGGESTION_COMMAND.fullmatch(text)
            if command:
                # Suggestions must come from the settled result of the last edit
                await orchestrator.wait_idle()
                validation = orchestrator.state.validation
                index = int(command.group(1)) - 1
                if validation is None or not 0 <= index < len(validation.suggestions):
                    print(f"No suggestion {command.group(1)}", flush=True)
                    continue
                orchestrator.apply_suggestion(validation.suggestions[index])
            else:
                orchestrator.submit(text)

        await orchestrator.wait_idle()
    finally:
        orchestrator.close()


def exit_code_for(state: AvailabilityState, check_availability: bool) -> int:
    """0 when the handle is usable, 1 otherwise."""
    if state.validation is None or not state.validation.is_valid:
        return 1
    if not check_availability:
        return 0
    return 0 if state.exists is Availability.AVAILABLE else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="handle-check: X/Twitter username validator and availability checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Check a handle
    python -m handle_check.run jack

    # Validate format only
    python -m handle_check.run --offline 1st__choice_

    # Interactive mode
    python -m handle_check.run --interactive

    # Use a specific config file
    python -m handle_check.run --config handle_check.yaml jack

The bearer token is read from $TWITTER_BEARER_TOKEN unless the config
file names another variable.
        """,
    )

    parser.add_argument("username", nargs="?", help="Handle to check, with or without '@'")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--api-base",
        type=str,
        help="Override the user lookup API base URL",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Validate format only, without checking availability",
    )
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Read handles from stdin, one edit per line",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the final state as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = CheckerConfig.from_yaml(args.config)
    if args.api_base:
        config.twitter.api_base = args.api_base
    if args.offline:
        config.check_availability = False

    logger.debug(f"Config: {config.to_dict()}")

    if args.interactive:
        try:
            asyncio.run(run_interactive(config))
        except KeyboardInterrupt:
            logger.info("Stopped by user")
        return 0

    if args.username is None:
        parser.print_help()
        return 2

    state = asyncio.run(check_once(config, args.username))

    if args.json:
        print(json.dumps(state.to_dict(), indent=2))
    else:
        print(render_state(state, config.check_availability))

    return exit_code_for(state, config.check_availability)


if __name__ == "__main__":
    sys.exit(main())
