"""
Parse subscription emails from the command line.

Usage:
    # Parse a JSON file holding one email object or a list of them
    subtrack-parse emails.json

    # Parse a single email given on the command line
    subtrack-parse --subject "Your Netflix receipt" --sender info@netflix.com \\
        --body "You were charged $15.49 monthly"

    # Skip messages already parsed in an earlier run
    subtrack-parse emails.json --skip-id 18c2f --skip-id 18c30

    # Print the spend summary of successfully parsed subscriptions
    subtrack-parse emails.json --stats

    # Print the inbox search query (optionally since an ISO timestamp)
    subtrack-parse --query --since 2025-01-01T00:00:00
"""

import argparse
import json
import sys
from datetime import datetime

from subtrack.config import load_parser_config
from subtrack.cost_summary import summarize_subscriptions
from subtrack.email_parsing import EmailContent, parse_email_batch
from subtrack.gmail_query import build_subscription_query


def load_emails(path: str) -> list:
    """Read emails from a JSON file ('-' for stdin)."""
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("Expected a JSON object or a list of objects")

    emails = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Email {index + 1} is not a JSON object")
        email = EmailContent.from_dict(item)
        if not email.message_id:
            email.message_id = f"email-{index + 1}"
        emails.append(email)
    return emails


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subtrack-parse",
        description="Extract subscription details from already-fetched emails",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="JSON file with an email object or a list of them ('-' for stdin)",
    )
    parser.add_argument("--subject", default="", help="Subject of a single email")
    parser.add_argument("--sender", default="", help="From header of a single email")
    parser.add_argument("--body", default="", help="Plain text body of a single email")
    parser.add_argument("--snippet", default="", help="Snippet of a single email")
    parser.add_argument(
        "--skip-id",
        action="append",
        default=[],
        help="Message ID already processed (repeatable)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print the cost summary of parsed subscriptions",
    )
    parser.add_argument(
        "--query",
        action="store_true",
        help="Print the inbox search query and exit",
    )
    parser.add_argument(
        "--since",
        help="ISO timestamp for --query (default: configured lookback window)",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_parser_config()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.query:
        try:
            since = datetime.fromisoformat(args.since) if args.since else None
        except ValueError as e:
            print(f"Invalid --since timestamp: {e}", file=sys.stderr)
            return 2
        print(build_subscription_query(since=since, lookback=config.scan_lookback))
        return 0

    if args.file:
        try:
            emails = load_emails(args.file)
        except (OSError, ValueError) as e:
            print(f"Could not read emails: {e}", file=sys.stderr)
            return 2
    elif args.subject or args.sender or args.body or args.snippet:
        emails = [
            EmailContent(
                message_id="cli",
                subject=args.subject,
                sender=args.sender,
                body=args.body,
                snippet=args.snippet,
            )
        ]
    else:
        parser.error("provide a JSON file or --subject/--sender/--body")

    summary = parse_email_batch(emails, processed_ids=args.skip_id, config=config)

    if args.stats:
        parsed = [result.data for result in summary.results if result.success]
        output = summarize_subscriptions(parsed).to_dict()
    else:
        output = summary.to_dict()

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
