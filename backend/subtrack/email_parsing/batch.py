"""
Batch Parsing

Parses a run of already-fetched emails and produces one record per email
for the persistence layer. A failure on one email never stops the run.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from subtrack.config import ParserConfig
from subtrack.error_tracking import ParseIncident, ParseStage
from subtrack.logging_config import get_logger

from .orchestrator import parse_subscription_email
from .types import ParseResult
from .utilities import extract_sender_domain, html_to_text, parse_sender_email

logger = get_logger(__name__)

PARSING_SUCCESS = "success"
PARSING_FAILED = "failed"


@dataclass
class EmailContent:
    """A fetched email, already decoded from the transport format."""

    message_id: str
    subject: str = ""
    sender: str = ""
    body: str = ""
    snippet: str = ""
    received_at: Optional[datetime] = None
    body_html: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "EmailContent":
        """Build from a dict using either 'sender' or 'from' for the header."""
        received_at = data.get("received_at")
        if isinstance(received_at, str) and received_at:
            received_at = datetime.fromisoformat(received_at)

        return cls(
            message_id=str(data.get("message_id") or data.get("id") or ""),
            subject=data.get("subject") or "",
            sender=data.get("sender") or data.get("from") or "",
            body=data.get("body") or "",
            snippet=data.get("snippet") or "",
            received_at=received_at or None,
            body_html=data.get("body_html") or "",
        )

    def text_body(self) -> str:
        """Plain text body, falling back to the HTML part converted to text."""
        return self.body or html_to_text(self.body_html)


@dataclass
class ParsedEmailRecord:
    """Outcome of one email, shaped for storage by the caller."""

    message_id: str
    from_email: str
    sender_domain: str
    subject: str
    received_at: datetime
    email_snippet: str
    parsing_status: str
    retention_until: datetime
    parse_method: str
    extracted_data: Optional[dict] = None
    error_message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "from_email": self.from_email,
            "sender_domain": self.sender_domain,
            "subject": self.subject,
            "received_at": self.received_at.isoformat(),
            "email_snippet": self.email_snippet,
            "parsing_status": self.parsing_status,
            "retention_until": self.retention_until.isoformat(),
            "parse_method": self.parse_method,
            "extracted_data": self.extracted_data,
            "error_message": self.error_message,
        }


@dataclass
class BatchSummary:
    """Counts and records for a batch run."""

    total: int = 0
    processed: int = 0
    skipped: int = 0
    new_subscriptions: int = 0
    failed: int = 0
    by_method: dict = field(default_factory=lambda: {"pattern": 0, "ai": 0, "failed": 0})
    records: List[ParsedEmailRecord] = field(default_factory=list)
    results: List[ParseResult] = field(default_factory=list)
    incidents: List[ParseIncident] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "processed": self.processed,
            "skipped": self.skipped,
            "new_subscriptions": self.new_subscriptions,
            "failed": self.failed,
            "by_method": dict(self.by_method),
            "records": [record.to_dict() for record in self.records],
            "incidents": [incident.to_dict() for incident in self.incidents],
        }


def build_record(
    email: EmailContent,
    result: ParseResult,
    config: ParserConfig,
    now: datetime,
) -> ParsedEmailRecord:
    """
    Build the stored record for a parsed email.

    Args:
        email: Source email
        result: Parse outcome
        config: Snippet length and retention settings
        now: Processing time (retention is counted from here)

    Returns:
        ParsedEmailRecord
    """
    from_email, _ = parse_sender_email(email.sender)

    return ParsedEmailRecord(
        message_id=email.message_id,
        from_email=from_email,
        sender_domain=extract_sender_domain(from_email),
        subject=email.subject,
        received_at=email.received_at or now,
        email_snippet=email.snippet[:config.snippet_max_length],
        parsing_status=PARSING_SUCCESS if result.success else PARSING_FAILED,
        retention_until=now + timedelta(days=config.retention_days),
        parse_method=result.method.value,
        extracted_data=result.data.to_dict() if result.success else None,
        error_message=None if result.success else (result.error or "Unknown error"),
    )


def _chunks(items: list, size: int):
    for start in range(0, len(items), size):
        yield start // size, items[start:start + size]


def parse_email_batch(
    emails: Iterable[EmailContent],
    processed_ids: Iterable[str] = (),
    config: Optional[ParserConfig] = None,
    now: Optional[datetime] = None,
) -> BatchSummary:
    """
    Parse a batch of fetched emails.

    Args:
        emails: Emails to parse
        processed_ids: Message IDs parsed in an earlier run (skipped)
        config: Parser configuration (defaults used when omitted)
        now: Processing time for retention and missing received_at

    Returns:
        BatchSummary with counts, records and any incidents
    """
    config = config or ParserConfig()
    now = now or datetime.now()
    seen = set(processed_ids)
    emails = list(emails)

    summary = BatchSummary(total=len(emails))

    for batch_number, batch in _chunks(emails, config.batch_size):
        logger.debug(f"Processing batch {batch_number + 1} ({len(batch)} emails)")

        for email in batch:
            if email.message_id and email.message_id in seen:
                summary.skipped += 1
                continue

            try:
                result = parse_subscription_email(
                    email.subject,
                    email.sender,
                    email.text_body(),
                    email.snippet,
                    today=now.date(),
                )
                record = build_record(email, result, config, now)
            except Exception as e:
                incident = ParseIncident.from_exception(
                    e,
                    ParseStage.PARSE,
                    context={"message_id": email.message_id, "sender": email.sender},
                )
                incident.log()
                summary.incidents.append(incident)
                summary.failed += 1
                continue

            if email.message_id:
                seen.add(email.message_id)

            summary.records.append(record)
            summary.results.append(result)
            summary.processed += 1
            summary.by_method[result.method.value] += 1

            if result.success:
                summary.new_subscriptions += 1
            else:
                summary.failed += 1

            logger.debug(
                f"Parsed email: {record.parsing_status}",
                extra={
                    "message_id": email.message_id,
                    "merchant": result.data.merchant_name if result.success else email.sender,
                    "parse_method": result.method.value,
                },
            )

    logger.info(
        f"Batch complete: {summary.processed} processed, "
        f"{summary.new_subscriptions} subscriptions, {summary.failed} failed, "
        f"{summary.skipped} skipped"
    )
    return summary
