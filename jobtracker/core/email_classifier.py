"""
Job email classification.

Keyword heuristics that turn raw Gmail API message resources into
categorized, scored job emails: search query construction, body
extraction, category detection, company/title extraction and a
relevance score used to drop unrelated mail.

Dependencies: None (pure domain layer)
System role: Email-based application status detection
"""

import base64
import binascii
import enum
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Sequence

RELEVANCE_THRESHOLD = 0.3


class JobEmailCategory(str, enum.Enum):
    """Category assigned to a job-related email."""

    APPLICATION_CONFIRMATION = "application_confirmation"
    INTERVIEW_INVITATION = "interview_invitation"
    INTERVIEW_CONFIRMATION = "interview_confirmation"
    INTERVIEW_RESCHEDULE = "interview_reschedule"
    REJECTION = "rejection"
    OFFER = "offer"
    ASSESSMENT_INVITATION = "assessment_invitation"
    RECRUITER_OUTREACH = "recruiter_outreach"
    JOB_ALERT = "job_alert"
    OTHER = "other"


CATEGORY_BASE_SCORES: dict[JobEmailCategory, float] = {
    JobEmailCategory.APPLICATION_CONFIRMATION: 0.9,
    JobEmailCategory.INTERVIEW_INVITATION: 0.95,
    JobEmailCategory.INTERVIEW_CONFIRMATION: 0.9,
    JobEmailCategory.INTERVIEW_RESCHEDULE: 0.85,
    JobEmailCategory.ASSESSMENT_INVITATION: 0.9,
    JobEmailCategory.OFFER: 0.95,
    JobEmailCategory.REJECTION: 0.8,
    JobEmailCategory.RECRUITER_OUTREACH: 0.7,
    JobEmailCategory.JOB_ALERT: 0.5,
    JobEmailCategory.OTHER: 0.3,
}

JOB_SENDER_DOMAINS = ("careers", "jobs", "talent", "recruiting", "hr")
JOB_KEYWORDS = ("software", "developer", "engineer", "position", "opportunity", "application")

SEARCH_CLAUSES = (
    'subject:("application received" OR "application submitted" OR "thank you for applying")',
    'subject:("interview" OR "phone screening" OR "video call" OR "meet with")',
    'subject:("assessment" OR "coding challenge" OR "technical test" OR "homework")',
    'subject:("offer" OR "congratulations" OR "welcome to" OR "position")',
    'subject:("unfortunately" OR "not moving forward" OR "other candidates")',
    'from:("recruit" OR "talent" OR "hr" OR "hiring")',
    'from:("careers@" OR "jobs@" OR "noreply@" OR "no-reply@")',
    'from:("linkedin" OR "indeed" OR "glassdoor" OR "stackoverflow")',
)

TITLE_PATTERNS = (
    re.compile(r"position[:\s]+([^,\n]+)", re.IGNORECASE),
    re.compile(r"role[:\s]+([^,\n]+)", re.IGNORECASE),
    re.compile(r"for\s+([^,\n]+)\s+position", re.IGNORECASE),
    re.compile(r"([^,\n]+)\s+role", re.IGNORECASE),
)

_SENDER_DOMAIN = re.compile(r"@([^.]+)\.")
_HTML_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class JobEmail:
    """A categorized, scored job-related email."""

    id: str
    thread_id: str
    subject: str
    sender: str
    to: str
    date: datetime
    snippet: str
    body: str
    category: JobEmailCategory
    confidence: float
    labels: list[str] = field(default_factory=list)
    company: str | None = None
    job_title: str | None = None


def build_job_search_query(
    days_back: int,
    include_spam: bool = False,
    include_trash: bool = False,
) -> str:
    """
    Build the Gmail search query for job-related emails.

    Args:
        days_back: Only match mail newer than this many days
        include_spam: Keep the spam folder in scope
        include_trash: Keep the trash folder in scope

    Returns:
        str: Gmail search expression
    """
    query = f"({' OR '.join(SEARCH_CLAUSES)}) newer_than:{days_back}d"
    if not include_spam:
        query += " -in:spam"
    if not include_trash:
        query += " -in:trash"
    return query


def _decode_body(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return ""


def _html_to_text(html: str) -> str:
    return _WHITESPACE.sub(" ", _HTML_TAG.sub(" ", html)).strip()


def extract_email_body(payload: dict[str, Any]) -> str:
    """
    Extract readable text from a Gmail message payload.

    The top-level body wins; otherwise the first text/plain or text/html
    part is used, with HTML tags stripped.

    Args:
        payload: Gmail message "payload" resource

    Returns:
        str: Body text, empty when none could be found
    """
    data = (payload.get("body") or {}).get("data")
    if data:
        return _decode_body(data)

    for part in payload.get("parts") or []:
        part_data = (part.get("body") or {}).get("data")
        if not part_data:
            continue
        if part.get("mimeType") == "text/plain":
            return _decode_body(part_data)
        if part.get("mimeType") == "text/html":
            return _html_to_text(_decode_body(part_data))

    return ""


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(needle in text for needle in needles)


def categorize_job_email(subject: str, sender: str, body: str) -> JobEmailCategory:
    """
    Assign a category using ordered keyword rules.

    Args:
        subject: Subject header
        sender: From header
        body: Extracted body text

    Returns:
        JobEmailCategory: First matching category, OTHER when none match
    """
    text = f"{subject} {sender} {body}".lower()

    if _contains_any(text, ("interview", "phone screening", "video call")):
        if _contains_any(text, ("reschedule", "postpone")):
            return JobEmailCategory.INTERVIEW_RESCHEDULE
        if "confirm" in text:
            return JobEmailCategory.INTERVIEW_CONFIRMATION
        return JobEmailCategory.INTERVIEW_INVITATION

    if _contains_any(text, ("assessment", "coding challenge", "technical test")):
        return JobEmailCategory.ASSESSMENT_INVITATION

    if _contains_any(text, ("application received", "thank you for applying")):
        return JobEmailCategory.APPLICATION_CONFIRMATION

    if _contains_any(text, ("offer", "congratulations", "welcome to the team")):
        return JobEmailCategory.OFFER

    if _contains_any(text, ("unfortunately", "not moving forward", "other candidates")):
        return JobEmailCategory.REJECTION

    if _contains_any(sender, ("recruit", "talent")) or "opportunity" in text:
        return JobEmailCategory.RECRUITER_OUTREACH

    if _contains_any(sender, ("linkedin", "indeed")) or "job alert" in text:
        return JobEmailCategory.JOB_ALERT

    return JobEmailCategory.OTHER


def extract_job_details(subject: str, sender: str) -> tuple[str | None, str | None]:
    """
    Guess company and job title.

    Args:
        subject: Subject header
        sender: From header

    Returns:
        tuple: (company from the sender's domain, job title from the subject)
    """
    company = None
    domain_match = _SENDER_DOMAIN.search(sender)
    if domain_match:
        name = domain_match.group(1)
        company = name[:1].upper() + name[1:]

    job_title = None
    for pattern in TITLE_PATTERNS:
        title_match = pattern.search(subject)
        if title_match:
            job_title = title_match.group(1).strip()
            break

    return company, job_title


def calculate_relevance_score(
    subject: str,
    sender: str,
    body: str,
    category: JobEmailCategory,
) -> float:
    """
    Score how likely an email is about a job search, in [0, 1].

    Args:
        subject: Subject header
        sender: From header
        body: Extracted body text
        category: Category from categorize_job_email

    Returns:
        float: Category base score plus sender and keyword boosts, capped at 1.0
    """
    score = CATEGORY_BASE_SCORES[category]

    if _contains_any(sender.lower(), JOB_SENDER_DOMAINS):
        score += 0.1

    text = f"{subject} {body}".lower()
    score += 0.05 * sum(1 for keyword in JOB_KEYWORDS if keyword in text)

    return min(score, 1.0)


def _header(headers: list[dict[str, str]], name: str) -> str:
    for header in headers:
        if header.get("name", "").lower() == name.lower():
            return header.get("value", "")
    return ""


def process_message(message: dict[str, Any]) -> JobEmail:
    """
    Turn a Gmail message resource (format=full) into a JobEmail.

    Args:
        message: Gmail API message resource

    Returns:
        JobEmail: Categorized and scored email
    """
    payload = message.get("payload") or {}
    headers = payload.get("headers") or []

    subject = _header(headers, "Subject")
    sender = _header(headers, "From")
    body = extract_email_body(payload)

    category = categorize_job_email(subject, sender, body)
    company, job_title = extract_job_details(subject, sender)

    internal_date = int(message.get("internalDate") or 0)

    return JobEmail(
        id=message["id"],
        thread_id=message.get("threadId", ""),
        subject=subject,
        sender=sender,
        to=_header(headers, "To"),
        date=datetime.fromtimestamp(internal_date / 1000, tz=timezone.utc),
        snippet=message.get("snippet", ""),
        body=body,
        labels=list(message.get("labelIds") or []),
        category=category,
        company=company,
        job_title=job_title,
        confidence=calculate_relevance_score(subject, sender, body, category),
    )


def classify_messages(
    messages: Sequence[dict[str, Any]],
    threshold: float = RELEVANCE_THRESHOLD,
) -> list[JobEmail]:
    """
    Process messages, drop low-relevance ones, newest first.

    Args:
        messages: Gmail message resources
        threshold: Emails scoring at or below this are discarded

    Returns:
        list[JobEmail]: Relevant emails sorted by date descending
    """
    emails = [process_message(message) for message in messages]
    relevant = [email for email in emails if email.confidence > threshold]
    relevant.sort(key=lambda email: email.date, reverse=True)
    return relevant


def summarize_emails(emails: Sequence[JobEmail], days_back: int) -> dict[str, Any]:
    """
    Group emails by category and compute summary statistics.

    Args:
        emails: Emails sorted newest first
        days_back: Search window used to fetch them

    Returns:
        dict: summary (totalEmails, categoryCounts, averageConfidence,
            dateRange) and emails_by_category
    """
    by_category: dict[str, list[JobEmail]] = {}
    for email in emails:
        by_category.setdefault(email.category.value, []).append(email)

    average = sum(email.confidence for email in emails) / len(emails) if emails else 0.0

    summary = {
        "totalEmails": len(emails),
        "categoryCounts": {category: len(items) for category, items in by_category.items()},
        "averageConfidence": average,
        "dateRange": {
            "from": days_back,
            "oldest": emails[-1].date if emails else None,
            "newest": emails[0].date if emails else None,
        },
    }
    return {"summary": summary, "emails_by_category": by_category}
