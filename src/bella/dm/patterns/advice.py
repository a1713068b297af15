"""Detection of requests for personal financial advice."""

import re

ADVICE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bshould i (withdraw|take out|take)\b",
        r"\b(recommend|suggest|advice|advise|better|best|worst)\b",
        r"\b(withdraw|withdrawal) or (loan|borrow)\b",
        r"\b(loan|borrow) or (withdraw|withdrawal)\b",
        r"\bwhat (do you recommend|would you do|should i do)\b",
        r"\bis it (better|good|bad|wise) to\b",
    )
)


def is_advice_request(text: str) -> bool:
    """Whether the turn asks what the participant should do."""
    return any(pattern.search(text) for pattern in ADVICE_PATTERNS)
