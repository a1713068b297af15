"""Answers for general questions asked outside of a task."""

from bella.core import responses
from bella.core.types import Response
from bella.du.extraction import contains_any

TAKE_ME_THERE_REPLIES = ["Yes, take me there", "No, thanks"]
TOPIC_MENU_REPLIES = ["Enrollment", "Loan", "Contributions", "Investments"]

TOPIC_ANSWERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("contribution", "contributions", "contribute"),
        "Contributions are the share of each paycheck you put into your plan. "
        "Many plans match part of what you contribute, so contributing at least "
        "enough to get the full match is worth checking. You can review or change "
        "your contribution rate on the contributions page.",
    ),
    (
        ("investment", "investments", "portfolio", "invest"),
        "Your investments decide how your balance grows over time. You can keep the "
        "plan's default investments, choose your own allocation, or use an "
        "advisor-managed option. The investments page shows your current mix.",
    ),
    (
        ("beneficiary", "beneficiaries"),
        "A beneficiary is the person who receives your account if something happens "
        "to you. Keeping your beneficiaries up to date makes sure your savings go "
        "where you intend. You can review them on the beneficiaries page.",
    ),
)

TOPIC_MENU_TEXT = (
    "I can help you with enrollment, loans, contributions, investments, or "
    "beneficiaries. What would you like to know?"
)


def answer_general_question(text: str) -> Response:
    """Answer from the fixed topic table, or offer the topic menu."""
    for keywords, answer in TOPIC_ANSWERS:
        if contains_any(text, keywords):
            return responses.speaking(
                f"{answer} Would you like me to take you there?",
                quick_replies=TAKE_ME_THERE_REPLIES,
            )
    return responses.idle(TOPIC_MENU_TEXT, quick_replies=TOPIC_MENU_REPLIES)
