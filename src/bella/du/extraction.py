"""Typed value extraction from free-text turns.

Pure functions; "no match" is always ``None``, never an exception.
"""

import re
from collections.abc import Iterable

_TOKEN_RE = re.compile(r"[a-z0-9']+")
_NUMBER_RE = re.compile(
    r"(?P<sign>-)?\$?(?P<int>\d{1,3}(?:,\d{3})+|\d+)(?P<frac>\.\d+)?(?P<k>k\b)?",
    re.IGNORECASE,
)

_UNITS = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
}
_TENS = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}
_SCALES = {"hundred": 100, "thousand": 1000}
_NEGATORS = ("minus", "negative")

YES_WORDS = frozenset(
    {
        "yes",
        "yeah",
        "yep",
        "yup",
        "sure",
        "ok",
        "okay",
        "correct",
        "right",
        "affirmative",
        "accept",
        "agree",
        "continue",
        "proceed",
    }
)
YES_PHRASES = ("sounds good", "go ahead", "of course", "that's fine")
NO_WORDS = frozenset({"no", "nope", "nah", "not", "decline", "don't", "dont", "never"})


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens."""
    return _TOKEN_RE.findall(text.lower())


def contains_phrase(text: str, phrase: str) -> bool:
    """Check whether ``phrase`` occurs in ``text`` on word boundaries."""
    words = tokenize(text)
    target = tokenize(phrase)
    if not target:
        return False
    size = len(target)
    return any(words[i : i + size] == target for i in range(len(words) - size + 1))


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    return any(contains_phrase(text, phrase) for phrase in phrases)


def is_hedged(text: str, hedging_words: Iterable[str]) -> bool:
    """Check for hedging language such as "about" or "maybe"."""
    return contains_any(text, hedging_words)


def extract_number(text: str) -> float | None:
    """Extract the first number from a turn.

    Handles digits with ``$`` and thousands separators ("$10,000"), decimals,
    a ``k`` suffix ("5k"), leading minus or "minus"/"negative", and spelled-out
    numbers ("twenty five thousand").

    Args:
        text: Raw user turn

    Returns:
        The number, or None if the turn holds no number
    """
    if not text or not text.strip():
        return None

    lowered = text.lower()
    match = _NUMBER_RE.search(lowered)
    if match:
        value = float(match.group("int").replace(",", "") + (match.group("frac") or ""))
        if match.group("k"):
            value *= 1000
        if match.group("sign") or lowered[: match.start()].rstrip().endswith(_NEGATORS):
            value = -value
        return value

    return _words_to_number(lowered.replace("-", " "))


def _words_to_number(text: str) -> float | None:
    tokens = tokenize(text)
    total = 0
    current = 0
    started = False
    negative = False

    for i, token in enumerate(tokens):
        if token in _UNITS or token in _TENS:
            current += _UNITS.get(token, 0) + _TENS.get(token, 0)
        elif token in _SCALES:
            if token == "hundred":
                current = max(current, 1) * 100
            else:
                total += max(current, 1) * 1000
                current = 0
        elif token == "and" and started:
            continue
        else:
            if started:
                break
            continue

        if not started:
            started = True
            negative = i > 0 and tokens[i - 1] in _NEGATORS

    if not started:
        return None
    value = float(total + current)
    return -value if negative else value


def extract_yes_no(text: str) -> bool | None:
    """Extract a yes/no answer.

    Returns:
        True or False, or None when neither or both polarities are present
        (e.g. "not sure")
    """
    words = set(tokenize(text))
    is_yes = bool(words & YES_WORDS) or contains_any(text, YES_PHRASES)
    is_no = bool(words & NO_WORDS)

    if is_yes == is_no:
        return None
    return is_yes
