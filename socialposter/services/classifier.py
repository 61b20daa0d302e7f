"""Content-type classification and title fragment extraction.

Classification is a first-match scan over an ordered pattern table; a page
matching nothing is simply ``"general"``.
"""

import re
from typing import Literal, Tuple

ContentType = Literal["tutorial", "news", "opinion", "case_study", "product", "list", "general"]

# Order matters: the first matching pattern wins
_CONTENT_PATTERNS: Tuple[Tuple[ContentType, "re.Pattern[str]"], ...] = (
    ("tutorial", re.compile(r"how to|guide|tutorial|step-by-step|learn", re.IGNORECASE)),
    ("news", re.compile(r"announces|launches|reveals|breaking|new", re.IGNORECASE)),
    ("opinion", re.compile(r"why|should|must|opinion|thinks", re.IGNORECASE)),
    ("case_study", re.compile(r"case study|success story|achieved|results", re.IGNORECASE)),
    ("product", re.compile(r"introducing|features|benefits|pricing", re.IGNORECASE)),
    ("list", re.compile(r"\d+\s+(ways|tips|reasons|things|steps)", re.IGNORECASE)),
)

_TOPIC_NOISE_RE = re.compile(r"\b(?:how to|guide to|tutorial|the|a|an)\b", re.IGNORECASE)
_ACTION_RE = re.compile(r"\bto\s+(\w+\s+\w+)", re.IGNORECASE)
_NUMBER_RE = re.compile(r"\d+")
_RESULT_NOISE_RE = re.compile(r"how we|case study|achieved", re.IGNORECASE)
_KEY_POINT_SPLIT_RE = re.compile(r"[:.!?]")
_AFFIRMATION_RE = re.compile(r"\b(?:is|are|will)\b", re.IGNORECASE)
_NEGATION_RE = re.compile(r"\bnot\b|n't", re.IGNORECASE)

DEFAULT_NUMBER = "5"
TOPIC_WORDS = 3


def detect_content_type(title: str, description: str) -> ContentType:
    text = f"{title} {description}"
    for content_type, pattern in _CONTENT_PATTERNS:
        if pattern.search(text):
            return content_type
    return "general"


def extract_topic(text: str) -> str:
    """Return the first few meaningful words of *text*, lowercased."""
    words = _TOPIC_NOISE_RE.sub(" ", text.lower()).split()
    return " ".join(words[:TOPIC_WORDS]) or text.lower().strip()


def extract_action(text: str) -> str:
    """Return the two words following the first "to" (``how to X Y``), else the topic."""
    match = _ACTION_RE.search(text)
    return match.group(1) if match else extract_topic(text)


def extract_number(text: str) -> str:
    match = _NUMBER_RE.search(text)
    return match.group(0) if match else DEFAULT_NUMBER


def extract_result(text: str) -> str:
    return " ".join(_RESULT_NOISE_RE.sub(" ", text.lower()).split())


def extract_key_point(text: str) -> str:
    """Return the text before the first punctuation mark."""
    return _KEY_POINT_SPLIT_RE.split(text, maxsplit=1)[0].strip() or text


def extract_contrarian(text: str) -> str:
    """Flip an affirmative title into a contrarian claim; negated titles pass through."""
    if _NEGATION_RE.search(text):
        return text
    return _AFFIRMATION_RE.sub("isn't actually", text, count=1)
