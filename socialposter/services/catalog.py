"""Hand-curated lookup tables used by the template generator.

The tables are plain data held in a versioned :class:`Catalog` model so they
can be replaced from a JSON file (``SOCIALPOSTER_CATALOG_PATH``) without
touching the generation pipeline.  Hook templates use ``str.format`` fields:
``{title}``, ``{topic}``, ``{action}``, ``{number}``, ``{result}``,
``{key_point}`` and ``{contrarian}``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, Field

from socialposter import config

logger = logging.getLogger(__name__)

CATALOG_VERSION = "2024.1"


class Catalog(BaseModel):
    version: str = CATALOG_VERSION

    key_point_caps: Dict[str, int] = Field(
        default_factory=lambda: {"linkedin": 5, "twitter": 4, "instagram": 4, "facebook": 3}
    )
    default_key_point_cap: int = 5
    emoji_palette: List[str] = Field(
        default_factory=lambda: ["🎯", "💡", "🚀", "⚡", "🔥", "✨", "📈", "🎨"]
    )

    # term (matched as a lowercase substring of title + description) -> tags
    topic_hashtags: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            "ai": ["#AI", "#ArtificialIntelligence", "#MachineLearning"],
            "neural": ["#DeepLearning", "#NeuralNetworks", "#AI"],
            "javascript": ["#JavaScript", "#WebDev", "#Programming"],
            "python": ["#Python", "#Programming", "#DataScience"],
            "react": ["#ReactJS", "#Frontend", "#WebDev"],
            "startup": ["#Startup", "#Entrepreneurship", "#Business"],
            "growth": ["#Growth", "#GrowthHacking", "#Business"],
            "marketing": ["#Marketing", "#DigitalMarketing", "#ContentMarketing"],
        }
    )
    platform_hashtags: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            "linkedin": ["#LinkedInLearning", "#ProfessionalDevelopment"],
            "twitter": ["#TechTwitter", "#100DaysOfCode"],
            "instagram": ["#TechCommunity", "#CodeLife"],
            "facebook": ["#TechTips", "#LearnToCode"],
        }
    )
    trending_hashtags: List[str] = Field(
        default_factory=lambda: ["#Innovation", "#FutureOfWork", "#TechTrends2024"]
    )
    # at most this many platform tags, each only while the set is smaller than the ceiling
    platform_hashtag_count: int = 2
    platform_hashtag_ceiling: int = 7
    # trending tags are only added while the set is smaller than this
    trending_hashtag_ceiling: int = 10
    hashtag_limits: Dict[str, int] = Field(default_factory=lambda: {"instagram": 30})
    default_hashtag_limit: int = 7

    ctas: Dict[str, Dict[str, str]] = Field(
        default_factory=lambda: {
            "linkedin": {
                "tutorial": "What's your favorite method? Share in the comments!",
                "news": "How will this impact your industry? Let's discuss 👇",
                "opinion": "Agree or disagree? I'd love to hear your perspective!",
                "case_study": "What's been your experience? Share your story below!",
                "general": "What are your thoughts on this? Join the conversation!",
            },
            "twitter": {
                "tutorial": "Drop a 🔥 if this helped!\n\nRT to help others!",
                "news": "RT if you think this is game-changing!",
                "opinion": "QT with your take! Let's debate 🧵",
                "case_study": "Have you tried this? Share your results below!",
                "general": "Bookmark this thread!\n\nFollow for more insights 🚀",
            },
            "instagram": {
                "tutorial": "Save this for later! ⚡\n\nWhich tip will you try first?",
                "news": "Double tap if you're excited about this! ❤️",
                "opinion": "Drop your thoughts in the comments! 💭",
                "case_study": "Tag someone who needs to see this! 🏷️",
                "general": "Follow for more content like this! 🔔",
            },
            "facebook": {
                "tutorial": "Which step was most helpful? Comment below!",
                "news": "Share this with your network!",
                "opinion": "What's your take? Let's discuss!",
                "case_study": "Has anyone else experienced this?",
                "general": "Like and share if you found this valuable!",
            },
        }
    )
    generic_cta: str = "Share your thoughts!"

    hooks: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            "tutorial": [
                "Stop struggling with {topic}. Here's the exact method that works:",
                "I just discovered the simplest way to {action}:",
                "The step-by-step guide to {action} that actually works:",
            ],
            "news": [
                "BREAKING: {title}",
                "🚨 This changes everything: {key_point}",
                "Just announced: {title}",
            ],
            "opinion": [
                "Unpopular opinion: {contrarian}",
                "We need to talk about {topic}",
                "The truth about {topic} that no one tells you:",
            ],
            "case_study": [
                "How we {result} (real numbers inside):",
                "From 0 to {number} in record time:",
                "The exact strategy behind {result}:",
            ],
            "list": [
                "{title}",
                "Everyone should know these {number} {topic}:",
                "I tested {number} {topic}. Here are the winners:",
            ],
            "general": [
                "💡 {title}",
                "Here's what you need to know about {topic}:",
                "{title} (and why it matters):",
            ],
        }
    )

    def key_point_cap(self, platform: str) -> int:
        return self.key_point_caps.get(platform, self.default_key_point_cap)

    def hashtag_limit(self, platform: str) -> int:
        return self.hashtag_limits.get(platform, self.default_hashtag_limit)

    def hook_pool(self, content_type: str) -> List[str]:
        return self.hooks.get(content_type) or self.hooks.get("general") or ["{title}"]


def load_catalog(path: str) -> Catalog:
    """Load a catalog from the JSON file at *path*; omitted tables keep their defaults."""
    catalog = Catalog.model_validate_json(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded catalog version %s from %s", catalog.version, path)
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Return the active catalog (cached for the life of the process)."""
    if config.CATALOG_PATH:
        return load_catalog(config.CATALOG_PATH)
    return Catalog()
