"""System and user prompts for remote post generation."""

from typing import Dict, Tuple

from socialposter.models.page import PageSummary

SYSTEM_PROMPTS: Dict[Tuple[str, str], str] = {
    ("linkedin", "professional"): (
        "You are a LinkedIn content strategist specializing in B2B engagement. "
        "Create professional posts that:\n"
        "- Start with a compelling hook or statistic\n"
        "- Use numbered lists or bullet points for scannability\n"
        "- Include relevant industry keywords\n"
        "- End with an engaging question\n"
        "- Target decision-makers and professionals\n"
        "- Maintain authoritative but approachable tone"
    ),
    ("linkedin", "modern"): (
        "You are a LinkedIn influencer who creates viral, story-driven content. Your posts:\n"
        "- Start with a personal anecdote or bold statement\n"
        "- Use conversational tone with strategic line breaks\n"
        "- Include emotional triggers and relatability\n"
        "- Create curiosity gaps\n"
        "- Focus on transformation and results"
    ),
    ("twitter", "professional"): (
        "You are a Twitter thread expert who creates educational, high-value threads. Your threads:\n"
        "- Hook with a bold claim or surprising fact\n"
        "- Use numbered tweets for easy following\n"
        "- Include actionable takeaways\n"
        "- Optimize for retweets and bookmarks\n"
        "- Keep each tweet under 280 characters\n"
        "- Separate tweets with a blank line"
    ),
    ("twitter", "modern"): (
        "You are a Twitter personality who creates viral, engaging threads with personality. Focus on:\n"
        "- Controversial or counterintuitive hooks\n"
        "- Conversational, punchy language\n"
        "- Strategic use of emojis\n"
        "- Community building\n"
        "- Keep each tweet under 280 characters and separate tweets with a blank line"
    ),
    ("instagram", "professional"): (
        "You are an Instagram business content creator. Create posts that:\n"
        "- Lead with value proposition\n"
        "- Use carousel-friendly formatting\n"
        "- Include actionable tips\n"
        "- Optimize for saves and shares\n"
        "- Balance professionalism with platform culture"
    ),
    ("facebook", "professional"): (
        "You are a Facebook page manager creating engaging, shareable content. Focus on:\n"
        "- Storytelling and relatability\n"
        "- Community engagement\n"
        "- Emotional connections\n"
        "- Clear value delivery\n"
        "- Share-worthy moments"
    ),
}

_MINIMAL_INSTRUCTION = "\n- Keep it short: a hook, at most three points and the link"

CONTENT_TYPE_MODIFIERS: Dict[str, str] = {
    "tutorial": "Focus on step-by-step clarity, include 'how-to' framing, emphasize learning outcomes",
    "news": "Lead with breaking news angle, include timestamp relevance, focus on impact",
    "opinion": "Take strong stance, include supporting evidence, invite debate",
    "case_study": "Highlight results and ROI, include specific metrics, focus on transformation",
    "product": "Focus on benefits over features, include social proof, create FOMO",
}

_PLATFORM_REQUIREMENTS: Dict[str, str] = {
    "linkedin": (
        "1. Start with a hook that promises value\n"
        "2. Use 3-5 numbered insights\n"
        "3. Include a thought-provoking question\n"
        "4. Add 5-7 relevant hashtags\n"
        "5. Keep under 1300 characters\n"
        "6. Include a clear CTA"
    ),
    "twitter": (
        "1. Hook tweet with a number promise\n"
        "2. 4-8 content tweets with insights\n"
        "3. End with a summary + CTA tweet that includes the link\n"
        "4. Add relevant hashtags sparingly"
    ),
    "instagram": (
        "1. Hook with a benefit\n"
        "2. One tip per paragraph\n"
        "3. End with a CTA\n"
        "4. Add 20-30 strategic hashtags"
    ),
    "facebook": (
        "1. Start with a relatable scenario\n"
        "2. Use a conversational tone\n"
        "3. Add an engagement question\n"
        "4. Include the link"
    ),
}


def system_prompt(platform: str, style: str, content_type: str) -> str:
    base = SYSTEM_PROMPTS.get((platform, style))
    if base is None:
        base = SYSTEM_PROMPTS.get((platform, "professional"), SYSTEM_PROMPTS[("linkedin", "professional")])
        if style == "minimal":
            base += _MINIMAL_INSTRUCTION
    modifier = CONTENT_TYPE_MODIFIERS.get(content_type)
    if modifier:
        base += f"\n\nContent angle: {modifier}."
    return base + "\n\nReply with the post text only, without commentary."


def user_prompt(summary: PageSummary, platform: str) -> str:
    key_points = ", ".join(summary.key_points) or "none extracted"
    requirements = _PLATFORM_REQUIREMENTS.get(platform, _PLATFORM_REQUIREMENTS["linkedin"])
    return (
        f'Create a {platform} post about: "{summary.title}"\n\n'
        f"Description: {summary.description or 'n/a'}\n"
        f"Key points: {key_points}\n"
        f"Link: {summary.url}\n\n"
        f"Requirements:\n{requirements}"
    )


def build_prompts(summary: PageSummary, platform: str, style: str, content_type: str) -> Tuple[str, str]:
    """Return ``(system_prompt, user_prompt)`` for one generation request."""
    return system_prompt(platform, style, content_type), user_prompt(summary, platform)
