"""Tests for the draft generation pipeline (template path and remote fallback)."""

import random
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from socialposter.models.page import PageSummary
from socialposter.models.request import GenerationSettings
from socialposter.services.catalog import Catalog
from socialposter.services.formatters import TWEET_LIMIT
from socialposter.services.generator import generate, render_template, try_remote
from socialposter.services.llm import RemoteResult

PLATFORMS = ("linkedin", "twitter", "instagram", "facebook")
STYLES = ("professional", "modern", "minimal")

SUMMARY = PageSummary(
    url="https://example.com/learn-python",
    title="How to Learn Python in 30 Days",
    description="A complete guide for beginners",
    key_points=[
        "Set up your environment first",
        "Write a little code every day",
        "Build a small project each week",
        "Read other people's code",
        "Teach what you learn",
        "Review your progress monthly",
    ],
)


class _FakeRemote:
    """Stands in for :class:`RemoteGenerator` and records every call."""

    def __init__(self, result: RemoteResult):
        self.result = result
        self.calls = []

    async def try_generate(self, system_prompt, user_prompt, platform):
        self.calls.append((system_prompt, user_prompt, platform))
        return self.result


@pytest.fixture(autouse=True)
def no_configured_key():
    with patch("socialposter.config.API_KEY", ""):
        yield


class TestRenderTemplate:
    def test_draft_fields(self):
        draft = render_template(SUMMARY, "linkedin", "professional", rng=random.Random(1))
        assert draft.platform == "linkedin"
        assert draft.style == "professional"
        assert draft.content_type == "tutorial"
        assert draft.source == "template"
        assert draft.segments is None
        assert draft.char_count == len(draft.content)
        assert draft.word_count == len(draft.content.split())
        assert draft.hashtags[0] == "#Python"
        assert "https://example.com/learn-python" in draft.content

    def test_same_seed_same_draft(self):
        for platform in PLATFORMS:
            for style in STYLES:
                first = render_template(SUMMARY, platform, style, rng=random.Random(11))
                second = render_template(SUMMARY, platform, style, rng=random.Random(11))
                assert first == second

    def test_linkedin_points_capped_and_numbered(self):
        draft = render_template(SUMMARY, "linkedin", "professional", rng=random.Random(0))
        assert "5. Teach what you learn" in draft.content
        assert "Review your progress monthly" not in draft.content

    def test_facebook_numbered_points(self):
        summary = SUMMARY.model_copy(update={"key_points": ["Point A", "Point B"]})
        draft = render_template(summary, "facebook", "professional", rng=random.Random(0))
        assert "1. Point A\n2. Point B" in draft.content

    @pytest.mark.parametrize("style", STYLES)
    def test_twitter_thread_shape(self, style):
        draft = render_template(SUMMARY, "twitter", style, rng=random.Random(3))
        # twitter keeps four key points
        assert len(draft.segments) == 4 + 2
        assert all(len(segment) <= TWEET_LIMIT for segment in draft.segments)
        assert draft.content == "\n\n".join(draft.segments)

    def test_twitter_without_points(self):
        summary = SUMMARY.model_copy(update={"key_points": []})
        draft = render_template(summary, "twitter", "professional", rng=random.Random(3))
        assert len(draft.segments) == 2

    def test_instagram_hashtag_limit(self):
        summary = SUMMARY.model_copy(
            update={"title": "AI and Python for startup growth marketing with React and JavaScript"}
        )
        draft = render_template(summary, "instagram", "professional", rng=random.Random(0))
        assert 7 < len(draft.hashtags) <= 30

    def test_instagram_minimal_reports_rendered_hashtags(self):
        summary = SUMMARY.model_copy(
            update={"title": "AI and Python for startup growth marketing with React and JavaScript"}
        )
        draft = render_template(summary, "instagram", "minimal", rng=random.Random(0))
        assert len(draft.hashtags) == 10
        assert all(tag in draft.content for tag in draft.hashtags)

    def test_unknown_platform_uses_generic_layout(self):
        draft = render_template(SUMMARY, "myspace", "modern", rng=random.Random(0))
        assert draft.platform == "myspace"
        assert draft.hashtags == []
        assert draft.content.endswith("Share your thoughts!")
        assert "• Set up your environment first" in draft.content

    def test_unknown_style_renders_professional(self):
        retro = render_template(SUMMARY, "linkedin", "retro", rng=random.Random(5))
        professional = render_template(SUMMARY, "linkedin", "professional", rng=random.Random(5))
        assert retro == professional

    def test_platform_name_is_normalized(self):
        draft = render_template(SUMMARY, " LinkedIn ", "professional", rng=random.Random(0))
        assert draft.platform == "linkedin"
        assert draft.hashtags

    def test_markup_never_reaches_output(self):
        summary = PageSummary(
            url="javascript:alert(1)",
            title="<script>alert(1)</script>Big <b>news</b> today",
            description='<img src=x onerror="steal()">',
            key_points=["<a href='javascript:evil()'>Click here for a prize</a>"],
        )
        for platform in PLATFORMS:
            content = render_template(summary, platform, "professional", rng=random.Random(0)).content
            assert "<" not in content
            assert "javascript:" not in content
            assert "alert(1)" not in content

    def test_custom_catalog(self):
        catalog = Catalog(generic_cta="Tell us more!", hooks={"general": ["Read: {title}"]})
        summary = SUMMARY.model_copy(update={"title": "Weekly notes", "description": ""})
        draft = render_template(summary, "myspace", "professional", rng=random.Random(0), catalog=catalog)
        assert draft.content.startswith("Read: Weekly notes")
        assert draft.content.endswith("Tell us more!")

    def test_sparse_summary(self):
        draft = render_template(PageSummary(url=""), "facebook", "minimal", rng=random.Random(0))
        assert draft.content
        assert "untitled page" in draft.content.lower()


class TestRemoteFallback:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("platform", PLATFORMS)
    @pytest.mark.parametrize("style", STYLES)
    async def test_failure_equals_template(self, platform, style):
        remote = _FakeRemote(RemoteResult(ok=False, error="HTTP 503"))
        draft = await generate(SUMMARY, platform, style, rng=random.Random(9), remote=remote)

        assert remote.calls
        assert draft == render_template(SUMMARY, platform, style, rng=random.Random(9))

    @pytest.mark.asyncio
    async def test_success_uses_remote_text(self):
        remote = _FakeRemote(RemoteResult(ok=True, text="A great post about #Python and #AI", model="m"))
        draft = await generate(SUMMARY, "linkedin", "modern", remote=remote)

        assert draft.source == "ai"
        assert draft.content == "A great post about #Python and #AI"
        assert draft.hashtags == ["#Python", "#AI"]
        assert draft.content_type == "tutorial"

    @pytest.mark.asyncio
    async def test_remote_twitter_output_split_into_segments(self):
        text = "1/ Hook tweet\n\n2/ " + "long " * 80 + "\n\n3/ Wrap up #Python"
        remote = _FakeRemote(RemoteResult(ok=True, text=text))
        draft = await generate(SUMMARY, "twitter", "professional", remote=remote)

        assert draft.source == "ai"
        assert len(draft.segments) == 3
        assert all(len(segment) <= TWEET_LIMIT for segment in draft.segments)
        assert draft.segments[0] == "1/ Hook tweet"
        assert draft.segments[1].startswith("2/ long")
        assert draft.segments[2] == "3/ Wrap up #Python"

    @pytest.mark.asyncio
    async def test_remote_twitter_segments_are_numbered(self):
        text = "Hook without a number\n\n2/5 Second point\n\nClosing thought"
        remote = _FakeRemote(RemoteResult(ok=True, text=text))
        draft = await generate(SUMMARY, "twitter", "modern", remote=remote)

        assert draft.segments == [
            "1/ Hook without a number",
            "2/ Second point",
            "3/ Closing thought",
        ]
        assert draft.content == "\n\n".join(draft.segments)

    @pytest.mark.asyncio
    async def test_remote_hashtags_start_with_a_letter(self):
        remote = _FakeRemote(RemoteResult(ok=True, text="Tip #1: plan your #Python goals for #2024"))
        draft = await generate(SUMMARY, "linkedin", "professional", remote=remote)
        assert draft.hashtags == ["#Python"]

    @pytest.mark.asyncio
    async def test_remote_hashtags_capped_per_platform(self):
        tags = " ".join(f"#Topic{index}" for index in range(12))
        remote = _FakeRemote(RemoteResult(ok=True, text=f"Big week ahead {tags}"))

        linkedin = await generate(SUMMARY, "linkedin", "professional", remote=remote)
        instagram = await generate(SUMMARY, "instagram", "professional", remote=remote)

        assert linkedin.hashtags == [f"#Topic{index}" for index in range(7)]
        assert len(instagram.hashtags) == 12

    @pytest.mark.asyncio
    async def test_remote_text_keeps_angle_brackets(self):
        remote = _FakeRemote(RemoteResult(ok=True, text="Prefer List<String> when x<10 #Java"))
        draft = await generate(SUMMARY, "facebook", "professional", remote=remote)
        assert draft.content == "Prefer List<String> when x<10 #Java"

    @pytest.mark.asyncio
    async def test_remote_markup_is_sanitized(self):
        remote = _FakeRemote(RemoteResult(ok=True, text="<script>x()</script>Clean <b>post</b>"))
        draft = await generate(SUMMARY, "facebook", "professional", remote=remote)
        assert draft.content == "Clean post"

    @pytest.mark.asyncio
    async def test_empty_remote_text_falls_back(self):
        remote = _FakeRemote(RemoteResult(ok=True, text="<script>only()</script>"))
        draft = await generate(SUMMARY, "facebook", "professional", rng=random.Random(2), remote=remote)
        assert draft.source == "template"

    @pytest.mark.asyncio
    async def test_unknown_platform_skips_remote(self):
        remote = _FakeRemote(RemoteResult(ok=True, text="never used"))
        draft = await generate(SUMMARY, "myspace", "professional", remote=remote)
        assert remote.calls == []
        assert draft.source == "template"

    @pytest.mark.asyncio
    async def test_prompts_name_platform_and_title(self):
        remote = _FakeRemote(RemoteResult(ok=False))
        await generate(SUMMARY, "instagram", "minimal", remote=remote)
        system, user, platform = remote.calls[0]
        assert platform == "instagram"
        assert "Instagram" in system
        assert "How to Learn Python in 30 Days" in user


class TestRemoteConfiguration:
    @pytest.mark.asyncio
    async def test_no_api_key_never_calls_network(self):
        with patch("httpx.AsyncClient", side_effect=AssertionError("network must not be used")):
            assert await try_remote(SUMMARY, "linkedin", "professional") is None
            draft = await generate(SUMMARY, "linkedin", "professional", rng=random.Random(0))
        assert draft.source == "template"

    @pytest.mark.asyncio
    async def test_request_settings_build_client(self):
        instance = MagicMock()
        instance.try_generate = AsyncMock(return_value=RemoteResult(ok=True, text="Remote post"))
        settings = GenerationSettings(api_key="sk-test", provider="openai", model="gpt-4o-mini", timeout=5)

        with patch("socialposter.services.generator.RemoteGenerator", return_value=instance) as factory:
            draft = await generate(SUMMARY, "linkedin", "professional", settings=settings)

        factory.assert_called_once_with("sk-test", provider="openai", model="gpt-4o-mini", timeout=5)
        assert draft.content == "Remote post"

    @pytest.mark.asyncio
    async def test_configured_key_used_when_request_has_none(self):
        instance = MagicMock()
        instance.try_generate = AsyncMock(return_value=RemoteResult(ok=False, error="HTTP 401"))

        with (
            patch("socialposter.config.API_KEY", "hf-configured"),
            patch("socialposter.services.generator.RemoteGenerator", return_value=instance) as factory,
        ):
            draft = await generate(SUMMARY, "twitter", "modern", rng=random.Random(4))

        assert factory.call_args.args[0] == "hf-configured"
        assert draft == render_template(SUMMARY, "twitter", "modern", rng=random.Random(4))

    @pytest.mark.asyncio
    async def test_unencodable_api_key_falls_back_to_templates(self):
        real_client = httpx.AsyncClient

        def factory(**kwargs):
            transport = httpx.MockTransport(lambda request: httpx.Response(500))
            return real_client(transport=transport, **kwargs)

        settings = GenerationSettings(api_key="clé-secrète")
        with patch("httpx.AsyncClient", side_effect=factory):
            draft = await generate(SUMMARY, "linkedin", "professional", settings=settings, rng=random.Random(6))

        assert draft.source == "template"
        assert draft == render_template(SUMMARY, "linkedin", "professional", rng=random.Random(6))
