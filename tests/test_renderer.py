"""Tests for Markdown rendering of chat sessions."""

from chats2md.models import Attachments, ChatSession, Link, Message
from chats2md.renderer import heading_label, render_message, render_session

from .conftest import local


def _session(*messages: Message) -> ChatSession:
    return ChatSession(title="Test", messages=list(messages))


class TestDateHeadings:
    def test_one_heading_per_calendar_date(self, two_day_session):
        markdown = render_session(two_day_session)
        headings = [line for line in markdown.splitlines() if line.startswith("## ")]
        assert headings == ["## 2024-03-01", "## 2024-03-02"]

    def test_heading_followed_by_blank_line(self, two_day_session):
        assert render_session(two_day_session).startswith("## 2024-03-01\n\n### USER | 23:50\n")

    def test_returning_to_an_earlier_date_emits_a_new_heading(self):
        markdown = render_session(
            _session(
                Message(role="user", content="a", timestamp=local(2024, 3, 2, 8, 0)),
                Message(role="user", content="b", timestamp=local(2024, 3, 1, 8, 0)),
            )
        )
        assert markdown.count("## 2024-03-02") == 1
        assert markdown.index("## 2024-03-02") < markdown.index("## 2024-03-01")


class TestMessageBlocks:
    def test_system_message_is_fenced_without_heading(self):
        message = Message(role="system", content="ls -la", timestamp=local(2024, 3, 1, 10, 0))
        markdown = render_session(_session(message))
        assert "```system\nls -la\n```\n" in markdown
        assert "###" not in markdown

    def test_system_message_with_backticks_is_not_escaped(self):
        message = Message(role="system", content="a ``` b", timestamp=local(2024, 3, 1, 10, 0))
        assert render_message(message, "10:00") == "```system\na ``` b\n```\n"

    def test_assistant_heading_uses_model(self):
        message = Message(
            role="assistant", model="gpt-4", content="Hi", timestamp=local(2024, 3, 1, 10, 16)
        )
        assert render_message(message, "10:16") == "### gpt-4 | 10:16\nHi\n"

    def test_assistant_heading_without_model(self):
        message = Message(role="assistant", content="Hi", timestamp=local(2024, 3, 1, 10, 16))
        assert render_message(message, "10:16").startswith("### ASSISTANT | 10:16\n")

    def test_model_is_ignored_for_other_roles(self):
        message = Message(role="user", model="gpt-4", content="?", timestamp=local(2024, 3, 1))
        assert heading_label(message) == "USER"

    def test_other_role_uses_uppercased_name(self):
        message = Message(role="tool", content="done", timestamp=local(2024, 3, 1))
        assert heading_label(message) == "TOOL"

    def test_attachment_placeholders_and_links(self, rich_message):
        assert render_message(rich_message, "10:15") == (
            "### USER | 10:15\n"
            "See attached.\n"
            "\n{pictures}\n"
            "\n{files}\n"
            "\n{links}\n"
            "[Docs](https://x)\n"
            "\n{web search links}\n"
            "- [https://search.example/result](https://search.example/result)\n"
        )

    def test_link_without_title_uses_url(self):
        message = Message(
            role="assistant",
            content="x",
            timestamp=local(2024, 3, 1),
            links=[Link(url="https://plain")],
        )
        assert "[https://plain](https://plain)\n" in render_message(message, "00:00")

    def test_only_pictures_placeholder(self):
        message = Message(
            role="user",
            content="pic",
            timestamp=local(2024, 3, 1),
            attachments=Attachments(pictures=1),
        )
        rendered = render_message(message, "00:00")
        assert "{pictures}" in rendered
        assert "{files}" not in rendered
        assert "{links}" not in rendered

    def test_every_message_ends_with_blank_separator(self):
        markdown = render_session(
            _session(
                Message(role="user", content="one", timestamp=local(2024, 3, 1, 9, 0)),
                Message(role="system", content="two", timestamp=local(2024, 3, 1, 9, 1)),
            )
        )
        assert markdown == (
            "## 2024-03-01\n\n"
            "### USER | 09:00\none\n\n"
            "```system\ntwo\n```\n\n"
        )


class TestEmptySession:
    def test_placeholder_document(self):
        assert render_session(ChatSession(title="Nothing")) == "{no messages}\n"
