"""Render forum events into QQ group message text."""

import re

from forum_relay.models.forum import ForumEvent, ForumEventType

MAX_CONTENT_LENGTH = 100

KIND_HEADERS: dict[ForumEventType, tuple[str, str]] = {
    ForumEventType.USER_POST_APPROVAL: ("📝", "新帖发布"),
    ForumEventType.ADMIN_POST_APPROVAL: ("✅", "帖子审核通过"),
    ForumEventType.USER_REPLY: ("💬", "新回复"),
}
DEFAULT_HEADER = ("📢", "论坛动态")

IMAGE_PLACEHOLDER = "[图片]"

# Applied in order
_CLEANUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\[upl-image-preview[^\]]*\]"), IMAGE_PLACEHOLDER),
    (re.compile(r"\[img[^\]]*\]"), IMAGE_PLACEHOLDER),
    (re.compile(r"\[url[^\]]*\]"), ""),
    (re.compile(r"\[/[^\]]*\]"), ""),
    (re.compile(r"\n+"), " "),
)


def clean_content(content: str) -> str:
    """Strip forum markup from post content and flatten it onto one line.

    Image previews become a placeholder, url and closing tags are dropped,
    newline runs collapse to a single space.
    """
    for pattern, replacement in _CLEANUP_RULES:
        content = pattern.sub(replacement, content)
    return content.strip()


def render(event: ForumEvent) -> str:
    """Build the multi-line group message for a forum event."""
    emoji, label = KIND_HEADERS.get(event.kind, DEFAULT_HEADER)

    lines = [
        f"{emoji} 【{label}】",
        f"📖 标题：{event.title}",
        f"👤 作者：{event.author}",
    ]

    if event.content and event.content.strip():
        content = clean_content(event.content)
        if len(content) > MAX_CONTENT_LENGTH:
            lines.append(f"📄 内容：{content[:MAX_CONTENT_LENGTH]}...")
        elif content:
            lines.append(f"📄 内容：{content}")

    lines.append(f"🔗 链接：{event.link}")
    return "\n".join(lines)
