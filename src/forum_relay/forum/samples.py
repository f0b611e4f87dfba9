"""Sample webhook payloads in the forum's Slack format, used by diagnostics."""

from forum_relay.models.forum import ForumEventType

_FORUM_NAME = "智教联盟论坛"
_FORUM_BASE = "https://forum.smart-teach.cn"
_AVATAR = f"{_FORUM_BASE}/assets/favicon-v4ksoaxf.png"


def _payload(attachment: dict) -> dict:
    return {
        "username": _FORUM_NAME,
        "avatar_url": _AVATAR,
        "text": "",
        "attachments": [
            {
                "footer": _FORUM_NAME,
                "fields": None,
                "author_name": "TestUser",
                "author_link": f"{_FORUM_BASE}/u/TestUser",
                "author_icon": f"{_FORUM_BASE}/assets/avatars/QkZ5vVgZJNzI25dY.png",
                **attachment,
            }
        ],
    }


def user_post_sample() -> dict:
    return _payload(
        {
            "fallback": "[upl-image-preview url=https://example.com/a.jpg]\n - TestUser",
            "color": "fed330",
            "title": "发布主题 `测试帖子标题`",
            "title_link": f"{_FORUM_BASE}/d/611",
            "text": "这是一个测试帖子的内容...",
        }
    )


def admin_approval_sample() -> dict:
    return _payload(
        {
            "fallback": " - TestUser",
            "color": "26de81",
            "title": "在 `测试帖子标题` 中审核通过的帖子",
            "title_link": f"{_FORUM_BASE}/d/612/1",
            "text": None,
        }
    )


def user_reply_sample() -> dict:
    return _payload(
        {
            "fallback": "测试回复内容 - TestUser",
            "color": "26de81",
            "title": "新回复于 `测试帖子标题`",
            "title_link": f"{_FORUM_BASE}/d/612/2",
            "text": "这是一个测试回复的内容",
        }
    )


# Sample name (as used in diagnostics URLs) -> (event kind, payload builder)
SAMPLES = {
    "user-post": (ForumEventType.USER_POST_APPROVAL, user_post_sample),
    "admin-approval": (ForumEventType.ADMIN_POST_APPROVAL, admin_approval_sample),
    "user-reply": (ForumEventType.USER_REPLY, user_reply_sample),
}
