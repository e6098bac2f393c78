import pytest

from discordrest.rate.emoji import emoji_rune, string_is_custom_emoji, string_is_emoji_only


@pytest.mark.parametrize("emoji", ["🏑", "❄️", "🤲🏿"])
def test_emoji_only_accepts_emojis(emoji):
    assert string_is_emoji_only(emoji) is True


@pytest.mark.parametrize("text", ["🏃🏿🏃🏿", "te"])
def test_emoji_only_rejects_non_emojis(text):
    assert string_is_emoji_only(text) is False


def test_emoji_only_rejects_empty_string():
    assert string_is_emoji_only("") is False


@pytest.mark.parametrize(
    "emoji", ["emoji_thing:213131141", "StareNeutral:612368399732965376"]
)
def test_custom_emoji_accepted(emoji):
    assert string_is_custom_emoji(emoji) is True


@pytest.mark.parametrize(
    "text",
    ["no_id", "name:abc", "with space:123", "a:b:123", "name:"],
)
def test_custom_emoji_rejected(text):
    assert string_is_custom_emoji(text) is False


def test_emoji_rune_special_characters():
    assert emoji_rune("\u00a9") is True
    assert emoji_rune("\u00ae") is True
    assert emoji_rune("a") is False


def test_emoji_rune_accepts_code_points():
    assert emoji_rune(0x1F914) is True
    assert emoji_rune(ord("z")) is False


def test_emoji_rune_rejects_multiple_characters():
    with pytest.raises(ValueError):
        emoji_rune("ab")