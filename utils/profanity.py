from collections.abc import Iterable

REPLACEMENT = "****"


def clean_body(body: str, banned_words: Iterable[str]) -> str:
    """
    Replace banned words with ****.

    Words are split on single spaces and compared case-insensitively, so a
    banned word followed by punctuation ("fornax!") is left alone.
    """
    banned = {word.lower() for word in banned_words}
    words = body.split(" ")
    return " ".join(REPLACEMENT if word.lower() in banned else word for word in words)
