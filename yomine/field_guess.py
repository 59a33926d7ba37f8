"""Guessing which Anki note fields hold a term and its reading."""

from __future__ import annotations

from typing import Mapping, Sequence

_EXAMPLE_MAX_CHARS = 30
_EXAMPLE_KEEP_CHARS = 27
_ELLIPSIS = "..."

_HIRAGANA = (0x3041, 0x3096)
_KATAKANA = (0x30A1, 0x30FC)
_PROLONGED_SOUND_MARK = 0x30FC
_KANJI = (0x4E00, 0x9FAF)

_JAPANESE_RANGES = (
    (0x3000, 0x303F),  # CJK symbols and punctuation
    (0x3040, 0x309F),  # hiragana
    (0x30A0, 0x30FF),  # katakana
    (0xFF10, 0xFF19),  # full-width digits
    (0xFF21, 0xFF3A),  # full-width upper case
    (0xFF41, 0xFF5A),  # full-width lower case
    (0xFF01, 0xFF0F),  # full-width punctuation
    (0xFF1A, 0xFF1F),
    (0xFF3B, 0xFF3F),
    (0xFF5B, 0xFF60),
    (0xFFE0, 0xFFEE),  # full-width symbols and currency
    (0xFF66, 0xFF9F),  # half-width katakana
    (0xFF61, 0xFF65),  # half-width kana punctuation
    (0x4E00, 0x9FFF),  # common CJK
    (0x3400, 0x4DBF),  # rare CJK
)

# str.isspace() also accepts the ASCII separators below, which are not
# Unicode White_Space.
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _in_range(ch: str, bounds: tuple[int, int]) -> bool:
    return bounds[0] <= ord(ch) <= bounds[1]


def _is_whitespace(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_WHITESPACE


def _trim(value: str) -> str:
    start, end = 0, len(value)
    while start < end and _is_whitespace(value[start]):
        start += 1
    while end > start and _is_whitespace(value[end - 1]):
        end -= 1
    return value[start:end]


def is_kana(ch: str) -> bool:
    """Tell whether ``ch`` is hiragana, katakana or the prolonged sound mark."""
    return (
        ord(ch) == _PROLONGED_SOUND_MARK
        or _in_range(ch, _HIRAGANA)
        or _in_range(ch, _KATAKANA)
    )


def is_kanji(ch: str) -> bool:
    """Tell whether ``ch`` is a common kanji."""
    return _in_range(ch, _KANJI)


def is_japanese(ch: str) -> bool:
    """Tell whether ``ch`` is kana, kanji or Japanese punctuation."""
    return any(_in_range(ch, bounds) for bounds in _JAPANESE_RANGES)


def is_likely_term(value: str) -> bool:
    """A non-blank value made only of Japanese characters and whitespace."""
    trimmed = _trim(value)
    return bool(trimmed) and all(is_japanese(ch) or _is_whitespace(ch) for ch in trimmed)


def is_likely_reading(value: str) -> bool:
    """A non-blank value made only of kana and whitespace."""
    trimmed = _trim(value)
    return bool(trimmed) and all(is_kana(ch) or _is_whitespace(ch) for ch in trimmed)


def guess_field_mappings(
    sample_note: Mapping[str, str], available_fields: Sequence[str]
) -> tuple[str | None, str | None]:
    """Guess the term field and the reading field from a sample note.

    The term field is the first Japanese field containing kanji, or else the
    first Japanese field. The reading field is the first kana-only field after
    the term field, or else the first kana-only field before it.
    """
    best_term: str | None = None
    term_index: int | None = None

    for index, name in enumerate(available_fields):
        value = sample_note.get(name)
        if value is None:
            continue
        trimmed = _trim(value)
        if not trimmed or not is_likely_term(trimmed):
            continue
        if any(is_kanji(ch) for ch in trimmed):
            best_term, term_index = name, index
            break
        if best_term is None:
            best_term, term_index = name, index

    best_reading: str | None = None
    for index, name in enumerate(available_fields):
        value = sample_note.get(name)
        if value is None:
            continue
        trimmed = _trim(value)
        if not trimmed or not is_likely_reading(trimmed):
            continue
        if term_index is None or index > term_index:
            best_reading = name
            break
        if best_reading is None:
            best_reading = name

    return best_term, best_reading


def truncate_example(value: str) -> str:
    """Shorten a long example value for display, ending it with an ellipsis."""
    if len(value) > _EXAMPLE_MAX_CHARS:
        return value[:_EXAMPLE_KEEP_CHARS] + _ELLIPSIS
    return value