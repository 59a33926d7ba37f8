"""Reading SRT and SSA/ASS subtitle files into sentences."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_BOM = "\ufeff"

_HIRAGANA_SCX = (
    "\u3001-\u3003\u3008-\u3011\u3013-\u301f\u3030-\u3035\u3037\u303c\u303d"
    "\u3041-\u3096\u3099-\u309f\u30a0\u30fb\u30fc\ufe45\ufe46"
    "\uff61-\uff65\uff70\uff9e\uff9f"
    "\U0001b001-\U0001b11f\U0001b132\U0001b150-\U0001b152\U0001f200"
)

# Parenthesised readings (full or half width) made only of hiragana.
_KANA_READING = re.compile(rf"(?:\(|（)[{_HIRAGANA_SCX}・･\s]+(?:\)|）)")
_INLINE_TAGS = re.compile(r"</?(?:b|i|u)>", re.IGNORECASE)

_SRT_TIMING = re.compile(
    r"^\s*(\d+):(\d{1,2}):(\d{1,2})[,.](\d{1,3})\s*-->\s*(\d+):(\d{1,2}):(\d{1,2})[,.](\d{1,3})"
)
_SSA_TIME = re.compile(r"^\s*(\d+):(\d{1,2}):(\d{1,2})(?:[.,](\d+))?\s*$")
_SSA_OVERRIDE = re.compile(r"\{[^}]*\}")
_SSA_DEFAULT_FORMAT = [
    "layer", "start", "end", "style", "name",
    "marginl", "marginr", "marginv", "effect", "text",
]


class SubtitleError(Exception):
    """Raised when a subtitle file cannot be read or holds no subtitles."""


class SubtitleFormat(enum.Enum):
    SRT = "srt"
    SSA = "ssa"
    OTHER = "other"

    @classmethod
    def from_path(cls, path: str) -> SubtitleFormat:
        """Pick the format from a file's extension."""
        ext = Path(path).suffix.lstrip(".").lower()
        if ext == "srt":
            return cls.SRT
        if ext in ("ssa", "ass"):
            return cls.SSA
        return cls.OTHER


@dataclass
class SourceFile:
    """A subtitle file chosen for analysis."""

    id: int
    original_file: str
    title: str = ""
    creator: str | None = None
    source: str | None = None
    file_type: SubtitleFormat | None = None

    def __post_init__(self) -> None:
        if self.file_type is None:
            self.file_type = SubtitleFormat.from_path(self.original_file)


@dataclass(frozen=True)
class TimeStamp:
    """Start and end of a subtitle, in seconds."""

    start: float
    end: float


@dataclass
class Sentence:
    id: int
    source_id: int
    text: str
    timestamp: TimeStamp | None = None
    segments: list[Any] = field(default_factory=list)


@dataclass
class _Cue:
    start: float
    end: float
    text: str


def clean_subtitle_text(text: str) -> str:
    """Collapse whitespace, drop kana readings in parentheses and inline tags."""
    collapsed = " ".join(text.split())
    without_readings = _KANA_READING.sub("", collapsed)
    return _INLINE_TAGS.sub("", without_readings)


def _build_sentences(cues: list[_Cue], source_id: int) -> list[Sentence]:
    non_empty = (cue for cue in cues if cue.text)
    sentences = []
    for index, cue in enumerate(non_empty):
        text = clean_subtitle_text(cue.text)
        if not text:
            continue
        sentences.append(
            Sentence(
                id=index,
                source_id=source_id,
                text=text,
                timestamp=TimeStamp(cue.start, cue.end),
            )
        )
    if not sentences:
        raise SubtitleError("No subtitles found in the file.")
    return sentences


def _srt_seconds(h: str, m: str, s: str, ms: str) -> float:
    return int(h) * 3600 + int(m) * 60 + int(s) + int(ms.ljust(3, "0")) / 1000


def _split_blocks(lines: list[str]) -> list[list[str]]:
    blocks: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if line.strip():
            current.append(line)
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def _parse_srt_cues(text: str) -> list[_Cue]:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    cues: list[_Cue] = []
    for block in _split_blocks(lines):
        match = _SRT_TIMING.match(block[0])
        body = block[1:]
        if match is None and len(block) > 1 and block[0].strip().isdigit():
            match = _SRT_TIMING.match(block[1])
            body = block[2:]
        if match is None:
            if not cues:
                raise SubtitleError(f"Error Parsing SRT File: invalid cue {block[0]!r}")
            cues[-1].text += "\n\n" + "\n".join(block)
            continue
        groups = match.groups()
        cues.append(
            _Cue(
                start=_srt_seconds(*groups[:4]),
                end=_srt_seconds(*groups[4:]),
                text="\n".join(body),
            )
        )
    return cues


def _ssa_seconds(value: str) -> float | None:
    match = _SSA_TIME.match(value)
    if match is None:
        return None
    h, m, s, frac = match.groups()
    seconds = int(h) * 3600 + int(m) * 60 + int(s)
    if frac:
        seconds += int(frac) / 10 ** len(frac)
    return float(seconds)


def _ssa_text_to_plain(text: str) -> str:
    text = _SSA_OVERRIDE.sub("", text)
    return text.replace("\\N", "\n").replace("\\n", "\n").replace("\\h", "\u00a0")


def _parse_ssa_cues(text: str) -> list[_Cue]:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    in_events = False
    seen_events = False
    fields = list(_SSA_DEFAULT_FORMAT)
    cues: list[_Cue] = []
    for raw in lines:
        line = raw.strip()
        if line.startswith("[") and line.endswith("]"):
            in_events = line.lower() == "[events]"
            seen_events = seen_events or in_events
            continue
        if not in_events:
            continue
        key, sep, rest = line.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if key == "format":
            fields = [name.strip().lower() for name in rest.split(",")]
            continue
        if key != "dialogue":
            continue
        if not {"start", "end", "text"} <= set(fields):
            continue
        parts = rest.lstrip().split(",", len(fields) - 1)
        if len(parts) < len(fields):
            continue
        values = dict(zip(fields, parts))
        start = _ssa_seconds(values["start"])
        end = _ssa_seconds(values["end"])
        if start is None or end is None:
            continue
        cues.append(_Cue(start, end, _ssa_text_to_plain(values["text"])))
    if not seen_events:
        raise SubtitleError("Error Parsing SSA/ASS File: no [Events] section")
    return cues


def parse_srt_text(text: str, source_id: int) -> list[Sentence]:
    """Parse SRT content into sentences."""
    return _build_sentences(_parse_srt_cues(text.lstrip(_BOM)), source_id)


def parse_ssa_text(text: str, source_id: int) -> list[Sentence]:
    """Parse SSA/ASS content into sentences, skipping malformed events."""
    return _build_sentences(_parse_ssa_cues(text.lstrip(_BOM)), source_id)


def _read_text(source_file: SourceFile) -> str:
    try:
        return Path(source_file.original_file).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SubtitleError(f"File is not valid UTF-8: {exc}") from exc


def read_srt(source_file: SourceFile) -> list[Sentence]:
    return parse_srt_text(_read_text(source_file), source_file.id)


def read_ssa(source_file: SourceFile) -> list[Sentence]:
    return parse_ssa_text(_read_text(source_file), source_file.id)


def read(source_file: SourceFile) -> list[Sentence]:
    """Read a source file according to its subtitle format."""
    if source_file.file_type is SubtitleFormat.SRT:
        return read_srt(source_file)
    if source_file.file_type is SubtitleFormat.SSA:
        return read_ssa(source_file)
    ext = Path(source_file.original_file).suffix.lstrip(".")
    raise SubtitleError(f"Unsupported file type: {ext}")