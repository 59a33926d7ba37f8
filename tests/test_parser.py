import pytest

from yomine.parser import (
    SourceFile,
    SubtitleError,
    SubtitleFormat,
    TimeStamp,
    clean_subtitle_text,
    parse_srt_text,
    parse_ssa_text,
    read,
    read_srt,
    read_ssa,
)

SRT = (
    "\ufeff1\n"
    "00:00:01,500 --> 00:00:03,000\n"
    "漢字（かんじ）を\n"
    "<i>読む</i>\n"
    "\n"
    "2\n"
    "00:00:04,000 --> 00:00:05,250\n"
    "(ひらがな)\n"
    "\n"
    "3\n"
    "00:01:00,000 --> 00:01:02,000\n"
    "<b>最後</b>の行\n"
)

SSA = (
    "[Script Info]\n"
    "Title: sample\n"
    "\n"
    "[Events]\n"
    "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text\n"
    "Dialogue: 0,0:00:01.50,0:00:03.00,Default,,0,0,0,,{\\b1}こんにちは{\\b0}\\N世界, です\n"
    "Comment: 0,0:00:02.00,0:00:03.00,Default,,0,0,0,,ignored\n"
    "Dialogue: 0,0:00:04.00,0:00:05.00,Default,,0,0,0,,二行目\n"
)


def test_clean_removes_readings_and_tags():
    assert clean_subtitle_text("漢字（かんじ）を <b>読む</b>") == "漢字を 読む"


def test_clean_collapses_whitespace():
    assert clean_subtitle_text("  a \n\t b  ") == "a b"


def test_clean_keeps_katakana_parentheses():
    assert clean_subtitle_text("(カタカナ)") == "(カタカナ)"


def test_parse_srt_sentences():
    sentences = parse_srt_text(SRT, source_id=7)
    assert [s.text for s in sentences] == ["漢字を 読む", "最後の行"]
    assert [s.id for s in sentences] == [0, 2]
    assert all(s.source_id == 7 for s in sentences)
    assert sentences[0].timestamp == TimeStamp(1.5, 3.0)
    assert sentences[1].timestamp.start == 60.0
    assert sentences[0].segments == []


def test_parse_srt_without_subtitles_raises():
    with pytest.raises(SubtitleError, match="No subtitles found"):
        parse_srt_text("", source_id=1)


def test_parse_srt_only_readings_raises():
    text = "1\n00:00:01,000 --> 00:00:02,000\n（よみ）\n"
    with pytest.raises(SubtitleError, match="No subtitles found"):
        parse_srt_text(text, source_id=1)


def test_parse_srt_malformed_raises():
    with pytest.raises(SubtitleError, match="Error Parsing SRT File"):
        parse_srt_text("not a subtitle\n", source_id=1)


def test_parse_ssa_sentences():
    sentences = parse_ssa_text(SSA, source_id=3)
    assert [s.text for s in sentences] == ["こんにちは 世界, です", "二行目"]
    assert sentences[0].timestamp == TimeStamp(1.5, 3.0)
    assert sentences[1].id == 1


def test_parse_ssa_without_events_raises():
    with pytest.raises(SubtitleError):
        parse_ssa_text("[Script Info]\nTitle: x\n", source_id=1)


@pytest.mark.parametrize(
    "path,expected",
    [
        ("a/b.srt", SubtitleFormat.SRT),
        ("x.ASS", SubtitleFormat.SSA),
        ("x.ssa", SubtitleFormat.SSA),
        ("x.txt", SubtitleFormat.OTHER),
    ],
)
def test_format_from_path(path, expected):
    assert SubtitleFormat.from_path(path) is expected


def test_read_dispatches_by_extension(tmp_path):
    srt_path = tmp_path / "show.srt"
    srt_path.write_text(SRT, encoding="utf-8")
    ssa_path = tmp_path / "show.ass"
    ssa_path.write_text(SSA, encoding="utf-8")

    srt_file = SourceFile(id=3, original_file=str(srt_path))
    ssa_file = SourceFile(id=3, original_file=str(ssa_path))
    assert read(srt_file) == read_srt(srt_file)
    assert read(ssa_file) == read_ssa(ssa_file)
    assert read(srt_file)[0].text == "漢字を 読む"


def test_read_unsupported_type(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    with pytest.raises(SubtitleError, match="txt"):
        read(SourceFile(id=1, original_file=str(path)))


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        read(SourceFile(id=1, original_file=str(tmp_path / "gone.srt")))