# yomine

yomine holds the building blocks of a Japanese vocabulary-mining
workflow built around subtitle files. It reads SRT and SSA/ASS subtitles
into timestamped sentences, stores settings as JSON in the user's data
directory, guesses which Anki note fields hold a term and its reading,
seeks inside a running mpv player, and keeps the state behind the
application's dialogs and colour themes.

## Modules

| Module | Purpose |
| --- | --- |
| `yomine.parser` | Read `.srt`, `.ass` and `.ssa` files into `Sentence` objects; strip inline `<b>`, `<i>`, `<u>` tags and parenthesised hiragana readings. |
| `yomine.persistence` | Save, load and delete JSON data files in the per-user application data directory. |
| `yomine.settings` | Anki model field mappings and the WebSocket port, with draft objects that track unsaved changes. |
| `yomine.field_guess` | Guess which fields of an Anki note hold the term and its reading. |
| `yomine.mpv` | Detect mpv through its IPC socket and send seek commands, recording which seeks mpv confirmed. |
| `yomine.theme` | The Dracula and Tokyo Night colour palettes and colour blending. |
| `yomine.dialogs` | State for the error dialog, the restart dialog, the busy overlay, and the file dialog's width. |

## Reading subtitles

```python
from yomine.parser import parse_srt_text, SubtitleError

srt = """1
00:00:01,000 --> 00:00:03,500
<i>今日（きょう）は</i>いい天気

2
00:00:04,000 --> 00:00:06,000
散歩に行こう
"""

for sentence in parse_srt_text(srt, source_id=1):
    print(sentence.id, sentence.text, sentence.timestamp)
# 0 今日はいい天気 TimeStamp(start=1.0, end=3.5)
# 1 散歩に行こう TimeStamp(start=4.0, end=6.0)
```

Whitespace inside a line is collapsed to single spaces. Content with no
usable lines raises `SubtitleError`. `parse_ssa_text` does the same for
SSA/ASS content, skipping malformed events and removing `{...}` override
blocks.

To read files, describe them with `SourceFile`; its format is taken from
the extension (`SubtitleFormat.from_path`):

```python
from yomine.parser import SourceFile, read

sentences = read(SourceFile(id=1, original_file="episode01.ja.ass"))
```

`read` raises `SubtitleError` for any file that is not SRT or SSA/ASS,
and for files that are not valid UTF-8. A leading byte-order mark is
ignored.

## Keeping data between sessions

```python
from yomine.persistence import save_json, load_json_or_default, data_file_exists
from yomine.settings import SettingsData

settings = load_json_or_default("settings.json", SettingsData)
save_json(settings, "settings.json")
```

Files live in a `yomine` folder inside the user's data directory;
`get_app_data_dir()` returns it. Objects with `to_dict` are saved through
it, and a default factory with `from_dict` is used to rebuild loaded
data. `load_json` returns the default for a missing file and lets read
and parse errors propagate; `load_json_or_default` logs them and returns
the default instead. `delete_data_file` removes a file if it exists.

## Settings drafts

`AnkiSettingsDraft` and `WebSocketSettingsDraft` hold unsaved edits:

```python
from yomine.settings import (
    AnkiSettingsDraft, ModelMappingEditor, SettingsData, WebSocketSettingsDraft,
)

draft = AnkiSettingsDraft()
draft.open(SettingsData())
draft.apply_editor(ModelMappingEditor("Japanese", "Expression", "Reading"))
assert draft.is_dirty()
settings = draft.save()

ws = WebSocketSettingsDraft()
ws.open(settings)
ws.temp_websocket_settings.port = 9000
settings = ws.saved_settings()   # ValueError outside 1024-65535
```

Both drafts also offer `cancel()` and `restore_default()`. The default
WebSocket port is 8766.

## Guessing Anki fields

```python
from yomine.field_guess import guess_field_mappings

note = {"Expression": "天気", "Reading": "てんき", "Meaning": "weather"}
guess_field_mappings(note, ["Expression", "Reading", "Meaning"])
# ("Expression", "Reading")
```

The term field is the first all-Japanese field containing kanji, or else
the first all-Japanese field; the reading field is the first kana-only
field after it, or else the first one before it. `truncate_example`
shortens values longer than 30 characters for display.

## Seeking in mpv

Start mpv with its IPC server on `default_mpv_endpoint()` (for example
`mpv --input-ipc-server=/tmp/mpv-socket video.mkv`), then:

```python
from yomine.mpv import MpvManager

player = MpvManager()
player.update()
if player.is_connected():
    player.seek_timestamp(83.5, "00:01:23")
print(player.confirmed_timestamps())
```

`update()` re-checks the socket at most once a second and drops requests
left unanswered for more than five seconds. `seek_timestamp` raises
`MpvError` when mpv is not connected or cannot be written to.

## Colours

```python
from yomine.theme import Theme, Color, blend_colors

palette = Theme.dracula().palette(True)
mixed = blend_colors(Color.from_hex("#559449ff"), palette.red, 0.5)
```

## What the package does not do

This package has no window or command to run; it provides the data and
logic a front end would use. It does not tokenize sentences, extract or
rank terms, load frequency dictionaries, keep a list of recently opened
files, run a WebSocket server, or talk to Anki: the settings and field
guessing work on data you supply.