"""Application settings and the editable drafts behind the settings dialogs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_WEBSOCKET_PORT = 8766
MIN_PORT = 1024
MAX_PORT = 65535


def is_valid_port(port: int) -> bool:
    """Tell whether ``port`` may be used for the WebSocket server."""
    return MIN_PORT <= port <= MAX_PORT


@dataclass(frozen=True)
class FieldMapping:
    """Which note fields of an Anki model hold the term and its reading."""

    term_field: str
    reading_field: str


@dataclass
class WebSocketSettings:
    port: int = DEFAULT_WEBSOCKET_PORT


def _parse_port(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_PORT:
        raise ValueError(f"Invalid port: {value!r}")
    return value


@dataclass
class SettingsData:
    """Everything that is stored in ``settings.json``."""

    anki_model_mappings: dict[str, FieldMapping] = field(default_factory=dict)
    websocket_settings: WebSocketSettings = field(default_factory=WebSocketSettings)

    def _copy(self) -> SettingsData:
        return SettingsData(
            anki_model_mappings=dict(self.anki_model_mappings),
            websocket_settings=replace(self.websocket_settings),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "anki_model_mappings": {
                name: {"term_field": m.term_field, "reading_field": m.reading_field}
                for name, m in self.anki_model_mappings.items()
            },
            "websocket_settings": {"port": self.websocket_settings.port},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SettingsData:
        """Build settings from parsed JSON; the WebSocket block is optional."""
        mappings = {
            str(name): FieldMapping(
                term_field=str(entry["term_field"]),
                reading_field=str(entry["reading_field"]),
            )
            for name, entry in data["anki_model_mappings"].items()
        }
        ws = data.get("websocket_settings")
        websocket = (
            WebSocketSettings() if ws is None else WebSocketSettings(_parse_port(ws["port"]))
        )
        return cls(anki_model_mappings=mappings, websocket_settings=websocket)


@dataclass
class ModelMappingEditor:
    """The "add / edit model mapping" form."""

    model_name: str = ""
    term_field: str = ""
    reading_field: str = ""
    is_editing: bool = False
    original_model_name: str | None = None

    @classmethod
    def edit(cls, model_name: str, mapping: FieldMapping) -> ModelMappingEditor:
        """Start editing an existing mapping."""
        return cls(
            model_name=model_name,
            term_field=mapping.term_field,
            reading_field=mapping.reading_field,
            is_editing=True,
            original_model_name=model_name,
        )


@dataclass
class AnkiModelInfo:
    name: str
    fields: list[str] = field(default_factory=list)
    sample_note: dict[str, str] | None = None


@dataclass
class AnkiSettingsDraft:
    """Unsaved changes to the Anki model mappings."""

    settings: SettingsData = field(default_factory=SettingsData)
    temp_model_mappings: dict[str, FieldMapping] = field(default_factory=dict)
    original_settings: SettingsData = field(default_factory=SettingsData)

    def open(self, settings: SettingsData) -> None:
        """Start editing from ``settings``."""
        self.settings = settings._copy()
        self.temp_model_mappings = dict(settings.anki_model_mappings)
        self.original_settings = settings._copy()

    def is_dirty(self) -> bool:
        return self.temp_model_mappings != self.original_settings.anki_model_mappings

    def apply_editor(self, editor: ModelMappingEditor) -> bool:
        """Store the editor's mapping if it is complete.

        Returns True when the mapping was stored; the caller then starts a
        fresh editor. A renamed mapping replaces its old entry.
        """
        if not (editor.model_name and editor.term_field and editor.reading_field):
            return False
        original = editor.original_model_name
        if original is not None and original != editor.model_name:
            self.temp_model_mappings.pop(original, None)
        self.temp_model_mappings[editor.model_name] = FieldMapping(
            term_field=editor.term_field, reading_field=editor.reading_field
        )
        return True

    def remove_mapping(self, model_name: str) -> None:
        self.temp_model_mappings.pop(model_name, None)

    def save(self) -> SettingsData:
        """Commit the draft and return the settings to persist."""
        settings = self.settings._copy()
        settings.anki_model_mappings = dict(self.temp_model_mappings)
        self.original_settings = settings._copy()
        return settings

    def cancel(self) -> None:
        self.temp_model_mappings = dict(self.original_settings.anki_model_mappings)
        self.settings = self.original_settings._copy()

    def restore_default(self) -> None:
        self.temp_model_mappings.clear()
        self.settings = SettingsData()


@dataclass
class WebSocketSettingsDraft:
    """Unsaved changes to the WebSocket server settings."""

    settings: SettingsData = field(default_factory=SettingsData)
    temp_websocket_settings: WebSocketSettings = field(default_factory=WebSocketSettings)
    original_settings: SettingsData = field(default_factory=SettingsData)

    @property
    def port_input(self) -> str:
        return str(self.temp_websocket_settings.port)

    def open(self, settings: SettingsData) -> None:
        """Start editing from ``settings``."""
        self.settings = settings._copy()
        self.temp_websocket_settings = replace(settings.websocket_settings)
        self.original_settings = settings._copy()

    def is_dirty(self) -> bool:
        return self.temp_websocket_settings.port != self.original_settings.websocket_settings.port

    def saved_settings(self) -> SettingsData:
        """Commit the draft and return the settings with the new port.

        Raises ValueError if the port is outside the allowed range.
        """
        port = self.temp_websocket_settings.port
        if not is_valid_port(port):
            raise ValueError("Invalid port range. Please use ports 1024-65535.")
        settings = self.settings._copy()
        settings.websocket_settings.port = port
        self.original_settings = settings._copy()
        return settings

    def cancel(self) -> None:
        self.temp_websocket_settings = replace(self.original_settings.websocket_settings)
        self.settings = self.original_settings._copy()

    def restore_default(self) -> None:
        self.temp_websocket_settings = WebSocketSettings()