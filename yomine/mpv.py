"""Seeking an mpv player through its JSON IPC socket."""

from __future__ import annotations

import enum
import itertools
import json
import logging
import math
import os
import socket
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

MPV_SOCKET_TIMEOUT_MS = 800
MPV_REQUEST_TIMEOUT_SECS = 5
MPV_DETECTION_INTERVAL_MS = 1000
MPV_BUFFER_SIZE = 2048

_WINDOWS = os.name == "nt"

_log = logging.getLogger(__name__)


class MpvError(Exception):
    """Raised when a command cannot be sent to mpv."""


class ConnectionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


def default_mpv_endpoint() -> str:
    """Return the IPC endpoint mpv is expected to listen on."""
    if _WINDOWS:
        return r"\\.\pipe\tmp\mpv-socket"
    return "/tmp/mpv-socket"


@dataclass(frozen=True)
class MpvResponse:
    error: str
    data: Any = None
    request_id: int | None = None

    @classmethod
    def from_json(cls, line: str) -> MpvResponse:
        """Parse one reply line; raise ValueError if it is not a valid reply."""
        obj = json.loads(line)
        if not isinstance(obj, dict) or not isinstance(obj.get("error"), str):
            raise ValueError(f"Not an mpv reply: {line!r}")
        request_id = obj.get("request_id")
        if request_id is not None and (
            isinstance(request_id, bool)
            or not isinstance(request_id, int)
            or not 0 <= request_id < 2**32
        ):
            raise ValueError(f"Invalid request_id: {request_id!r}")
        return cls(error=obj["error"], data=obj.get("data"), request_id=request_id)


@dataclass(frozen=True)
class PendingRequest:
    request_id: int
    timestamp: float
    timestamp_str: str
    sent_time: float


def create_seek_command(seconds: float, request_id: int) -> dict[str, Any]:
    """Build the mpv command that sets the playback position."""
    if not math.isfinite(seconds):
        raise MpvError("Invalid timestamp value for MPV")
    return {
        "command": ["set_property", "time-pos", float(seconds)],
        "request_id": request_id,
    }


def _write(conn: Any, data: bytes) -> None:
    if isinstance(conn, socket.socket):
        conn.sendall(data)
    else:
        conn.write(data)


def _read(conn: Any, size: int) -> bytes:
    if isinstance(conn, socket.socket):
        return conn.recv(size)
    return conn.read(size) or b""


class MpvManager:
    """Tracks whether mpv is reachable and which seeks it confirmed."""

    def __init__(self, endpoint: str | None = None) -> None:
        self.endpoint = endpoint or default_mpv_endpoint()
        self._lock = threading.Lock()
        self._state = ConnectionState.DISCONNECTED
        self._last_check: float | None = None
        self._confirmed: list[float] = []
        self._pending: list[PendingRequest] = []
        self._request_ids = itertools.count(1)

    def is_connected(self) -> bool:
        with self._lock:
            return self._state is ConnectionState.CONNECTED

    def confirmed_timestamps(self) -> list[float]:
        with self._lock:
            return list(self._confirmed)

    def update(self) -> None:
        """Re-detect mpv at most once per detection interval."""
        now = time.monotonic()
        with self._lock:
            if (
                self._last_check is not None
                and now - self._last_check < MPV_DETECTION_INTERVAL_MS / 1000
            ):
                return
            self._last_check = now

        detected = self._detect()
        with self._lock:
            self._state = (
                ConnectionState.CONNECTED if detected else ConnectionState.DISCONNECTED
            )
            self._cleanup_old_requests(now)

    def seek_timestamp(self, seconds: float, timestamp_str: str) -> None:
        """Ask mpv to seek; confirmation is recorded when the reply arrives."""
        if not self.is_connected():
            raise MpvError("MPV is not connected")

        with self._lock:
            request_id = next(self._request_ids)
        command = create_seek_command(seconds, request_id)
        payload = (json.dumps(command) + "\n").encode("utf-8")

        with self._connect() as conn:
            try:
                _write(conn, payload)
            except OSError as exc:
                raise MpvError(f"Failed to write to MPV IPC: {exc}") from exc

            with self._lock:
                self._pending.append(
                    PendingRequest(request_id, seconds, timestamp_str, time.monotonic())
                )
            _log.info("Sent seek command with request_id: %s (pending confirmation)", request_id)

            try:
                reply = _read(conn, MPV_BUFFER_SIZE)
            except OSError as exc:
                _log.warning("Failed to read response for request_id %s: %s", request_id, exc)
                return

        for line in reply.decode("utf-8", errors="replace").splitlines():
            try:
                response = MpvResponse.from_json(line)
            except ValueError:
                continue
            if response.request_id is not None:
                self.handle_response(response)

    def handle_response(self, response: MpvResponse) -> None:
        """Resolve the pending request that ``response`` answers, if any."""
        if response.request_id is None:
            return
        with self._lock:
            request = next(
                (req for req in self._pending if req.request_id == response.request_id), None
            )
            if request is None:
                return
            self._pending.remove(request)
            if response.error == "success":
                self._confirmed.append(request.timestamp)
                _log.info(
                    "Confirmed seek for timestamp: %s (request_id: %s)",
                    request.timestamp_str,
                    response.request_id,
                )
            else:
                _log.warning(
                    "Seek failed for timestamp: %s (request_id: %s, error: %s)",
                    request.timestamp_str,
                    response.request_id,
                    response.error,
                )

    def _cleanup_old_requests(self, now: float) -> None:
        kept = []
        for req in self._pending:
            if now - req.sent_time > MPV_REQUEST_TIMEOUT_SECS:
                _log.warning(
                    "Request timeout for timestamp: %s (request_id: %s)",
                    req.timestamp_str,
                    req.request_id,
                )
            else:
                kept.append(req)
        self._pending = kept

    @contextmanager
    def _connect(self) -> Iterator[Any]:
        conn: Any
        if _WINDOWS:
            try:
                conn = open(self.endpoint, "r+b", buffering=0)
            except OSError as exc:
                raise MpvError(f"Failed to connect to MPV pipe {self.endpoint}: {exc}") from exc
        else:
            conn = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            conn.settimeout(MPV_SOCKET_TIMEOUT_MS / 1000)
            try:
                conn.connect(self.endpoint)
            except OSError as exc:
                conn.close()
                raise MpvError(f"Failed to connect to MPV IPC {self.endpoint}: {exc}") from exc
        with conn:
            yield conn

    def _detect(self) -> bool:
        if not _WINDOWS and not os.path.exists(self.endpoint):
            return False
        try:
            with self._connect():
                return True
        except MpvError:
            return False