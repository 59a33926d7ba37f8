import json
import math
import os
import shutil
import socket
import tempfile
import threading

import pytest

from yomine.mpv import (
    MpvError,
    MpvManager,
    MpvResponse,
    create_seek_command,
    default_mpv_endpoint,
)


class _FakeMpv:
    def __init__(self, path, error="success"):
        self.path = path
        self.error = error
        self.received = []
        self._stop = threading.Event()
        self.sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.sock.bind(path)
        self.sock.listen(5)
        self.sock.settimeout(0.1)
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            with conn:
                conn.settimeout(1.0)
                try:
                    data = conn.recv(4096)
                except OSError:
                    continue
                for line in data.decode().splitlines():
                    command = json.loads(line)
                    self.received.append(command)
                    reply = {"error": self.error, "data": None, "request_id": command["request_id"]}
                    conn.sendall((json.dumps(reply) + "\n").encode())

    def stop(self):
        self._stop.set()
        self.thread.join(timeout=2)
        self.sock.close()


@pytest.fixture
def socket_dir():
    path = tempfile.mkdtemp(prefix="ympv")
    yield path
    shutil.rmtree(path, ignore_errors=True)


def test_default_endpoint():
    expected = r"\\.\pipe\tmp\mpv-socket" if os.name == "nt" else "/tmp/mpv-socket"
    assert default_mpv_endpoint() == expected


def test_create_seek_command():
    command = create_seek_command(12.5, 3)
    assert command == {"command": ["set_property", "time-pos", 12.5], "request_id": 3}


def test_create_seek_command_rejects_non_finite():
    with pytest.raises(MpvError):
        create_seek_command(math.nan, 1)
    with pytest.raises(MpvError):
        create_seek_command(math.inf, 1)


def test_response_from_json():
    response = MpvResponse.from_json('{"error": "success", "data": null, "request_id": 4}')
    assert response == MpvResponse(error="success", data=None, request_id=4)
    assert MpvResponse.from_json('{"error": "success"}').request_id is None


def test_response_from_json_rejects_invalid():
    with pytest.raises(ValueError):
        MpvResponse.from_json("not json")
    with pytest.raises(ValueError):
        MpvResponse.from_json('{"data": 1}')
    with pytest.raises(ValueError):
        MpvResponse.from_json('{"error": "success", "request_id": "x"}')


def test_seek_when_disconnected_raises(socket_dir):
    manager = MpvManager(os.path.join(socket_dir, "none"))
    with pytest.raises(MpvError, match="MPV is not connected"):
        manager.seek_timestamp(1.0, "0:00:01")


def test_update_without_socket_is_disconnected(socket_dir):
    manager = MpvManager(os.path.join(socket_dir, "none"))
    manager.update()
    assert manager.is_connected() is False


def test_seek_is_confirmed(socket_dir):
    server = _FakeMpv(os.path.join(socket_dir, "s"))
    try:
        manager = MpvManager(server.path)
        manager.update()
        assert manager.is_connected()
        manager.seek_timestamp(12.5, "0:00:12")
        assert manager.confirmed_timestamps() == [12.5]
        assert server.received == [create_seek_command(12.5, 1)]
    finally:
        server.stop()


def test_failed_seek_is_not_confirmed(socket_dir):
    server = _FakeMpv(os.path.join(socket_dir, "s"), error="property unavailable")
    try:
        manager = MpvManager(server.path)
        manager.update()
        manager.seek_timestamp(3.0, "0:00:03")
        assert manager.confirmed_timestamps() == []
        assert len(server.received) == 1
    finally:
        server.stop()


def test_request_ids_increase(socket_dir):
    server = _FakeMpv(os.path.join(socket_dir, "s"))
    try:
        manager = MpvManager(server.path)
        manager.update()
        manager.seek_timestamp(1.0, "a")
        manager.seek_timestamp(2.0, "b")
        assert [c["request_id"] for c in server.received] == [1, 2]
        assert manager.confirmed_timestamps() == [1.0, 2.0]
    finally:
        server.stop()


def test_update_is_throttled(socket_dir):
    server = _FakeMpv(os.path.join(socket_dir, "s"))
    manager = MpvManager(server.path)
    manager.update()
    server.stop()
    os.remove(server.path)
    manager.update()
    assert manager.is_connected() is True


def test_unknown_response_is_ignored(socket_dir):
    manager = MpvManager(os.path.join(socket_dir, "none"))
    manager.handle_response(MpvResponse(error="success", data=None, request_id=99))
    assert manager.confirmed_timestamps() == []