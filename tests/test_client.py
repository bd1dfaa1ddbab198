"""Tests for the high-level client."""

from pathlib import Path

from mayasend import commands
from mayasend.client import MayaClient
from mayasend.display.reader import TextContentReader
from mayasend.types import ErrorKind, Payload


class TestRun:
    def test_opens_log_then_runs(self, client, session, transport, display):
        result = client.run(Payload.literal("polyCube;"))

        assert result.ok
        assert result.sent == 5
        assert transport.calls[0] == [commands.redirect_output(session.log_path)]
        assert transport.calls[1][0] == commands.ECHO_ON
        assert display.refreshed == [session.log_path]

    def test_reuses_active_log(self, client, transport):
        client.run(Payload.literal("polyCube;"))
        client.run(Payload.literal("polySphere;"))

        redirects = [c for c in transport.commands if c.startswith("cmdFileOutput -o")]
        assert len(redirects) == 1

    def test_runs_without_log_when_disabled(self, client, config, transport, display):
        config.log.show = False

        result = client.run(Payload.literal("polyCube;"))

        assert result.ok
        assert len(transport.calls) == 1
        assert display.refreshed == []

    def test_range_of_reader(self, client, transport):
        captured = []

        def capture(sent):
            if commands.ECHO_ON in sent:
                path = sent[1][len('source "') : -len('";')]
                captured.append(Path(path).read_text())

        transport.on_send = capture
        reader = TextContentReader("a;\nb;\nc;\n")

        client.run(Payload.lines(2, 3), "mel", reader)

        assert captured == ["b;\nc;\n"]

    def test_unreachable_port(self, client, session, transport, notifier):
        transport.refuse = True

        result = client.run(Payload.literal("polyCube;"))

        assert not result.ok
        assert result.error.kind == ErrorKind.CONNECT
        assert notifier.errors == ["refused"]
        # Only the unclaimed log file was created; no script was built
        assert [p.suffix for p in session.artifacts.paths] == [".log"]

    def test_partial_send_reported(self, client, transport, notifier, display):
        client.reset_log()
        transport.fail_at = 2

        result = client.run(Payload.literal("polyCube;"))

        assert result.sent == 2
        assert result.partial
        assert notifier.errors == ["broken pipe"]
        assert display.refreshed == []

    def test_unsupported_language(self, client, transport, notifier):
        result = client.run(Payload.literal("puts 1"), "ruby")

        assert result.error.kind == ErrorKind.CONFIG
        assert notifier.errors == ["Unsupported filetype: ruby"]
        assert all(len(call) == 1 for call in transport.calls)

    def test_target_read_fresh_each_send(self, client, config, transport):
        client.run(Payload.literal("a;"))
        config.port.port = 9999
        client.run(Payload.literal("b;"))

        assert transport.targets[0].port == 7001
        assert transport.targets[-1].port == 9999

    def test_waits_before_refresh(self, client, config, monkeypatch):
        config.log.refresh_wait = "250ms"
        sleeps = []
        monkeypatch.setattr("mayasend.client.time.sleep", sleeps.append)

        client.run(Payload.literal("a;"))

        assert sleeps == [0.25]


class TestClose:
    def test_stops_log_and_removes_files(self, config, display, notifier, transport, session):
        client = MayaClient(config, display, notifier, transport=transport, session=session)
        client.run(Payload.literal("polyCube;"))
        created = list(session.artifacts.paths)

        client.close()

        assert transport.commands[-1] == commands.CLOSE_ALL_OUTPUTS
        assert not session.log_active
        assert created and not any(p.exists() for p in created)

    def test_close_runs_once(self, config, display, notifier, transport, session):
        client = MayaClient(config, display, notifier, transport=transport, session=session)
        client.run(Payload.literal("polyCube;"))

        client.close()
        client.close()

        assert transport.commands.count(commands.CLOSE_ALL_OUTPUTS) == 1

    def test_context_manager(self, config, display, notifier, transport, session):
        with MayaClient(config, display, notifier, transport=transport, session=session) as c:
            c.run(Payload.literal("polyCube;"))
            assert session.log_active

        assert not session.log_active
        assert session.artifacts.paths == []

    def test_failed_close_reported(self, config, display, notifier, transport, session):
        client = MayaClient(config, display, notifier, transport=transport, session=session)
        client.run(Payload.literal("polyCube;"))
        transport.refuse = True

        client.close()

        assert session.log_active
        assert any("still active" in e for e in notifier.errors)
        assert session.artifacts.paths == []

    def test_reset_log_replaces_log(self, client, session, transport):
        client.reset_log()
        first = session.log_path

        assert client.reset_log()

        assert session.log_path != first
        assert transport.commands[-2:] == [
            commands.CLOSE_ALL_OUTPUTS,
            commands.redirect_output(session.log_path),
        ]
