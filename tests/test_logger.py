from prismaclient import logger


def test_enabled_follows_environment(monkeypatch):
    monkeypatch.setenv("PHOTON_GO_LOG", "info")
    assert logger.enabled() is True
    monkeypatch.delenv("PHOTON_GO_LOG")
    assert logger.enabled() is False


def test_debug_is_silent_when_disabled(monkeypatch, capsys):
    monkeypatch.delenv("PHOTON_GO_LOG", raising=False)
    logger.debug("hidden")
    assert capsys.readouterr().out == ""


def test_debug_writes_when_enabled(monkeypatch, capsys):
    monkeypatch.setenv("PHOTON_GO_LOG", "info")
    logger.debug("hello")
    out = capsys.readouterr().out
    assert out.startswith("debug: ")
    assert out.rstrip("\n").endswith(" hello")


def test_info_always_writes(monkeypatch, capsys):
    monkeypatch.delenv("PHOTON_GO_LOG", raising=False)
    logger.info("generate")
    out = capsys.readouterr().out
    assert out.startswith("info: ")
    assert out.rstrip("\n").endswith(" generate")


def test_single_trailing_newline(monkeypatch, capsys):
    monkeypatch.delenv("PHOTON_GO_LOG", raising=False)
    logger.info("line\n")
    out = capsys.readouterr().out
    assert out.count("\n") == 1