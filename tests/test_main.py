"""
Tests for the command-line entry point.
"""

from main import main


def test_reports_config_and_excerpts(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("SITE_CONFIG", raising=False)
    a = tmp_path / "a.html"
    a.write_text("<h1>A</h1><p>Alpha intro.</p>", encoding="utf-8")
    b = tmp_path / "b.html"
    b.write_text("<div>nothing</div>", encoding="utf-8")

    assert main([str(a), str(b)]) == 0
    out = capsys.readouterr().out
    assert "Alpha intro." in out
    assert "(no excerpt)" in out
    assert ">> Excerpts found: 1 / 2" in out
    assert "Home Automation, Projects, Guides" in out


def test_env_config_path(tmp_path, capsys, monkeypatch):
    cfg = tmp_path / "site.yaml"
    cfg.write_text("dir:\n  output: public\n", encoding="utf-8")
    monkeypatch.setenv("SITE_CONFIG", str(cfg))
    assert main([]) == 0
    assert "'output': 'public'" in capsys.readouterr().out


def test_invalid_config_exit_code(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("excerpt:\n  separators: []\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 2


def test_broken_yaml_exit_code(tmp_path):
    cfg = tmp_path / "broken.yaml"
    cfg.write_text("dir: [src\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 2


def test_missing_config_exit_code(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 2


def test_scalar_separators_exit_code(tmp_path):
    cfg = tmp_path / "scalar.yaml"
    cfg.write_text("excerpt:\n  separators: 5\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 2


def test_unreadable_html_does_not_stop_listing(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("SITE_CONFIG", raising=False)
    bad = tmp_path / "latin1.html"
    bad.write_bytes(b"<p>caf\xe9</p>")
    good = tmp_path / "good.html"
    good.write_text("<p>Still here.</p>", encoding="utf-8")

    assert main([str(tmp_path / "gone.html"), str(bad), str(good)]) == 0
    out = capsys.readouterr().out
    assert out.count("(unreadable)") == 2
    assert "Still here." in out
    assert ">> Excerpts found: 1 / 3" in out
