import logging

from fantasy_story.cli import main
from fantasy_story.logging_config import LOG_LEVEL_ENV, configure_logging

SCRIPT = """5
Create character fighter Aria 100
Create character fighter Dummy 20
Create item weapon Aria Sword 10
Attack Aria Dummy Sword
Attack Aria Nobody Sword
"""


def test_cli_writes_transcript_file(tmp_path):
    script = tmp_path / "input.txt"
    script.write_text(SCRIPT, encoding="utf-8")
    out = tmp_path / "output.txt"

    assert main([str(script), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8").splitlines() == [
        "A new fighter came to town, Aria.",
        "A new fighter came to town, Dummy.",
        "Aria just obtained a new weapon called 'Sword'.",
        "Aria attacks Dummy with their Sword and they lose 10 health points.",
        "Error caught",
    ]


def test_cli_prints_to_stdout(tmp_path, capsys):
    script = tmp_path / "input.txt"
    script.write_text("1\nDialogue Narrator 2 The end\n", encoding="utf-8")
    assert main([str(script)]) == 0
    assert capsys.readouterr().out == "Narrator: The end\n"


def test_cli_reports_unreadable_inputs(tmp_path):
    assert main([str(tmp_path / "missing.txt")]) == 2

    script = tmp_path / "input.txt"
    script.write_text("not a number\n", encoding="utf-8")
    assert main([str(script)]) == 2

    bad_config = tmp_path / "bad.yaml"
    bad_config.write_text("spell_power: lots\n", encoding="utf-8")
    assert main([str(script), "--config", str(bad_config)]) == 2


def test_cli_reports_bad_config_values(tmp_path):
    script = tmp_path / "input.txt"
    script.write_text("1\nShow characters\n", encoding="utf-8")
    for name, body in [
        ("null_size.yaml", "capacities:\n  fighter:\n    weapons: null\n"),
        ("null_power.yaml", "spell_power: null\n"),
        ("broken.yaml", "spell_power: [1\n"),
    ]:
        config = tmp_path / name
        config.write_text(body, encoding="utf-8")
        assert main([str(script), "--config", str(config)]) == 2


def test_log_level_env_overrides_verbosity(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert configure_logging(0) == logging.DEBUG
    monkeypatch.delenv(LOG_LEVEL_ENV)
    assert configure_logging(1) == logging.INFO
    assert configure_logging(0) == logging.WARNING
