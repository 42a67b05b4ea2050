import logging
from uuid import UUID, uuid4

import pytest
import yaml

import lwg.cli as cli
from lwg.config.manager import Config
from lwg.games.store import GameStore


@pytest.fixture(autouse=True)
def _restore_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _run(config_home, *argv):
    return cli.main(["--config-home", str(config_home), *argv])


def test_create_parser_games_add():
    parser = cli.create_parser()
    runner = uuid4()
    args = parser.parse_args([
        "games", "add", "--name", "Doom", "--exe", "/bin/doom", "--runner-id", str(runner),
    ])

    assert args.command == "games"
    assert args.games_command == "add"
    assert args.name == "Doom"
    assert args.prefix == ""
    assert args.runner_id == runner


def test_create_parser_rejects_bad_uuid():
    parser = cli.create_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["games", "remove", "not-a-uuid"])


def test_init_creates_config(config_home, capsys):
    code = _run(config_home, "init")

    assert code == 0
    main_dir = config_home / "lwg"
    assert (main_dir / "config.yaml").is_file()
    assert (main_dir / "games").is_dir()
    assert (main_dir / "runners").is_dir()
    assert "Created" in capsys.readouterr().out


def test_init_leaves_existing_config_alone(config_home, capsys):
    _run(config_home, "init")
    config = Config.load(config_home / "lwg")
    config.preferences.runners.default_path = "/usr/bin/wine"
    config.save()

    code = _run(config_home, "init")

    assert code == 0
    assert "already exists" in capsys.readouterr().out
    assert Config.load(config_home / "lwg").preferences.runners.default_path == "/usr/bin/wine"


def test_init_with_bare_directory_fails(config_home, capsys):
    (config_home / "lwg").mkdir(parents=True)

    code = _run(config_home, "init")

    assert code == 1
    assert "does not exist" in capsys.readouterr().err


def test_commands_fail_without_config(config_home, capsys):
    code = _run(config_home, "games", "list")

    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_add_list_remove(config_home, capsys):
    _run(config_home, "init")
    capsys.readouterr()

    code = _run(
        config_home, "games", "add",
        "--name", "Doom", "--exe", "/games/doom.exe", "--prefix", "/pfx/doom",
    )
    assert code == 0
    game_id = UUID(capsys.readouterr().out.strip())

    store = GameStore.load(config_home / "lwg" / "games")
    assert store.get(game_id).prefix_path == "/pfx/doom"

    assert _run(config_home, "games", "list") == 0
    out = capsys.readouterr().out
    assert f"{game_id}  Doom" in out
    assert "/games/doom.exe" in out

    assert _run(config_home, "games", "remove", str(game_id)) == 0
    assert len(GameStore.load(config_home / "lwg" / "games")) == 0


def test_list_shows_default_runner(config_home, capsys):
    _run(config_home, "init")
    runner = uuid4()
    config = Config.load(config_home / "lwg")
    config.preferences.runners.default_friendly_name = "Wine"
    config.preferences.runners.default_path = "/usr/bin/wine"
    config.preferences.runners.default_id = runner
    config.save()
    _run(config_home, "games", "add", "--name", "Quake", "--exe", "/q.exe")
    capsys.readouterr()

    _run(config_home, "games", "list")

    assert f"runner:     {runner}" in capsys.readouterr().out


def test_remove_unknown_game(config_home, capsys):
    _run(config_home, "init")

    code = _run(config_home, "games", "remove", str(uuid4()))

    assert code == 1
    assert "No game with id" in capsys.readouterr().err


def test_config_show(config_home, capsys):
    _run(config_home, "init")
    capsys.readouterr()

    assert _run(config_home, "config", "show") == 0

    shown = yaml.safe_load(capsys.readouterr().out)
    assert shown["paths"]["games"] == str(config_home / "lwg" / "games")


def test_log_file_option(config_home, tmp_path):
    log_file = tmp_path / "logs" / "lwg.log"

    cli.main(["--config-home", str(config_home), "--log-file", str(log_file), "init"])

    assert "Scaffolded config directory" in log_file.read_text()
