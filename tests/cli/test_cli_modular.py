from newsnorm.cli import cli_modular


def _no_logging(level):
    return None


def test_main_without_command_lists_commands(capsys):
    result = cli_modular.main([], setup_logging_func=_no_logging)

    assert result == 1
    err = capsys.readouterr().err
    assert "Available commands" in err
    assert "extract-url" in err
    assert "crawl-links" in err


def test_unknown_command(capsys):
    result = cli_modular.main(["bogus"], setup_logging_func=_no_logging)

    assert result == 1
    assert "Unknown command: bogus" in capsys.readouterr().err


def test_handler_override_short_circuits_loading(monkeypatch):
    def fail_loader(command):
        raise AssertionError("command modules must not be imported")

    monkeypatch.setattr(cli_modular, "_load_command_parser", fail_loader)

    result = cli_modular.main(
        ["crawl-links", "https://vnexpress.net/"],
        setup_logging_func=_no_logging,
        handler_overrides={"crawl-links": lambda args: 7},
    )

    assert result == 7


def test_routes_to_loaded_handler(monkeypatch):
    calls = {}

    def add_parser(subparsers):
        parser = subparsers.add_parser("extract-url")
        parser.add_argument("url")
        return parser

    def handler(args):
        calls["url"] = args.url
        return 0

    monkeypatch.setattr(
        cli_modular,
        "_load_command_parser",
        lambda command: (add_parser, handler) if command == "extract-url" else None,
    )

    result = cli_modular.main(
        ["extract-url", "https://vnexpress.net/x.html"],
        setup_logging_func=_no_logging,
    )

    assert result == 0
    assert calls["url"] == "https://vnexpress.net/x.html"


def test_log_level_is_passed_to_setup():
    levels = []
    cli_modular.main(["--log-level", "DEBUG"], setup_logging_func=levels.append)
    assert levels == ["DEBUG"]


def test_every_registered_command_loads():
    for command in cli_modular.COMMAND_MODULES:
        loaded = cli_modular._load_command_parser(command)
        assert loaded is not None, command


def test_log_level_defaults_to_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    levels = []

    cli_modular.main([], setup_logging_func=levels.append)
    cli_modular.main(["--log-level", "DEBUG"], setup_logging_func=levels.append)

    assert levels == ["WARNING", "DEBUG"]
