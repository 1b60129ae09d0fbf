from newsnorm.cli import cli_modular
from newsnorm.cli.commands import summarize, translate


class FakeGenerator:
    calls = []

    def __init__(self, *args, **kwargs):
        pass

    def summarize(self, text):
        FakeGenerator.calls.append(("summarize", text))
        return "Tóm tắt ngắn."

    def translate(self, text, source_language, target_language):
        FakeGenerator.calls.append(("translate", text, source_language, target_language))
        return "Short translation."


def _run(argv):
    return cli_modular.main(argv, setup_logging_func=lambda level: None)


def test_summarize_file(monkeypatch, capsys, tmp_path):
    FakeGenerator.calls = []
    monkeypatch.setattr(summarize, "GroqTextGenerator", FakeGenerator)
    body = tmp_path / "body.txt"
    body.write_text("Nội dung bài viết.", encoding="utf-8")

    result = _run(["summarize", "--file", str(body)])

    assert result == 0
    assert capsys.readouterr().out.strip() == "Tóm tắt ngắn."
    assert FakeGenerator.calls == [("summarize", "Nội dung bài viết.")]


def test_summarize_without_api_key_reports_error(capsys, tmp_path):
    body = tmp_path / "body.txt"
    body.write_text("text", encoding="utf-8")

    result = _run(["summarize", "--file", str(body)])

    assert result == 1
    assert "API key not configured" in capsys.readouterr().err


def test_summarize_missing_file(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(summarize, "GroqTextGenerator", FakeGenerator)

    result = _run(["summarize", "--file", str(tmp_path / "missing.txt")])

    assert result == 1
    assert "Error:" in capsys.readouterr().err


def test_translate_file(monkeypatch, capsys, tmp_path):
    FakeGenerator.calls = []
    monkeypatch.setattr(translate, "GroqTextGenerator", FakeGenerator)
    body = tmp_path / "body.txt"
    body.write_text("Xin chào.", encoding="utf-8")

    result = _run(
        ["translate", "--file", str(body), "--source", "vi", "--target", "en"]
    )

    assert result == 0
    assert capsys.readouterr().out.strip() == "Short translation."
    assert FakeGenerator.calls == [("translate", "Xin chào.", "vi", "en")]


def test_translate_rejects_same_language(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
    body = tmp_path / "body.txt"
    body.write_text("Xin chào.", encoding="utf-8")

    result = _run(
        ["translate", "--file", str(body), "--source", "vi", "--target", "vi"]
    )

    assert result == 1
    assert "Unsupported language pair" in capsys.readouterr().err
