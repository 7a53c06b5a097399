import json

from typer.testing import CliRunner

from predict_age.main import app

runner = CliRunner()


def test_predict_command():
    result = runner.invoke(app, ["predict", "lol omg so bored", "--output", "full"])
    assert result.exit_code == 0
    body = json.loads(result.stdout)
    assert body["kind"] == "full"
    assert body["word_count"] == 4


def test_predict_command_from_file(tmp_path):
    path = tmp_path / "text.txt"
    path.write_text("My kids love the garden.", encoding="utf-8")
    result = runner.invoke(app, ["predict", "--file", str(path), "--n-grams", "0"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["kind"] == "lex"


def test_predict_command_without_words():
    result = runner.invoke(app, ["predict", "   "])
    assert result.exit_code == 1
    assert "null" in result.stdout


def test_predict_command_rejects_bad_sizes():
    result = runner.invoke(app, ["predict", "hello", "--n-grams", "two"])
    assert result.exit_code != 0
