"""Tests for the command-line interface."""

import json
from pathlib import Path

import pandas as pd
import pytest

from varnika.cli import main, parse_args
from varnika.stores import LearnedWordStore

SCHEME = Path(__file__).resolve().parent.parent / "schemes" / "ml.yaml"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("VARNIKA_VST_DIR", raising=False)


@pytest.fixture
def files(tmp_path, vst_path):
    """Arguments pointing the CLI at the test symbol table."""
    return ["--vst", str(vst_path), "--learnings", str(tmp_path / "cli.learnings")]


class TestParseArgs:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_common_options(self):
        args = parse_args(["transliterate", "--lang", "hi", "-v", "namaste"])

        assert args.command == "transliterate"
        assert args.lang == "hi"
        assert args.verbose is True
        assert args.words == ["namaste"]


class TestMain:
    """Tests for main()."""

    def test_transliterate_json(self, files, capsys):
        assert main(["transliterate", *files, "--json", "mala"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["mala"]["candidates"][0]["text"] == "മല"

    def test_transliterate_text(self, files, capsys):
        assert main(["transliterate", *files, "malam"]) == 0

        out = capsys.readouterr().out
        assert "candidates: മലമ് മലം മളമ് മളം" in out

    def test_learn_then_transliterate(self, files, tmp_path, capsys):
        assert main(["learn", *files, "മള"]) == 0
        assert main(["transliterate", *files, "--json", "mala"]) == 0

        output = json.loads(capsys.readouterr().out.split("\n", 1)[1])
        assert output["mala"]["exact_match"][0]["text"] == "മള"

        with LearnedWordStore(tmp_path / "cli.learnings") as store:
            assert store.get("മള").weight == 1

    def test_train(self, files, capsys):
        assert main(["train", *files, "malayalam", "മലയാളം"]) == 0
        capsys.readouterr()

        assert main(["transliterate", *files, "--json", "mala"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["mala"]["candidates"][0]["text"] == "മലയാളം"

    def test_batch(self, files, tmp_path):
        input_path = tmp_path / "words.txt"
        input_path.write_text("mala\nmalam\n", encoding="utf-8")
        output_path = tmp_path / "words.csv"

        assert main(["batch", *files, "--input", str(input_path), "--output", str(output_path)]) == 0

        assert pd.read_csv(output_path)["top"].tolist() == ["മല", "മലമ്"]

    def test_build_vst_then_use_by_language(self, tmp_path, monkeypatch, capsys):
        output = tmp_path / "vst" / "ml.vst"
        assert main(["build-vst", "--scheme", str(SCHEME), "--output", str(output)]) == 0

        monkeypatch.setenv("VARNIKA_VST_DIR", str(output.parent))
        assert main(["transliterate", "--lang", "ml", "--json", "malayaalam"]) == 0

        out = capsys.readouterr().out
        result = json.loads(out[out.index("{"):])
        assert result["malayaalam"]["greedy_exact"][0]["text"] == "മലയാലമ്"

    def test_missing_language(self, capsys):
        assert main(["transliterate", "--lang", "zz", "mala"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, capsys):
        assert main(["transliterate", "--config", str(tmp_path / "none.yaml"), "mala"]) == 1

    def test_missing_scheme(self, tmp_path):
        assert main(["build-vst", "--scheme", str(tmp_path / "none.yaml"), "--output", str(tmp_path / "x.vst")]) == 1
