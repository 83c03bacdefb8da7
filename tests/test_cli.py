import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from postman_api_gen.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
COLLECTION = FIXTURES / "shop.collection.json"


def _invoke(*args, input=None):
    return CliRunner().invoke(main, ["generate", *args], input=input)


class TestCliGenerateFromFile:
    def test_generate_with_outdir(self, tmp_path):
        outdir = tmp_path / "api"
        result = _invoke("--file", str(COLLECTION), "--outdir", str(outdir), "--no-format")

        assert result.exit_code == 0, result.output
        assert (outdir / "services" / "index.js").exists()
        assert (outdir / "ApiManager.js").exists()
        assert "Done!" in result.output

    def test_outdir_equals_syntax(self, tmp_path):
        outdir = tmp_path / "api"
        result = _invoke("--file", str(COLLECTION), f"--outdir={outdir}", "--no-format")

        assert result.exit_code == 0, result.output
        assert (outdir / "services" / "users" / "index.js").exists()

    def test_destination_prompt_default(self, tmp_path):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["generate", "--file", str(COLLECTION), "--no-format"], input="\n")

            assert result.exit_code == 0, result.output
            assert Path("src/api/services/index.js").exists()

    def test_config_file_destination_skips_prompt(self, tmp_path):
        config_file = tmp_path / "gen.yaml"
        config_file.write_text(f"destination: {tmp_path / 'web'}\nrun_formatter: false\n", encoding="utf-8")

        result = _invoke("--file", str(COLLECTION), "--config", str(config_file))

        assert result.exit_code == 0, result.output
        assert (tmp_path / "web" / "services" / "index.js").exists()
        assert "destination directory" not in result.output

    @patch("postman_api_gen.cli.format_output")
    def test_runs_formatter(self, mock_format, tmp_path):
        result = _invoke("--file", str(COLLECTION), "--outdir", str(tmp_path / "api"))

        assert result.exit_code == 0, result.output
        mock_format.assert_called_once()
        assert "Formatting..." in result.output


class TestCliGenerateFromUrl:
    @patch("postman_api_gen.cli.fetch_collection")
    def test_fetches_gateway_path(self, mock_fetch, tmp_path):
        mock_fetch.return_value = json.loads(COLLECTION.read_text(encoding="utf-8"))

        result = _invoke(
            "https://documenter.getpostman.com/view/42/shop",
            "--outdir", str(tmp_path / "api"),
            "--no-format",
        )

        assert result.exit_code == 0, result.output
        path, host = mock_fetch.call_args[0]
        assert path.startswith("/api/collections/42/shop")
        assert host == "documenter.gw.postman.com"
        assert "Fetching data from server..." in result.output

    @patch("postman_api_gen.cli.fetch_collection")
    def test_prompts_for_url(self, mock_fetch, tmp_path):
        mock_fetch.return_value = {"item": []}

        result = _invoke("--outdir", str(tmp_path / "api"), "--no-format",
                         input="https://documenter.getpostman.com/view/1/abc\n")

        assert result.exit_code == 0, result.output
        mock_fetch.assert_called_once()

    @patch("postman_api_gen.cli.fetch_collection")
    def test_incorrect_url(self, mock_fetch, tmp_path):
        result = _invoke("not-a-url", "--outdir", str(tmp_path / "api"), "--no-format")

        assert result.exit_code == 2
        assert "Incorrect URL" in result.output
        mock_fetch.assert_not_called()
        assert not (tmp_path / "api").exists()


class TestCliOverwrite:
    def test_declined(self, tmp_path):
        outdir = tmp_path / "api"
        outdir.mkdir()
        stale = outdir / "stale.js"
        stale.write_text("old", encoding="utf-8")

        result = _invoke("--file", str(COLLECTION), "--outdir", str(outdir), "--no-format", input="n\n")

        assert result.exit_code == 3
        assert "Canceled" in result.output
        assert stale.exists()
        assert not (outdir / "services").exists()

    def test_ambiguous_then_yes(self, tmp_path):
        outdir = tmp_path / "api"
        outdir.mkdir()
        (outdir / "stale.js").write_text("old", encoding="utf-8")

        result = _invoke("--file", str(COLLECTION), "--outdir", str(outdir), "--no-format", input="maybe\ny\n")

        assert result.exit_code == 0, result.output
        assert result.output.count("will be removed") == 2
        assert not (outdir / "stale.js").exists()

    def test_yes_flag(self, tmp_path):
        outdir = tmp_path / "api"
        outdir.mkdir()

        result = _invoke("--file", str(COLLECTION), "--outdir", str(outdir), "--no-format", "--yes")

        assert result.exit_code == 0, result.output
        assert "will be removed" not in result.output


class TestCliErrors:
    @patch("postman_api_gen.cli.generate_client")
    def test_storage_error(self, mock_generate, tmp_path):
        mock_generate.side_effect = PermissionError("Permission denied: 'api'")

        result = _invoke("--file", str(COLLECTION), "--outdir", str(tmp_path / "api"), "--no-format")

        assert result.exit_code == 1
        assert "Permission denied" in result.output

    def test_invalid_collection_file(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json", encoding="utf-8")

        result = _invoke("--file", str(bad), "--outdir", str(tmp_path / "api"), "--no-format")

        assert result.exit_code == 5
        assert not (tmp_path / "api").exists()
