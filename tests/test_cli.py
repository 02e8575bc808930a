"""Tests for the command line interface."""

from __future__ import annotations

from click.testing import CliRunner

from discord_markdown.cli.app import cli


def _invoke(*args: str, input: str | None = None, env: dict | None = None):
    runner = CliRunner()
    return runner.invoke(cli, list(args), input=input, env=env)


class TestRender:
    def test_stdin_to_stdout(self):
        result = _invoke("render", input="**hi** <b>")
        assert result.exit_code == 0, result.output
        assert result.output == "<strong>hi</strong> &lt;b&gt;\n"

    def test_file_argument(self, tmp_path):
        source = tmp_path / "message.md"
        source.write_text("> quoted", encoding="utf-8")
        result = _invoke("render", str(source))
        assert result.exit_code == 0, result.output
        assert result.output == "<blockquote>quoted</blockquote>\n"

    def test_output_file(self, tmp_path):
        out = tmp_path / "out.html"
        result = _invoke("render", "-o", str(out), input="~~x~~")
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == "<s>x</s>\n"

    def test_md_hyperlinks_flag(self):
        text = "[a](https://a.com)"
        assert "<a href" not in _invoke("render", input=text).output
        result = _invoke("render", "--md-hyperlinks", input=text)
        assert '<a href="https://a.com" target="_blank">a</a>' in result.output

    def test_resolvers_option(self, resolver_config_file):
        result = _invoke(
            "render", "--resolvers", str(resolver_config_file), input="<@&2001>"
        )
        assert result.exit_code == 0, result.output
        assert "@Moderator" in result.output
        assert "#ff5733" in result.output

    def test_resolvers_from_environment(self, resolver_config_file):
        result = _invoke(
            "render",
            input="<@1001>",
            env={"DISCORD_MARKDOWN_RESOLVERS": str(resolver_config_file)},
        )
        assert result.exit_code == 0, result.output
        assert "@Test Nick" in result.output

    def test_broken_resolvers_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[", encoding="utf-8")
        result = _invoke("render", "--resolvers", str(path), input="x")
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_standalone_document(self):
        result = _invoke(
            "render", "--standalone", "--title", "<Chat>", input="||secret||"
        )
        assert result.exit_code == 0, result.output
        assert result.output.startswith("<!DOCTYPE html>")
        assert "<title>&lt;Chat&gt;</title>" in result.output
        assert '<span class="spoiler">secret</span>' in result.output
        assert ".role span" in result.output


class TestTree:
    def test_prints_tree(self):
        result = _invoke("tree", input="**a** <@1>")
        assert result.exit_code == 0, result.output
        assert "Bold" in result.output
        assert "Text" in result.output
        assert "UserMention" in result.output
        assert "id='1'" in result.output


class TestVersion:
    def test_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        assert "render" in result.output
        assert "tree" in result.output
