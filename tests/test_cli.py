"""Tests for CLI structure and commands.

Commands run against a mocked EagleClient. The test runner's stdout is not a
terminal, so output defaults to JSON unless a format is given.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent))
from cli import app

from eagle_eye import __version__
from eagle_eye.eagle import EagleAPIError, EagleConnectionError, EagleNotFoundError, LibraryInfo
from eagle_eye.exit_codes import ExitCode

runner = CliRunner()

ITEMS = [
    {"id": "A1", "name": "Alpha", "ext": "png", "url": "https://example.com/a", "tags": ["red"]},
    {"id": "B2", "name": "Beta", "ext": "jpg", "url": "", "tags": []},
]

FOLDERS = [
    {"id": "F1", "name": "Work", "children": [{"id": "F2", "name": "Refs", "children": []}]},
    {"id": "F3", "name": "Home", "children": []},
]


def library(path: str = "/lib/Main.library") -> LibraryInfo:
    return LibraryInfo.model_validate({"library": {"name": "Main", "path": path}})


class TestCLIStructure:
    """Test CLI structure and command registration."""

    @pytest.mark.parametrize("name", ["app", "folder", "item", "library", "tag"])
    def test_sub_apps_registered(self, name):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert name in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"eagle-eye {__version__}"

    def test_unknown_format_is_usage_error(self, mock_eagle_client):
        result = runner.invoke(app, ["-o", "yaml", "tag", "list"])
        assert result.exit_code == ExitCode.USAGE
        mock_eagle_client.tag_list.assert_not_called()

    def test_format_is_case_insensitive(self, mock_eagle_client):
        mock_eagle_client.tag_list.return_value = ["red", "blue"]
        result = runner.invoke(app, ["-o", "NDJSON", "tag", "list"])
        assert result.exit_code == 0
        assert result.stdout == '"red"\n"blue"\n'


class TestOutputFlags:
    """Test global output flags end to end."""

    def test_piped_output_defaults_to_json(self, mock_eagle_client):
        mock_eagle_client.application_info.return_value = {"version": "4.0.0", "platform": "darwin"}
        result = runner.invoke(app, ["app", "info"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"version": "4.0.0", "platform": "darwin"}
        assert result.stdout.startswith("{\n  ")

    def test_csv(self, mock_eagle_client):
        mock_eagle_client.tag_groups.return_value = [{"id": "G1", "name": "Colors"}]
        result = runner.invoke(app, ["-o", "csv", "tag", "groups"])
        assert result.exit_code == 0
        assert result.stdout == "id,name\nG1,Colors\n"

    def test_table_no_header(self, mock_eagle_client):
        mock_eagle_client.tag_groups.return_value = [{"id": "G1", "name": "Colors"}]
        result = runner.invoke(app, ["-o", "table", "--no-header", "tag", "groups"])
        assert result.exit_code == 0
        assert result.stdout == "G1  Colors\n"

    def test_fields_and_compact(self, mock_eagle_client):
        mock_eagle_client.item_info.return_value = ITEMS[0]
        result = runner.invoke(app, ["-o", "compact", "--fields", "id,ext", "item", "info", "A1"])
        assert result.exit_code == 0
        assert result.stdout == '{"id":"A1","ext":"png"}\n'

    def test_count(self, mock_eagle_client):
        mock_eagle_client.tag_list.return_value = ["a", "b", "c"]
        result = runner.invoke(app, ["--count", "tag", "list"])
        assert result.exit_code == 0
        assert result.stdout == "3\n"

    def test_jq(self, mock_eagle_client):
        mock_eagle_client.tag_groups.return_value = [{"id": "G1"}, {"id": "G2"}]
        result = runner.invoke(app, ["-o", "table", "--jq", ".[].id", "tag", "groups"])
        assert result.exit_code == 0
        assert result.stdout == '"G1"\n"G2"\n'

    def test_jq_parse_error_is_usage_error(self, mock_eagle_client):
        mock_eagle_client.tag_list.return_value = []
        result = runner.invoke(app, ["--jq", ".[", "tag", "list"])
        assert result.exit_code == ExitCode.USAGE
        assert "Error:" in result.output

    def test_id_lines_print0(self, mock_eagle_client):
        mock_eagle_client.item_list.return_value = ITEMS
        result = runner.invoke(app, ["-o", "id", "--print0", "item", "list"])
        assert result.exit_code == 0
        assert result.stdout == "A1\0B2\0"


class TestErrorHandling:
    """Test error reporting and exit codes."""

    def test_connection_error_exit_code(self, mock_eagle_client):
        mock_eagle_client.application_info.side_effect = EagleConnectionError(
            "Failed to connect to Eagle at http://localhost:41595. Is Eagle running?"
        )
        result = runner.invoke(app, ["app", "info"])
        assert result.exit_code == ExitCode.CONNECTION
        assert "Is Eagle running?" in result.output

    def test_api_error_exit_code(self, mock_eagle_client):
        mock_eagle_client.item_info.side_effect = EagleNotFoundError("Resource not found: /api/item/info")
        result = runner.invoke(app, ["item", "info", "nope"])
        assert result.exit_code == ExitCode.ERROR
        assert "Resource not found" in result.output

    def test_json_error_envelope(self, mock_eagle_client):
        mock_eagle_client.item_info.side_effect = EagleAPIError("bad id")
        result = runner.invoke(app, ["--json", "item", "info", "nope"])
        assert result.exit_code == ExitCode.ERROR
        assert '{"ok":false,"error":{"message":"bad id"}}' in result.output

    def test_host_and_port_override(self):
        client = MagicMock()
        client.__enter__.return_value = client
        client.application_info.return_value = {"version": "4.0.0"}
        with patch("eagle_eye.cli.common.EagleClient", return_value=client) as factory:
            result = runner.invoke(app, ["--host", "studio.local", "--port", "5000", "app", "version"])
        assert result.exit_code == 0
        assert factory.call_args.kwargs["host"] == "studio.local"
        assert factory.call_args.kwargs["port"] == 5000

    def test_debug_logs_api_address(self, mock_eagle_client):
        mock_eagle_client.application_info.return_value = {"version": "4.0.0"}
        result = runner.invoke(app, ["--debug", "--host", "studio.local", "--port", "5000", "app", "version"])
        assert result.exit_code == 0
        assert "Using Eagle API at http://studio.local:5000" in result.output

    def test_no_debug_output_by_default(self, mock_eagle_client):
        mock_eagle_client.application_info.return_value = {"version": "4.0.0"}
        result = runner.invoke(app, ["app", "version"])
        assert "Using Eagle API" not in result.output


class TestAppCommands:
    """Test application commands."""

    def test_version_plain(self, mock_eagle_client):
        mock_eagle_client.application_info.return_value = {"version": "4.0.0"}
        result = runner.invoke(app, ["app", "version"])
        assert result.exit_code == 0
        assert result.stdout == "4.0.0\n"

    def test_version_json(self, mock_eagle_client):
        mock_eagle_client.application_info.return_value = {"version": "4.0.0"}
        result = runner.invoke(app, ["--json", "app", "version"])
        assert result.exit_code == 0
        assert result.stdout == '"4.0.0"\n'


class TestFolderCommands:
    """Test folder commands."""

    def test_list_names(self, mock_eagle_client):
        mock_eagle_client.folder_list.return_value = FOLDERS
        result = runner.invoke(app, ["folder", "list"])
        assert result.exit_code == 0
        assert result.stdout == "Work\nHome\n"

    def test_list_recursive(self, mock_eagle_client):
        mock_eagle_client.folder_list.return_value = FOLDERS
        result = runner.invoke(app, ["folder", "list", "--recursive"])
        assert result.stdout == "Work\nRefs\nHome\n"

    def test_list_tree(self, mock_eagle_client):
        mock_eagle_client.folder_list.return_value = FOLDERS
        result = runner.invoke(app, ["folder", "list", "--tree"])
        assert result.stdout == "Work\n  Refs\nHome\n"

    def test_list_count(self, mock_eagle_client):
        mock_eagle_client.folder_list.return_value = FOLDERS
        result = runner.invoke(app, ["--count", "folder", "list", "-r"])
        assert result.stdout == "3\n"

    def test_list_explicit_format_renders_objects(self, mock_eagle_client):
        mock_eagle_client.folder_list.return_value = FOLDERS
        result = runner.invoke(app, ["--json", "folder", "list"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == FOLDERS

    def test_create(self, mock_eagle_client):
        mock_eagle_client.folder_create.return_value = {"id": "F9", "name": "New"}
        result = runner.invoke(app, ["--quiet", "folder", "create", "New", "--parent", "F1"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"id": "F9", "name": "New"}
        mock_eagle_client.folder_create.assert_called_once_with("New", parent="F1")

    def test_create_dry_run(self, mock_eagle_client):
        result = runner.invoke(app, ["--dry-run", "folder", "create", "New"])
        assert result.exit_code == 0
        assert "would create folder 'New'" in result.output
        mock_eagle_client.folder_create.assert_not_called()

    def test_update(self, mock_eagle_client):
        mock_eagle_client.folder_update.return_value = {"id": "F1"}
        result = runner.invoke(app, ["folder", "update", "F1", "--color", "red"])
        assert result.exit_code == 0
        mock_eagle_client.folder_update.assert_called_once_with(
            "F1", new_name=None, new_description=None, new_color="red"
        )


class TestItemCommands:
    """Test item commands."""

    def test_list_paths(self, mock_eagle_client):
        mock_eagle_client.item_list.return_value = ITEMS
        mock_eagle_client.library_details.return_value = library()
        result = runner.invoke(app, ["item", "list"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "/lib/Main.library/images/A1.info/Alpha.png",
            "/lib/Main.library/images/B2.info/Beta.jpg",
        ]

    def test_list_filters_passed_to_client(self, mock_eagle_client):
        mock_eagle_client.item_list.return_value = []
        result = runner.invoke(app, ["--json", "item", "list", "-n", "5", "-t", "red, blue", "-e", "png"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []
        mock_eagle_client.item_list.assert_called_once_with(
            limit=5, offset=None, order_by=None, keyword=None, ext="png", tags=["red", "blue"], folders=None
        )

    def test_list_url_filter(self, mock_eagle_client):
        mock_eagle_client.item_list.return_value = ITEMS
        result = runner.invoke(app, ["-o", "id", "item", "list", "--url", "example.com"])
        assert result.stdout == "A1\n"

    def test_list_thumbnails(self, mock_eagle_client, tmp_path):
        item_dir = tmp_path / "images" / "A1.info"
        item_dir.mkdir(parents=True)
        (item_dir / "Alpha_thumbnail.png").touch()
        mock_eagle_client.item_list.return_value = ITEMS
        mock_eagle_client.library_details.return_value = library(str(tmp_path))
        result = runner.invoke(app, ["item", "list", "-T"])
        assert result.stdout.splitlines() == [
            str(item_dir / "Alpha_thumbnail.png"),
            str(tmp_path / "images" / "B2.info" / "Beta.jpg"),
        ]

    def test_thumbnail(self, mock_eagle_client):
        mock_eagle_client.item_thumbnail.return_value = "/lib/images/A1.info/Alpha_thumbnail.png"
        result = runner.invoke(app, ["item", "thumbnail", "A1"])
        assert result.stdout == "/lib/images/A1.info/Alpha_thumbnail.png\n"

    def test_update_single(self, mock_eagle_client):
        mock_eagle_client.item_update.return_value = {"id": "A1", "star": 4}
        result = runner.invoke(app, ["item", "update", "A1", "--star", "4", "--tags", "red,logo"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"id": "A1", "star": 4}
        mock_eagle_client.item_update.assert_called_once_with(
            "A1", tags=["red", "logo"], annotation=None, url=None, star=4
        )

    def test_update_stdin_all_ok(self, mock_eagle_client):
        mock_eagle_client.item_update.side_effect = lambda item_id, **kwargs: {"id": item_id}
        result = runner.invoke(app, ["item", "update", "--stdin", "--star", "1"], input='["A1", "B2"]')
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"id": "A1"}, {"id": "B2"}]

    def test_update_stdin_partial_failure(self, mock_eagle_client):
        mock_eagle_client.item_update.side_effect = [{"id": "A1"}, EagleAPIError("bad id")]
        result = runner.invoke(app, ["item", "update", "--stdin", "--star", "1"], input="A1\nB2\n")
        assert result.exit_code == ExitCode.PARTIAL
        assert "Failed to update B2: bad id" in result.output
        assert '"id": "A1"' in result.output

    def test_update_stdin_all_failed(self, mock_eagle_client):
        mock_eagle_client.item_update.side_effect = EagleAPIError("bad id")
        result = runner.invoke(app, ["item", "update", "--stdin", "--star", "1"], input="A1\0B2\0")
        assert result.exit_code == ExitCode.ERROR
        assert mock_eagle_client.item_update.call_count == 2

    def test_update_connection_error_aborts(self, mock_eagle_client):
        mock_eagle_client.item_update.side_effect = EagleConnectionError("Cannot reach Eagle")
        result = runner.invoke(app, ["item", "update", "--stdin", "--star", "1"], input="A1\nB2\n")
        assert result.exit_code == ExitCode.CONNECTION
        assert mock_eagle_client.item_update.call_count == 1

    def test_update_requires_ids(self, mock_eagle_client):
        result = runner.invoke(app, ["item", "update", "--star", "1"])
        assert result.exit_code == ExitCode.USAGE
        mock_eagle_client.item_update.assert_not_called()

    def test_update_invalid_stdin(self, mock_eagle_client):
        result = runner.invoke(app, ["item", "update", "--stdin", "--star", "1"], input="[1, 2]")
        assert result.exit_code == ExitCode.USAGE
        mock_eagle_client.item_update.assert_not_called()

    def test_move_to_trash_requires_force(self, mock_eagle_client):
        result = runner.invoke(app, ["item", "move-to-trash", "A1"])
        assert result.exit_code == ExitCode.USAGE
        assert "--force" in result.output
        mock_eagle_client.item_move_to_trash.assert_not_called()

    def test_move_to_trash(self, mock_eagle_client):
        mock_eagle_client.item_move_to_trash.return_value = None
        result = runner.invoke(app, ["--quiet", "item", "move-to-trash", "A1,B2", "--force"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"itemIds": ["A1", "B2"]}
        mock_eagle_client.item_move_to_trash.assert_called_once_with(["A1", "B2"])

    def test_move_to_trash_dry_run(self, mock_eagle_client):
        result = runner.invoke(app, ["--dry-run", "item", "move-to-trash", "A1", "--force"])
        assert result.exit_code == 0
        assert "would move 1 item(s) to trash" in result.output
        mock_eagle_client.item_move_to_trash.assert_not_called()

    def test_move_to_trash_failure(self, mock_eagle_client):
        mock_eagle_client.item_move_to_trash.side_effect = EagleAPIError("trash failed")
        result = runner.invoke(app, ["item", "move-to-trash", "A1,B2", "--force"])
        assert result.exit_code == ExitCode.ERROR

    def test_add_from_url_default_name(self, mock_eagle_client):
        mock_eagle_client.item_add_from_url.return_value = None
        result = runner.invoke(app, ["item", "add-from-url", "https://example.com/img/cat.jpg?x=1"])
        assert result.exit_code == 0
        args = mock_eagle_client.item_add_from_url.call_args
        assert args.args == ("https://example.com/img/cat.jpg?x=1", "cat")

    def test_add_from_path_resolves(self, mock_eagle_client, tmp_path):
        image = tmp_path / "photo.png"
        image.touch()
        mock_eagle_client.item_add_from_path.return_value = None
        result = runner.invoke(app, ["item", "add-from-path", str(image), "--tags", "a,b"])
        assert result.exit_code == 0
        args = mock_eagle_client.item_add_from_path.call_args
        assert args.args == (str(image.resolve()), "photo")
        assert args.kwargs["tags"] == ["a", "b"]

    def test_add_from_urls(self, mock_eagle_client):
        mock_eagle_client.item_add_from_urls.return_value = None
        items = json.dumps(
            [{"url": "https://example.com/a/dog.png"}, {"url": "https://example.com/b.jpg", "name": "B", "tags": ["t"]}]
        )
        result = runner.invoke(app, ["--quiet", "item", "add-from-urls", items, "--folder-id", "F1"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"count": 2}
        args = mock_eagle_client.item_add_from_urls.call_args
        assert args.args[0] == [
            {"url": "https://example.com/a/dog.png", "name": "dog"},
            {"url": "https://example.com/b.jpg", "name": "B", "tags": ["t"]},
        ]
        assert args.kwargs["folder_id"] == "F1"

    def test_add_from_urls_reads_stdin(self, mock_eagle_client):
        mock_eagle_client.item_add_from_urls.return_value = None
        result = runner.invoke(app, ["item", "add-from-urls", "-"], input='[{"url": "https://example.com/c.gif"}]')
        assert result.exit_code == 0
        added = mock_eagle_client.item_add_from_urls.call_args.args[0]
        assert added == [{"url": "https://example.com/c.gif", "name": "c"}]

    @pytest.mark.parametrize(
        "items", ["not json", "[]", '{"url": "x"}', '[{"name": "no url"}]', '["https://example.com/a.png"]']
    )
    def test_add_from_urls_invalid_input(self, mock_eagle_client, items):
        result = runner.invoke(app, ["item", "add-from-urls", items])
        assert result.exit_code == ExitCode.USAGE
        mock_eagle_client.item_add_from_urls.assert_not_called()

    def test_add_from_urls_dry_run(self, mock_eagle_client):
        result = runner.invoke(app, ["--dry-run", "item", "add-from-urls", '[{"url": "https://example.com/a.png"}]'])
        assert result.exit_code == 0
        assert "https://example.com/a.png" in result.output
        mock_eagle_client.item_add_from_urls.assert_not_called()


class TestLibraryCommands:
    """Test library commands."""

    def test_info_section(self, mock_eagle_client):
        mock_eagle_client.library_info.return_value = {"folders": [], "tagsGroups": [{"name": "Colors"}]}
        result = runner.invoke(app, ["library", "info", "-g"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"name": "Colors"}]

    def test_info_rejects_multiple_sections(self, mock_eagle_client):
        result = runner.invoke(app, ["library", "info", "-f", "-g"])
        assert result.exit_code == ExitCode.USAGE
        mock_eagle_client.library_info.assert_not_called()

    def test_current_path(self, mock_eagle_client):
        mock_eagle_client.library_details.return_value = library()
        result = runner.invoke(app, ["library", "current", "--path"])
        assert result.stdout == "/lib/Main.library\n"

    def test_current_object(self, mock_eagle_client):
        mock_eagle_client.library_details.return_value = library()
        result = runner.invoke(app, ["library", "current"])
        assert json.loads(result.stdout) == {"name": "Main", "path": "/lib/Main.library"}

    def test_switch_dry_run(self, mock_eagle_client):
        result = runner.invoke(app, ["--dry-run", "library", "switch", "/lib/Other.library"])
        assert result.exit_code == 0
        mock_eagle_client.library_switch.assert_not_called()


class TestTagCommands:
    """Test tag commands."""

    def test_tag_all(self, mock_eagle_client):
        mock_eagle_client.tag_all.return_value = {"tags": ["red"], "recent": ["red"], "groups": []}
        result = runner.invoke(app, ["-o", "compact", "tag", "all"])
        assert result.exit_code == 0
        assert result.stdout == '{"tags":["red"],"recent":["red"],"groups":[]}\n'

    def test_tag_recent(self, mock_eagle_client):
        mock_eagle_client.tag_list_recent.return_value = ["blue"]
        result = runner.invoke(app, ["-o", "id", "tag", "recent"])
        assert result.exit_code == 0
        assert result.stdout == "blue\n"
