"""Tests for the command line entry point."""

import json

from tscriptify.cli import create_parser, main
from tscriptify.codegen.core.config import DEFAULT_HEADER


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args(["sample_types:Person"])
        assert args.types == ["sample_types:Person"]
        assert args.output is None
        assert args.interface is False
        assert args.log_level == "WARNING"

    def test_repeated_date_types(self):
        args = create_parser().parse_args(
            ["m:T", "--date-type", "a:B", "--date-type", "c:D"]
        )
        assert args.date_type == ["a:B", "c:D"]


class TestMain:
    """Test running the CLI."""

    def test_prints_code(self, capsys):
        assert main(["sample_types:Dummy", "--no-create-from"]) == 0
        out = capsys.readouterr().out
        assert "export class Dummy {" in out
        assert "something: string;" in out
        assert "createFrom" not in out

    def test_interface_and_prefix(self, capsys):
        assert main(["sample_types:Dummy", "--interface", "--prefix", "Api"]) == 0
        assert "export interface ApiDummy {" in capsys.readouterr().out

    def test_writes_file(self, tmp_path, capsys):
        target = tmp_path / "models.ts"

        assert main(["sample_types:Dummy", "-o", str(target), "--no-backup"]) == 0

        assert target.read_text(encoding="utf-8").startswith(DEFAULT_HEADER)
        assert "saved to" in capsys.readouterr().out

    def test_verbose_shows_metadata(self, capsys):
        assert main(["sample_types:Dummy", "--verbose"]) == 0
        assert "Generation Metadata" in capsys.readouterr().out

    def test_warnings_are_shown(self, capsys):
        assert main(["sample_types:Address"]) == 0
        assert "Warnings" in capsys.readouterr().out

    def test_missing_types(self, capsys):
        assert main([]) == 1
        assert "At least one TYPE" in capsys.readouterr().out

    def test_unresolvable_type(self, capsys):
        assert main(["sample_types:Missing"]) == 1
        assert "Cannot resolve" in capsys.readouterr().out

    def test_non_struct_type(self, capsys):
        assert main(["builtins:int"]) == 1
        assert "only structs and enums" in capsys.readouterr().out

    def test_unmapped_kind_fails(self, capsys):
        assert main(["sample_types:Blob"]) == 1
        assert "Cannot find type for: bytes" in capsys.readouterr().out

    def test_init_config(self, tmp_path):
        target = tmp_path / "tscriptify.json"

        assert main(["--init-config", str(target), "--prefix", "Api"]) == 0

        saved = json.loads(target.read_text(encoding="utf-8"))
        assert saved["prefix"] == "Api"
        assert saved["create_from_method"] is True
