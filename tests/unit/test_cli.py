"""Tests for the command-line interface."""

import json

import pytest

from stringbird.cli import main
from stringbird.features.store.codec import load_store


@pytest.fixture
def marked_file(create_source):
    return create_source("page.tsx", 'const t = /*#page.title*/"Home";\nconst u = "plain";\n')


class TestExtractCommand:
    """Tests for `stringbird extract`."""

    def test_extract_success(self, marked_file, project_dir, capsys):
        exit_code = main(["--log-level", "ERROR", "extract", marked_file])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert f"Parsed {marked_file} (1 marked)" in out
        assert "Output written to stringbird" in out
        assert load_store(str(project_dir / "stringbird")) == {"page.title": '"Home"'}

    def test_extract_json(self, marked_file, capsys):
        exit_code = main(["--log-level", "ERROR", "--json", "extract", marked_file])

        result = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert result["keys"] == 1
        assert result["files"] == [{"file": marked_file, "keys": 1}]

    def test_extract_quiet(self, marked_file, capsys):
        exit_code = main(["--log-level", "ERROR", "--quiet", "extract", marked_file])

        assert exit_code == 0
        assert capsys.readouterr().out == ""

    def test_extract_custom_store(self, marked_file, project_dir, capsys):
        exit_code = main(["--log-level", "ERROR", "--store", "strings.txt", "extract", marked_file])

        assert exit_code == 0
        assert (project_dir / "strings.txt").exists()
        assert not (project_dir / "stringbird").exists()

    def test_extract_overridden_key_warns(self, create_source, capsys):
        first = create_source("first.ts", 'const a = /*#k*/"one";\n')
        second = create_source("second.ts", 'const a = /*#k*/"two";\n')

        exit_code = main(["--log-level", "ERROR", "extract", first, second])

        assert exit_code == 0
        assert "WARNING: Key 'k'" in capsys.readouterr().err

    def test_extract_parse_error(self, create_source, project_dir, capsys):
        path = create_source("broken.ts", "const = ;\n")

        exit_code = main(["--log-level", "ERROR", "extract", path])

        assert exit_code == 1
        assert f"ERROR: Failed to parse {path}" in capsys.readouterr().err
        assert not (project_dir / "stringbird").exists()

    def test_extract_missing_file(self, project_dir, capsys):
        exit_code = main(["--log-level", "ERROR", "extract", "missing.tsx"])

        assert exit_code == 1
        assert "Failed to load missing.tsx" in capsys.readouterr().err

    def test_extract_requires_files(self, project_dir):
        with pytest.raises(SystemExit) as exc_info:
            main(["extract"])

        assert exc_info.value.code == 2


class TestApplyCommand:
    """Tests for `stringbird apply`."""

    def test_apply_success(self, marked_file, project_dir, read_file, capsys):
        (project_dir / "stringbird").write_text('page.title="Start"\n')

        exit_code = main(["--log-level", "ERROR", "apply", marked_file])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert f"Applied to {marked_file} (1 replaced)" in out
        assert read_file(marked_file) == 'const t = /*#page.title*/"Start";\nconst u = "plain";\n'

    def test_apply_dry_run_prints_diff(self, marked_file, project_dir, read_file, capsys):
        (project_dir / "stringbird").write_text('page.title="Start"\n')

        exit_code = main(["--log-level", "ERROR", "apply", "--dry-run", marked_file])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert '+const t = /*#page.title*/"Start";' in out
        assert "would change" in out
        assert read_file(marked_file) == 'const t = /*#page.title*/"Home";\nconst u = "plain";\n'

    def test_apply_without_store(self, marked_file, capsys):
        exit_code = main(["--log-level", "ERROR", "apply", marked_file])

        assert exit_code == 1
        assert "Store file not found" in capsys.readouterr().err

    def test_apply_kind_mismatch(self, marked_file, project_dir, capsys):
        (project_dir / "stringbird").write_text("page.title=`Start`\n")

        exit_code = main(["--log-level", "ERROR", "apply", marked_file])

        assert exit_code == 1
        assert "must be a string literal, got template" in capsys.readouterr().err

    def test_backup_list_and_rollback(self, marked_file, project_dir, read_file, capsys):
        (project_dir / "stringbird").write_text('page.title="Start"\n')

        assert main(["--log-level", "ERROR", "--json", "apply", "--backup", marked_file]) == 0
        backup_id = json.loads(capsys.readouterr().out)["backup_id"]

        assert main(["--log-level", "ERROR", "backups"]) == 0
        assert backup_id in capsys.readouterr().out

        assert main(["--log-level", "ERROR", "rollback", backup_id]) == 0
        assert f"Restored 1 file(s) from {backup_id}" in capsys.readouterr().out
        assert read_file(marked_file) == 'const t = /*#page.title*/"Home";\nconst u = "plain";\n'

    def test_rollback_unknown_backup(self, project_dir, capsys):
        exit_code = main(["--log-level", "ERROR", "rollback", "backup-missing"])

        assert exit_code == 1
        assert "Backup not found: backup-missing" in capsys.readouterr().err


class TestGlobalOptions:
    """Tests for options shared by all commands."""

    def test_invalid_config_file(self, marked_file, project_dir, capsys):
        (project_dir / ".stringbird.yml").write_text("dialect: python\n")

        exit_code = main(["--log-level", "ERROR", "extract", marked_file])

        assert exit_code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_explicit_config_file(self, marked_file, project_dir, capsys):
        config = project_dir / "custom.yml"
        config.write_text("store_file: from-config\n")

        exit_code = main(["--log-level", "ERROR", "--config", str(config), "extract", marked_file])

        assert exit_code == 0
        assert (project_dir / "from-config").exists()

    def test_log_file(self, marked_file, project_dir):
        log_path = project_dir / "stringbird.log"

        exit_code = main(["--log-file", str(log_path), "extract", marked_file])

        assert exit_code == 0
        records = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert "extract_completed" in [r["event"] for r in records]
        assert {r["command"] for r in records} == {"extract"}

    def test_quiet_silences_info_logs(self, marked_file, capsys):
        exit_code = main(["--quiet", "extract", marked_file])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert captured.out == ""
        assert captured.err == ""

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            main(["translate"])
