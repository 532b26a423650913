from codegen_state.migration.files import normalize_files
from codegen_state.migration.models import build_file_record


def test_legacy_file_record_is_translated():
    state = {
        "generatedFilesMap": {
            "app.py": {
                "file_path": "app.py",
                "file_contents": "print('hi')",
                "file_purpose": "entry point",
            }
        }
    }

    result = normalize_files(state)

    assert result.changed is True
    assert result.value["app.py"] == {
        "filePath": "app.py",
        "fileContents": "print('hi')",
        "filePurpose": "entry point",
        "lastDiff": "",
    }


def test_current_field_wins_over_legacy_field():
    record = {
        "filePath": "new/path.py",
        "file_path": "old/path.py",
        "file_contents": "x = 1",
        "filePurpose": "module",
        "lastDiff": "@@ -1 +1 @@",
    }

    rebuilt = build_file_record(record)

    assert rebuilt["filePath"] == "new/path.py"
    assert rebuilt["fileContents"] == "x = 1"
    assert rebuilt["lastDiff"] == "@@ -1 +1 @@"
    assert "file_path" not in rebuilt
    assert "file_contents" not in rebuilt


def test_current_record_is_rebuilt_but_not_flagged(current_state):
    original = current_state["generatedFilesMap"]["src/index.ts"]

    result = normalize_files(current_state)

    assert result.changed is False
    assert result.value["src/index.ts"] == original
    assert result.value["src/index.ts"] is not original


def test_missing_last_diff_is_defaulted_and_flagged():
    state = {
        "generatedFilesMap": {
            "a.ts": {"filePath": "a.ts", "fileContents": "", "filePurpose": "util"},
        }
    }

    result = normalize_files(state)

    assert result.changed is True
    assert result.value["a.ts"]["lastDiff"] == ""


def test_unrelated_record_keys_are_kept():
    state = {
        "generatedFilesMap": {
            "a.ts": {"file_path": "a.ts", "file_contents": "", "file_purpose": "", "language": "ts"},
        }
    }

    result = normalize_files(state)

    assert result.value["a.ts"]["language"] == "ts"


def test_missing_files_map_yields_empty_mapping():
    result = normalize_files({})

    assert result.value == {}
    assert result.changed is False
