import pytest

from mcp_server.strings_loader import load_strings


def test_bundled_strings_cover_every_tool():
    strings = load_strings()
    expected = {
        "build_index", "find_tokens", "find_references", "notify_file_changed",
        "list_token_files", "get_file_summary", "get_index_status",
    }
    assert expected <= set(strings["tools"])
    assert strings["help"]


def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / "strings.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        load_strings(path)
