from pathlib import Path

import pytest

from fuzzmenu.exceptions import PickerLaunchFailure
from fuzzmenu.picker import Picker, render_picker_config, user_picker_config
from fuzzmenu.tree import ConfigTree


def resolve(document):
    tree = ConfigTree.build(document, system_dirs=())
    return tree.resolve(tree.root)


def shell_picker(script):
    """A stand-in picker: `sh -c script`, extra arguments become $0, $1, ..."""
    return Picker(executable="sh", base_args=("-c", script), include_user_config=False)


# --- Command line ---


def test_default_command():
    command = Picker().build_command(resolve({"fuzzel-args": ["--width", "40"]}))
    assert command == ["fuzzel", "--dmenu", "--width", "40"]


def test_command_with_config_and_no_sort():
    resolved = resolve({"no-sort": True, "fuzzel-args": ["--lines", "3"]})
    command = Picker().build_command(resolved, Path("/tmp/menu.ini"))
    assert command == [
        "fuzzel",
        "--dmenu",
        "--config=/tmp/menu.ini",
        "--no-sort",
        "--lines",
        "3",
    ]


# --- Config rendering ---


def test_render_picker_config_sections():
    text = render_picker_config(
        {"font": "Mono", "colors.background": "000000ff", "main.width": "40"}
    )
    assert text == (
        "[main]\n"
        "font=Mono\n"
        "width=40\n"
        "\n"
        "[colors]\n"
        "background=000000ff\n"
    )


def test_render_picker_config_include_first():
    text = render_picker_config({"colors.text": "ffffffff"}, Path("/home/u/fuzzel.ini"))
    assert text == (
        "[main]\n"
        "include=/home/u/fuzzel.ini\n"
        "\n"
        "[colors]\n"
        "text=ffffffff\n"
    )


def test_user_picker_config(tmp_path):
    assert user_picker_config({"XDG_CONFIG_HOME": str(tmp_path)}) is None
    ini = tmp_path / "fuzzel" / "fuzzel.ini"
    ini.parent.mkdir()
    ini.write_text("[main]\n")
    assert user_picker_config({"XDG_CONFIG_HOME": str(tmp_path)}) == ini


# --- Process round trips ---


def test_pick_returns_first_line():
    picker = shell_picker("head -n 1")
    assert picker.pick(b"Terminal\nDev\n", resolve({})) == "Terminal"


def test_pick_without_output_is_none():
    picker = shell_picker("cat > /dev/null")
    assert picker.pick(b"Terminal\n", resolve({})) is None


def test_pick_ignores_exit_status():
    picker = shell_picker("cat > /dev/null; echo Dev; exit 3")
    assert picker.pick(b"Dev\n", resolve({})) == "Dev"


def test_pick_writes_temporary_config():
    picker = shell_picker('cat > /dev/null; echo "${0#--config=}"')
    output = picker.pick(b"x\n", resolve({"fuzzel-config": {"main.font": "Mono"}}))
    # Removed once the picker has exited.
    config_path = Path(output)
    assert config_path.suffix == ".ini"
    assert not config_path.exists()


def test_pick_config_contents_seen_by_picker():
    picker = shell_picker('cat > /dev/null; tail -n 1 "${0#--config=}"')
    output = picker.pick(b"x\n", resolve({"fuzzel-config": {"main.font": "Mono"}}))
    assert output == "font=Mono"


def test_missing_picker_raises():
    picker = Picker(executable="fuzzmenu-no-such-picker")
    with pytest.raises(PickerLaunchFailure, match="fuzzmenu-no-such-picker") as info:
        picker.pick(b"x\n", resolve({}))
    assert info.value.command[0] == "fuzzmenu-no-such-picker"


def test_unwritable_config_dir_raises(monkeypatch):
    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("fuzzmenu.picker.tempfile.NamedTemporaryFile", denied)
    picker = shell_picker("cat > /dev/null")
    with pytest.raises(PickerLaunchFailure, match="Permission denied") as info:
        picker.pick(b"x\n", resolve({"fuzzel-config": {"main.font": "Mono"}}))
    assert info.value.command == ("sh",)


def test_unwritable_config_dir_not_needed_without_overrides(monkeypatch):
    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("fuzzmenu.picker.tempfile.NamedTemporaryFile", denied)
    picker = shell_picker("head -n 1")
    assert picker.pick(b"Terminal\n", resolve({})) == "Terminal"
