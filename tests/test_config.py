import shutil
import tempfile
from pathlib import Path

import pytest

from fuzzmenu.config import RawMenu, default_config_dir, find_config, load_document
from fuzzmenu.exceptions import ConfigError
from fuzzmenu.tree import ConfigTree, Menu

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture(autouse=True)
def fake_home(monkeypatch):
    """Redirect Path.home() and the config env vars to a temporary directory."""
    temp_home = Path(tempfile.mkdtemp())
    monkeypatch.setattr(Path, "home", lambda: temp_home)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("FUZZMENU_CONFIG", raising=False)
    yield temp_home
    shutil.rmtree(temp_home, ignore_errors=True)


def test_default_config_dir(fake_home, monkeypatch):
    assert default_config_dir() == fake_home / ".config" / "fuzzmenu"
    monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg")
    assert default_config_dir() == Path("/xdg/fuzzmenu")


def test_find_config_default_location(fake_home):
    config_file = fake_home / ".config" / "fuzzmenu" / "default.toml"
    config_file.parent.mkdir(parents=True)
    config_file.touch()
    assert find_config() == config_file


def test_find_config_prefers_yaml(fake_home):
    config_dir = fake_home / ".config" / "fuzzmenu"
    config_dir.mkdir(parents=True)
    (config_dir / "default.toml").touch()
    (config_dir / "default.yaml").touch()
    assert find_config() == config_dir / "default.yaml"


def test_find_config_env_var(fake_home, monkeypatch, tmp_path):
    config_file = tmp_path / "menu.yaml"
    config_file.touch()
    monkeypatch.setenv("FUZZMENU_CONFIG", str(config_file))
    assert find_config() == config_file


def test_find_config_explicit(tmp_path):
    config_file = tmp_path / "menu.yml"
    config_file.touch()
    assert find_config(str(config_file)) == config_file


def test_find_config_explicit_missing(tmp_path):
    with pytest.raises(ConfigError, match="No such config file"):
        find_config(tmp_path / "missing.yaml")


def test_find_config_nothing_found():
    with pytest.raises(ConfigError, match="No config file found"):
        find_config()


def test_load_yaml(tmp_path):
    config_file = tmp_path / "menu.yaml"
    config_file.write_text(
        "fuzzel-args: [--width, 40]\n"
        "items:\n"
        "  - program: Terminal\n"
        "    command: alacritty\n",
        encoding="UTF-8",
    )
    document = load_document(config_file)
    assert document["items"] == [{"program": "Terminal", "command": "alacritty"}]
    raw = RawMenu.model_validate(document)
    assert raw.fuzzel_args == ["--width", "40"]
    assert raw.items[0].command == ["alacritty"]


def test_load_toml(tmp_path):
    config_file = tmp_path / "menu.toml"
    config_file.write_text(
        'icon-dir = "/icons"\n'
        "\n"
        "[[items]]\n"
        'menu = "Dev"\n'
        "\n"
        "  [[items.items]]\n"
        '  program = "Editor"\n'
        '  command = ["nvim"]\n',
        encoding="UTF-8",
    )
    raw = RawMenu.model_validate(load_document(config_file))
    assert raw.icon_dir == ["/icons"]
    assert raw.items[0].menu == "Dev"
    assert raw.items[0].items[0].command == ["nvim"]


def test_load_empty_yaml(tmp_path):
    config_file = tmp_path / "menu.yaml"
    config_file.write_text("", encoding="UTF-8")
    assert load_document(config_file) == {}


def test_load_unsupported_suffix(tmp_path):
    config_file = tmp_path / "menu.kdl"
    config_file.write_text('program "x" { command "x" }', encoding="UTF-8")
    with pytest.raises(ConfigError, match="Unsupported config format"):
        load_document(config_file)


def test_load_non_mapping(tmp_path):
    config_file = tmp_path / "menu.yaml"
    config_file.write_text("- just\n- a list\n", encoding="UTF-8")
    with pytest.raises(ConfigError, match="mapping at the top level"):
        load_document(config_file)


def test_load_invalid_yaml(tmp_path):
    config_file = tmp_path / "menu.yaml"
    config_file.write_text("items: [unclosed\n", encoding="UTF-8")
    with pytest.raises(ConfigError, match="Failed to decode"):
        load_document(config_file)


@pytest.mark.parametrize(
    "name, content",
    [
        ("menu.yaml", b"items:\n  - program: Caf\xe9\n"),
        ("menu.toml", b"[[items]]\nprogram = \"Caf\xe9\"\n"),
    ],
)
def test_load_non_utf8(tmp_path, name, content):
    config_file = tmp_path / name
    config_file.write_bytes(content)
    with pytest.raises(ConfigError, match="Failed to decode"):
        load_document(config_file)


def test_load_null_items(tmp_path):
    config_file = tmp_path / "menu.yaml"
    config_file.write_text("items:\n  - menu: Empty\n    items:\n", encoding="UTF-8")
    tree = ConfigTree.build(load_document(config_file), system_dirs=())
    (menu,) = tree.root.items
    assert isinstance(menu, Menu)
    assert menu.items == ()


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read"):
        load_document(tmp_path / "missing.yaml")


@pytest.mark.parametrize("name", ["default.yaml", "default.toml"])
def test_shipped_examples_build(name):
    tree = ConfigTree.build(load_document(EXAMPLES / name), system_dirs=())
    names = [item.display_name for item in tree.root.items]
    assert "Terminal" in names
    dev = next(item for item in tree.root.items if item.display_name == "Dev")
    assert isinstance(dev, Menu)
    assert dev.items[0].display_name == "Editor"
