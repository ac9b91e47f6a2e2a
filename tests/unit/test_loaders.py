"""Tests for the built-in loaders and the loader registry."""

from pathlib import Path
from textwrap import dedent

import pytest

from configscout import ConfigParseError, ConfigurationError, MissingLoaderError
from configscout.adapters.loaders import (
    DEFAULT_LOADERS,
    DEFAULT_LOADERS_SYNC,
    NO_EXT,
    extension_of,
    load_json,
    load_python,
    load_toml,
    load_yaml,
    merge_loaders,
    resolve_loader,
)


FILE = Path("/project/.toolrc")


@pytest.mark.loaders
@pytest.mark.tier(0)
class TestLoadJson:
    """Tests for load_json()."""

    def test_parses_object(self) -> None:
        """Valid JSON decodes to Python values."""
        assert load_json(FILE, '{"a": [1, true, null]}') == {"a": [1, True, None]}

    def test_error_reports_line(self) -> None:
        """Syntax errors carry file and line."""
        with pytest.raises(ConfigParseError) as exc_info:
            load_json(FILE, '{\n  "a": 1,\n  oops\n}')

        assert exc_info.value.filepath == FILE
        assert exc_info.value.line == 3
        assert str(FILE) in str(exc_info.value)

    def test_rejects_comments(self) -> None:
        """JSON is strict: comments are a parse error."""
        with pytest.raises(ConfigParseError):
            load_json(FILE, '{"a": 1} // trailing')


@pytest.mark.loaders
@pytest.mark.tier(0)
class TestLoadYaml:
    """Tests for load_yaml()."""

    def test_parses_mapping(self) -> None:
        """Block YAML decodes to a dict."""
        content = dedent("""
            name: app
            plugins:
              - a
              - b
        """)

        assert load_yaml(FILE, content) == {"name": "app", "plugins": ["a", "b"]}

    def test_accepts_json(self) -> None:
        """JSON documents are valid YAML."""
        assert load_yaml(FILE, '{"a": 1}') == {"a": 1}

    def test_comment_only_document_is_none(self) -> None:
        """A document with no content loads as None."""
        assert load_yaml(FILE, "# nothing here\n") is None

    def test_error_reports_line(self) -> None:
        """Syntax errors carry the 1-based line of the problem."""
        content = "a: 1\nb: 2\nc: [unclosed\n"

        with pytest.raises(ConfigParseError) as exc_info:
            load_yaml(FILE, content)

        assert exc_info.value.line is not None
        assert exc_info.value.line >= 3
        assert exc_info.value.recovery_hint.startswith("Check .toolrc at line")

    def test_unsafe_tags_rejected(self) -> None:
        """Only safe YAML is accepted."""
        with pytest.raises(ConfigParseError):
            load_yaml(FILE, "a: !!python/object/apply:os.system ['true']\n")


@pytest.mark.loaders
@pytest.mark.tier(0)
class TestLoadToml:
    """Tests for load_toml()."""

    def test_parses_tables(self) -> None:
        """Tables become nested dicts."""
        content = '[tool.app]\nstrict = true\n'

        assert load_toml(FILE, content) == {"tool": {"app": {"strict": True}}}

    def test_error_is_wrapped(self) -> None:
        """Invalid TOML raises ConfigParseError with the decode error as cause."""
        import tomllib

        with pytest.raises(ConfigParseError) as exc_info:
            load_toml(FILE, "a = \n")

        assert isinstance(exc_info.value.cause, tomllib.TOMLDecodeError)


@pytest.mark.loaders
@pytest.mark.tier(1)
class TestLoadPython:
    """Tests for load_python()."""

    def test_returns_config_attribute(self, tmp_path: Path) -> None:
        """The module's config attribute is the result."""
        path = tmp_path / "tool.config.py"
        content = "import os\nconfig = {'sep': os.sep, 'n': 1 + 1}\n"

        assert load_python(path, content) == {"sep": __import__("os").sep, "n": 2}

    def test_missing_config_attribute_is_none(self, tmp_path: Path) -> None:
        """A module without config loads as None."""
        assert load_python(tmp_path / "tool.config.py", "value = 1\n") is None

    def test_executes_given_content_not_file_on_disk(self, tmp_path: Path) -> None:
        """The content passed in is executed, whatever the file holds."""
        path = tmp_path / "tool.config.py"
        path.write_text("config = 'disk'\n")

        assert load_python(path, "config = 'given'\n") == "given"
        assert not (tmp_path / "__pycache__").exists()

    def test_file_dunder_is_set(self, tmp_path: Path) -> None:
        """Config modules can locate files relative to themselves."""
        path = tmp_path / "tool.config.py"

        assert load_python(path, "config = __file__\n") == str(path)

    def test_syntax_error_reports_line(self, tmp_path: Path) -> None:
        """SyntaxErrors carry their line number."""
        path = tmp_path / "tool.config.py"

        with pytest.raises(ConfigParseError) as exc_info:
            load_python(path, "config = {\n    'a': 1\n    'b': 2\n}\n")

        assert exc_info.value.line is not None
        assert isinstance(exc_info.value.cause, SyntaxError)

    def test_runtime_error_is_wrapped(self, tmp_path: Path) -> None:
        """Exceptions raised while executing become ConfigParseError."""
        path = tmp_path / "tool.config.py"

        with pytest.raises(ConfigParseError) as exc_info:
            load_python(path, "config = 1 / 0\n")

        assert isinstance(exc_info.value.cause, ZeroDivisionError)

    def test_does_not_leave_module_registered(self, tmp_path: Path) -> None:
        """Config modules are not left in sys.modules."""
        import sys

        before = set(sys.modules)
        load_python(tmp_path / "tool.config.py", "config = 1\n")

        assert not [name for name in set(sys.modules) - before if "configscout_" in name]


@pytest.mark.loaders
@pytest.mark.tra("Domain.Loaders")
@pytest.mark.tier(0)
class TestRegistry:
    """Tests for the extension-keyed loader registry."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            (".toolrc.json", ".json"),
            (".toolrc.YAML", ".yaml"),
            ("tool.config.py", ".py"),
            (".toolrc", NO_EXT),
            (".config/toolrc", NO_EXT),
            ("pyproject.toml", ".toml"),
        ],
    )
    def test_extension_of(self, path: str, expected: str) -> None:
        """The loader key is the lower-cased last suffix, or noExt."""
        assert extension_of(path) == expected

    def test_default_registry_contents(self) -> None:
        """Every built-in extension has a loader."""
        assert DEFAULT_LOADERS_SYNC[".json"] is load_json
        assert DEFAULT_LOADERS_SYNC[".yaml"] is load_yaml
        assert DEFAULT_LOADERS_SYNC[".yml"] is load_yaml
        assert DEFAULT_LOADERS_SYNC[".toml"] is load_toml
        assert DEFAULT_LOADERS_SYNC[".py"] is load_python
        assert DEFAULT_LOADERS_SYNC[NO_EXT] is load_yaml
        assert dict(DEFAULT_LOADERS) == dict(DEFAULT_LOADERS_SYNC)

    def test_defaults_are_read_only(self) -> None:
        """The shared default registry cannot be mutated."""
        with pytest.raises(TypeError):
            DEFAULT_LOADERS_SYNC[".ini"] = load_yaml  # type: ignore[index]

    def test_merge_overrides_one_extension(self) -> None:
        """An override replaces its own extension and keeps the rest."""

        def custom(filepath: Path, content: str) -> str:
            return content

        merged = merge_loaders(DEFAULT_LOADERS_SYNC, {".json": custom})

        assert merged[".json"] is custom
        assert merged[".yaml"] is load_yaml
        assert DEFAULT_LOADERS_SYNC[".json"] is load_json

    def test_merge_normalizes_extension_case(self) -> None:
        """Override keys are matched case-insensitively."""
        merged = merge_loaders(DEFAULT_LOADERS_SYNC, {".INI": load_yaml})

        assert resolve_loader(merged, "setup.ini") is load_yaml

    def test_merge_without_overrides_copies(self) -> None:
        """Merging None returns an equal, separate registry."""
        merged = merge_loaders(DEFAULT_LOADERS_SYNC, None)

        assert dict(merged) == dict(DEFAULT_LOADERS_SYNC)
        assert merged is not DEFAULT_LOADERS_SYNC

    def test_merge_rejects_non_callable(self) -> None:
        """Loaders must be callables."""
        with pytest.raises(ConfigurationError, match="not callable"):
            merge_loaders(DEFAULT_LOADERS_SYNC, {".ini": "yaml"})

    def test_resolve_missing_loader(self) -> None:
        """Unknown extensions raise MissingLoaderError naming the extension."""
        with pytest.raises(MissingLoaderError) as exc_info:
            resolve_loader(DEFAULT_LOADERS_SYNC, ".toolrc.ini")

        assert exc_info.value.extension == ".ini"
        assert exc_info.value.place == ".toolrc.ini"

    def test_resolve_missing_no_ext_loader(self) -> None:
        """Removing the noExt loader makes extensionless places unloadable."""
        loaders = {k: v for k, v in DEFAULT_LOADERS_SYNC.items() if k != NO_EXT}

        with pytest.raises(MissingLoaderError) as exc_info:
            resolve_loader(loaders, ".toolrc")

        assert exc_info.value.extension == NO_EXT
