import pytest
from workbench.commands import (
    LOCAL_EXECUTION_COMMANDS,
    CommandResolver,
    ShellCommand,
    sanitize_path,
)
from workbench.errors import UnsupportedLanguageError


def test_cpp_with_space_compiles_then_runs() -> None:
    resolver = CommandResolver()

    commands = resolver.resolve("cpp", "/tmp/My File.cpp")

    assert commands == ["clang /tmp/My\\ File.cpp", "wasm a.out"]


def test_python_single_command() -> None:
    resolver = CommandResolver()

    assert resolver.resolve("py", "/tmp/a.py") == ["python3 -u /tmp/a.py"]


@pytest.mark.parametrize("language_id", sorted(LOCAL_EXECUTION_COMMANDS))
def test_every_language_resolves_to_its_template_count(language_id: str) -> None:
    resolver = CommandResolver()

    commands = resolver.resolve(language_id, "/work/main file")

    assert len(commands) == len(LOCAL_EXECUTION_COMMANDS[language_id])
    assert commands


def test_unsupported_language_raises() -> None:
    resolver = CommandResolver()

    with pytest.raises(UnsupportedLanguageError) as excinfo:
        resolver.resolve("rust", "/tmp/main.rs")

    assert excinfo.value.language_id == "rust"
    assert not resolver.supports("rust")


def test_resolve_is_deterministic() -> None:
    resolver = CommandResolver()

    first = resolver.resolve("c", "/tmp/dir with spaces/x.c")
    second = resolver.resolve("c", "/tmp/dir with spaces/x.c")

    assert first == second == ["clang /tmp/dir\\ with\\ spaces/x.c", "wasm a.out"]


def test_sanitize_escapes_only_spaces() -> None:
    path = "/tmp/a b/$HOME;'quoted' & more.py"

    sanitized = sanitize_path(path)

    assert sanitized == "/tmp/a\\ b/$HOME;'quoted'\\ &\\ more.py"
    assert sanitized.replace("\\ ", " ") == path


def test_templates_without_placeholder_pass_through() -> None:
    resolver = CommandResolver({"build": ["make {url}", "make install"]})

    assert resolver.resolve("build", "/src/x") == ["make /src/x", "make install"]


def test_placeholder_replaced_once_per_template() -> None:
    resolver = CommandResolver({"echo": ["echo {url} {url}"]})

    assert resolver.resolve("echo", "/a b") == ["echo /a\\ b {url}"]


def test_table_is_read_only() -> None:
    resolver = CommandResolver()

    with pytest.raises(TypeError):
        resolver.table["rb"] = ("ruby {url}",)  # type: ignore[index]
    with pytest.raises(TypeError):
        LOCAL_EXECUTION_COMMANDS["rb"] = ("ruby {url}",)  # type: ignore[index]


def test_empty_template_list_rejected() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        CommandResolver({"py": []})


def test_languages_preserve_table_order() -> None:
    resolver = CommandResolver()

    assert resolver.languages() == ("py", "js", "c", "cpp", "php")


def test_resolve_argv_keeps_path_as_one_argument() -> None:
    resolver = CommandResolver()

    commands = resolver.resolve_argv("cpp", "/tmp/My File.cpp")

    assert commands == [
        ShellCommand(program="clang", args=("/tmp/My File.cpp",)),
        ShellCommand(program="wasm", args=("a.out",)),
    ]
    assert commands[0].argv == ["clang", "/tmp/My File.cpp"]
    assert commands[0].display() == "clang '/tmp/My File.cpp'"
