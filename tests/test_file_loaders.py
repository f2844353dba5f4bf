import pytest

from cliframe.apply import FlagKind, InputSourceFlag, init_input_source_with_context
from cliframe.file_loaders import (
    load_data_from,
    toml_source_from_file,
    toml_source_from_flag_func,
    yaml_source_from_file,
    yaml_source_from_flag_func,
)
from cliframe.input_source import InputSourceError


class _Context:
    def __init__(self, values):
        self._values = values

    def is_set(self, name):
        return name in self._values

    def string(self, name):
        return str(self._values.get(name, ""))


FORMATS = {
    "yaml": ("current.yaml", "test: 15", "top:\n  test: 15", yaml_source_from_flag_func),
    "toml": ("current.toml", "test = 15", "[top]\ntest = 15", toml_source_from_flag_func),
}


def _run(tmp_path, monkeypatch, fmt, nested, *, default=None, env=None, cli=None):
    filename, simple, nested_text, factory = FORMATS[fmt]
    path = tmp_path / filename
    path.write_text(nested_text if nested else simple)
    name = "top.test" if nested else "test"
    monkeypatch.delenv("THE_TEST", raising=False)
    values = {}
    if default is not None:
        values[name] = default
    if env is not None:
        monkeypatch.setenv("THE_TEST", env)
        values[name] = env
    ctx_values = {"load": str(path)}
    if cli is not None:
        values[name] = cli
        ctx_values[name] = cli
    flag = InputSourceFlag(
        name, FlagKind.INT, env_vars=["THE_TEST"] if env is not None else [], flag_set=values
    )
    before = init_input_source_with_context([flag], factory("load"))
    before(_Context(ctx_values))
    return values.get(name)


@pytest.mark.parametrize("fmt", ["yaml", "toml"])
@pytest.mark.parametrize("nested", [False, True])
def test_file_value_applied(tmp_path, monkeypatch, fmt, nested):
    assert _run(tmp_path, monkeypatch, fmt, nested) == "15"


@pytest.mark.parametrize("fmt", ["yaml", "toml"])
@pytest.mark.parametrize("nested", [False, True])
def test_env_var_wins(tmp_path, monkeypatch, fmt, nested):
    assert _run(tmp_path, monkeypatch, fmt, nested, env="10") == "10"


@pytest.mark.parametrize("fmt", ["yaml", "toml"])
@pytest.mark.parametrize("nested", [False, True])
def test_specified_flag_wins(tmp_path, monkeypatch, fmt, nested):
    assert _run(tmp_path, monkeypatch, fmt, nested, cli="7") == "7"


@pytest.mark.parametrize("fmt", ["yaml", "toml"])
@pytest.mark.parametrize("nested", [False, True])
def test_file_beats_default(tmp_path, monkeypatch, fmt, nested):
    assert _run(tmp_path, monkeypatch, fmt, nested, default="7") == "15"


@pytest.mark.parametrize("fmt", ["yaml", "toml"])
@pytest.mark.parametrize("nested", [False, True])
def test_env_beats_default_and_file(tmp_path, monkeypatch, fmt, nested):
    assert _run(tmp_path, monkeypatch, fmt, nested, default="7", env="11") == "11"


def test_load_missing_file(tmp_path):
    missing = str(tmp_path / "nope.yaml")
    with pytest.raises(InputSourceError, match="does not exist"):
        load_data_from(missing)


def test_load_unsupported_scheme():
    with pytest.raises(InputSourceError, match="unsupported"):
        load_data_from("ftp://example.com/x.yaml")


def test_load_reads_bytes(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"abc")
    assert load_data_from(str(path)) == b"abc"


def test_yaml_missing_file_wrapped(tmp_path):
    with pytest.raises(InputSourceError, match="Unable to load Yaml file"):
        yaml_source_from_file(str(tmp_path / "none.yaml"))


def test_toml_source_values_and_source(tmp_path):
    path = tmp_path / "c.toml"
    path.write_text('name = "x"\nratio = 1.5\n')
    src = toml_source_from_file(str(path))
    assert src.string("name") == "x"
    assert src.floating("ratio") == 1.5
    assert src.source == str(path)


def test_toml_unsupported_type(tmp_path):
    path = tmp_path / "d.toml"
    path.write_text("when = 1979-05-27\n")
    with pytest.raises(InputSourceError, match="Unable to load TOML file"):
        toml_source_from_file(str(path))


def test_flag_func_default_when_unset():
    src = yaml_source_from_flag_func("load")(_Context({}))
    assert src.source == ""
    assert src.integer("anything") == 0