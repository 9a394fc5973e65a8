import pytest
from pydantic import ValidationError

from classdebug.config.debug_config import (
    DEFAULT_CLASS_NAME,
    DebugConfig,
    DebugTarget,
    build_parser,
    parse_config,
)

# -------------------------------------------------------------------------
# Tests for DebugConfig
# -------------------------------------------------------------------------

def test_defaults():
    """Defaults select the FIELDS report of the built-in string class."""
    config = DebugConfig()
    assert config.file == ""
    assert config.target is DebugTarget.FIELDS
    assert config.class_name == DEFAULT_CLASS_NAME == "builtins.str"
    assert config.external_unit is None
    assert config.log_level == "INFO"


def test_class_alias_and_field_name():
    """The reserved word 'class' is accepted as an alias of class_name."""
    assert DebugConfig(**{"class": "json.JSONDecoder"}).class_name == "json.JSONDecoder"
    assert DebugConfig(class_name="json.JSONDecoder").class_name == "json.JSONDecoder"
    assert DebugConfig(class_name="a.B").model_dump(by_alias=True)["class"] == "a.B"


def test_class_name_is_stripped():
    assert DebugConfig(class_name="  collections.OrderedDict ").class_name == "collections.OrderedDict"


@pytest.mark.parametrize("class_name", ["", "   "])
def test_blank_class_name_rejected(class_name):
    with pytest.raises(ValidationError):
        DebugConfig(class_name=class_name)


def test_config_is_frozen():
    config = DebugConfig()
    with pytest.raises(ValidationError):
        config.class_name = "other.Class"


def test_target_from_string():
    assert DebugConfig(target="METHODS").target is DebugTarget.METHODS


def test_target_is_case_sensitive():
    with pytest.raises(ValidationError):
        DebugConfig(target="methods")


def test_external_unit():
    assert DebugConfig(file="lib/shapes.py").external_unit == "lib/shapes.py"


def test_log_level_normalised():
    assert DebugConfig(log_level=" debug ").log_level == "DEBUG"


def test_target_str_is_its_name():
    assert str(DebugTarget.CONSTRUCTORS) == "CONSTRUCTORS"
    assert f"{DebugTarget.FIELDS}" == "FIELDS"

# -------------------------------------------------------------------------
# Tests for parse_config
# -------------------------------------------------------------------------

def test_parse_defaults():
    assert parse_config([]) == DebugConfig()


def test_parse_all_options():
    config = parse_config([
        "--file", "plugins/shapes.py",
        "--target", "CONSTRUCTORS",
        "--class", "shapes.Circle",
        "--log-level", "DEBUG",
        "--log-file", "logs/run.log",
    ])
    assert config.file == "plugins/shapes.py"
    assert config.target is DebugTarget.CONSTRUCTORS
    assert config.class_name == "shapes.Circle"
    assert config.log_level == "DEBUG"
    assert config.log_file == "logs/run.log"


def test_equals_syntax():
    config = parse_config(["--class=collections.OrderedDict", "--target=METHODS"])
    assert config.class_name == "collections.OrderedDict"
    assert config.target is DebugTarget.METHODS


def test_unrecognised_options_are_ignored():
    config = parse_config(["--verbose", "--class", "json.JSONEncoder", "--colour", "always", "extra"])
    assert config.class_name == "json.JSONEncoder"
    assert config.target is DebugTarget.FIELDS


def test_invalid_target_exits():
    with pytest.raises(SystemExit) as exc_info:
        parse_config(["--target", "fields"])
    assert exc_info.value.code == 2


def test_blank_class_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_config(["--class", " "])
    assert exc_info.value.code == 2
    assert "non-empty" in capsys.readouterr().err


def test_parser_choices():
    parser = build_parser()
    target_action = next(a for a in parser._actions if a.dest == "target")
    assert target_action.choices == ["FIELDS", "METHODS", "CONSTRUCTORS"]
