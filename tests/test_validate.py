import dataclasses

import pytest

from dmgcreator.errors import DmgCreatorError
from dmgcreator.validate import (
    FieldError,
    FieldErrors,
    check,
    get_field_errors,
    is_field_errors,
)


@dataclasses.dataclass
class Params:
    app_name: str = dataclasses.field(default="", metadata={"validate": "required", "json": "AppName"})
    icon_path: str = dataclasses.field(default="", metadata={"validate": "required"})
    hidden: str = dataclasses.field(default="", metadata={"validate": "required", "json": "-"})
    note: str = ""


def test_valid_instance_passes():
    assert check(Params(app_name="a", icon_path="b", hidden="c")) is None


def test_missing_field_reported_with_json_name():
    with pytest.raises(FieldErrors) as excinfo:
        check(Params(icon_path="b", hidden="c"))
    assert str(excinfo.value) == "AppName: AppName is a required field"
    assert excinfo.value.fields() == {"AppName": "AppName is a required field"}


def test_dash_json_name_falls_back_to_attribute_name():
    with pytest.raises(FieldErrors) as excinfo:
        check(Params(app_name="a", icon_path="b"))
    assert list(excinfo.value.fields()) == ["hidden"]


def test_all_failures_collected_in_field_order():
    with pytest.raises(FieldErrors) as excinfo:
        check(Params())
    assert [item.field for item in excinfo.value] == ["AppName", "icon_path", "hidden"]
    assert len(excinfo.value) == 3
    assert str(excinfo.value).count("; ") == 2


def test_field_errors_string_and_fields():
    errors = FieldErrors([FieldError("a", "x"), FieldError("b", "y")])
    assert str(errors) == "a: x; b: y"
    assert errors.fields() == {"a": "x", "b": "y"}


def test_undefined_rule_raises():
    @dataclasses.dataclass
    class Bad:
        value: str = dataclasses.field(default="v", metadata={"validate": "email"})

    with pytest.raises(ValueError, match="undefined validation rule"):
        check(Bad())


def test_non_dataclass_rejected():
    with pytest.raises(TypeError):
        check({"app_name": ""})
    with pytest.raises(TypeError):
        check(Params)


def test_is_field_errors_through_wrapping():
    inner = FieldErrors([FieldError("a", "x")])
    wrapped = DmgCreatorError("error when validating input parameters", inner)
    assert is_field_errors(wrapped) is True
    assert get_field_errors(wrapped) is inner
    assert str(wrapped) == "error when validating input parameters: a: x"


def test_is_field_errors_false_for_other_errors():
    err = DmgCreatorError("outer", OSError("some error"))
    assert is_field_errors(err) is False
    assert get_field_errors(err) is None
    assert get_field_errors(None) is None