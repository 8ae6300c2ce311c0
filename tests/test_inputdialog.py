import pytest

from gitview.inputdialog import (
    InputTemplate,
    RefNameValidator,
    ValidationState,
    parse_string,
    parse_string_list,
)


def test_parse_string_plain_and_variable():
    assert parse_string("plain", {}) == "plain"
    assert parse_string("$REV", {"REV": "HEAD"}) == "HEAD"
    assert parse_string("$MISSING", {}) == ""
    assert parse_string("$ONE", {"ONE": ["only"]}) == "only"


def test_parse_string_list():
    assert parse_string_list("a,b,c", {}) == ["a", "b", "c"]
    assert parse_string_list("$LIST", {"LIST": ["x", "y"]}) == ["x", "y"]
    assert parse_string_list("$LIST", {}) == []
    assert parse_string_list("$S", {"S": "single"}) == ["single"]


@pytest.mark.parametrize("char", list(" ~^:?*["))
def test_fixup_removes_invalid_chars(char):
    fixed = RefNameValidator().fixup("a" + char + "b")
    assert char not in fixed
    assert fixed == "ab"


@pytest.mark.parametrize(
    "text, expected",
    [("a..b", "a.b"), ("a//b", "a/b"), ("x@{y", "x@y"), ("a/.b", "a/b")],
)
def test_fixup_sequences(text, expected):
    assert RefNameValidator().fixup(text) == expected


def test_validate_acceptable_name_unchanged():
    state, text, pos = RefNameValidator().validate("feature/x", 3)
    assert state is ValidationState.ACCEPTABLE
    assert text == "feature/x"
    assert pos == 3


def test_validate_intermediate_cases():
    v = RefNameValidator()
    assert v.validate("@", 1)[0] is ValidationState.INTERMEDIATE
    assert v.validate("", 0)[0] is ValidationState.INTERMEDIATE
    assert RefNameValidator(allow_empty=True).validate("", 0)[0] is ValidationState.ACCEPTABLE


def test_validate_moves_cursor_after_removal():
    state, text, pos = RefNameValidator().validate("a b", 2)
    assert text == "ab"
    assert pos == 1
    assert state is ValidationState.ACCEPTABLE


def test_validate_invalid_when_fixup_not_stable():
    state, text, _ = RefNameValidator().validate("a...b", 0)
    assert state is ValidationState.INVALID
    assert RefNameValidator().fixup(text) != text


def test_template_without_tokens_is_empty():
    tpl = InputTemplate("git status", {})
    assert tpl.empty()
    assert tpl.replace({}) == "git status"


def test_lineedit_token_parsed():
    tpl = InputTemplate("git branch %lineedit[ref]:name=topic%", {})
    assert not tpl.empty()
    field = tpl.fields["name"]
    assert field.kind == "lineedit"
    assert field.options == ["ref"]
    assert tpl.value("name") == "topic"
    assert field.validator is not None


def test_replace_token_and_repeats():
    tpl = InputTemplate("echo %branch=dev% and %branch%", {})
    assert tpl.replace({}) == "echo dev and dev"


def test_replace_uses_set_value_and_variables():
    tpl = InputTemplate("git checkout %lineedit:branch=main% $EXTRA", {})
    tpl.set_value("branch", "release")
    out = tpl.replace({"EXTRA": ["-q", "--force"]})
    assert out == "git checkout release -q --force"


def test_combobox_from_variable_list():
    tpl = InputTemplate("git merge %combobox[editable]:target=$BRANCHES%", {"BRANCHES": ["main", "dev"]})
    field = tpl.fields["target"]
    assert field.items == ["main", "dev"]
    assert tpl.value("target") == "main"
    assert "editable" in field.options


def test_listbox_has_no_value():
    tpl = InputTemplate("%listbox:files=a,b%", {})
    assert tpl.fields["files"].items == ["a", "b"]
    assert tpl.value("files") == ""


def test_unknown_type_is_skipped():
    tpl = InputTemplate("run %spinner:count=3%", {})
    assert tpl.empty()


def test_duplicate_token_keeps_first_definition():
    tpl = InputTemplate("%lineedit:x=1% %combobox:x=2%", {})
    assert tpl.value("x") == "1"
    assert tpl.fields["x"].kind == "lineedit"
    assert len(tpl.fields) == 1


def test_unknown_token_raises():
    tpl = InputTemplate("%a=1%", {})
    with pytest.raises(KeyError):
        tpl.value("b")
    with pytest.raises(KeyError):
        tpl.set_value("b", "x")


def test_template_validate_reflects_ref_field():
    tpl = InputTemplate("git branch %lineedit[ref]:name=topic%", {})
    assert tpl.validate() is True
    tpl.set_value("name", "@")
    assert tpl.validate() is False
    tpl.set_value("name", "")
    assert tpl.validate() is False