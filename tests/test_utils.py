import re

import pytest

from gitview import utils


def test_quote_wraps_single_name():
    assert utils.quote("a b") == utils.QUOTE_CHAR + "a b" + utils.QUOTE_CHAR


def test_quote_list_joins_with_spaces():
    q = utils.QUOTE_CHAR
    assert utils.quote_list(["x", "y z"]) == f"{q}x{q} {q}y z{q}"


def test_quote_list_single_matches_quote():
    assert utils.quote_list(["file.txt"]) == utils.quote("file.txt")


@pytest.mark.parametrize(
    "name",
    ["pic.PNG", "a/b/c.jpg", "archive.tar", "x.gz", "file.bz2", "drawing.xcf", "img.pcx", "z.Z"],
)
def test_binary_files(name):
    assert utils.is_binary_file(name) is True


@pytest.mark.parametrize("name", ["main.cpp", "README", "notes.txt", "Makefile"])
def test_non_binary_files(name):
    assert utils.is_binary_file(name) is False


def test_image_files_are_binary_and_archives_are_not_images():
    assert utils.is_image_file("photo.jpeg") is True
    assert utils.is_binary_file("photo.jpeg") is True
    assert utils.is_image_file("data.zip") is False


def test_escape_html():
    assert utils.escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"


def test_color_match_empty_pattern_only_escapes():
    assert utils.color_match("a<b", "") == "a&lt;b"
    assert utils.color_match("a<b", None) == "a&lt;b"


def test_color_match_wraps_every_match():
    out = utils.color_match("foo bar foo", "foo")
    wrapped = '<b><font color="red">foo</font></b>'
    assert out == f"{wrapped} bar {wrapped}"


def test_color_match_accepts_compiled_pattern():
    out = utils.color_match("Fix BUG now", re.compile("bug", re.IGNORECASE))
    assert out == 'Fix <b><font color="red">BUG</font></b> now'


def test_color_match_does_not_recolor_inserted_markup():
    out = utils.color_match("red", "red")
    assert out.count("red") == 2
    assert out.startswith("<b><font color=")


def test_format_list_empty():
    assert utils.format_list([], "Parent") == ""


def test_format_list_one_line():
    out = utils.format_list(["a", "b"], "Parent")
    assert out == "<tr><td class='h'>Parent</td><td>a, b</td></tr>\n"


def test_format_list_multi_line():
    out = utils.format_list(["a", "b"], "Child", False)
    row = "<tr><td class='h'>Child</td><td>"
    assert out == row + "a</td></tr>\n" + row + "b</td></tr>\n"
    assert out.count("<tr>") == 2


def test_local_date_invalid_treated_as_zero():
    utils.local_date.cache_clear()
    assert utils.local_date("garbage") == utils.local_date("0")


def test_local_date_is_cached_and_distinct():
    utils.local_date.cache_clear()
    first = utils.local_date("1000000000")
    second = utils.local_date("1000000000")
    assert first == second
    assert utils.local_date.cache_info().hits == 1
    assert utils.local_date("1000000000") != utils.local_date("0")
    assert len(first) > 0