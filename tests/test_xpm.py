import pytest

from cubraycaster.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    load_xpm,
    parse_color,
    parse_xpm,
    parse_xpm_text,
    quoted_lines,
    strip_comments,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 2 1",
". c #000000",
"# c #FFFFFF",
// pixels
".#",
"#."
};
"""


def test_strip_block_comment_keeps_length():
    text = "a/* x */b"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert "/*" not in result and "x" not in result
    assert result.startswith("a") and result.endswith("b")


def test_strip_keeps_comment_inside_quotes():
    text = '"a/*b*/"'
    assert strip_comments(text) == text


def test_strip_line_comment_including_newline():
    text = 'x // note\n"y"'
    result = strip_comments(text)
    assert "note" not in result
    assert "\n" not in result
    assert result.endswith('"y"')
    assert len(result) == len(text)


def test_quoted_lines():
    assert list(quoted_lines('x "ab" y "cd" "unterminated')) == ["ab", "cd"]


def test_parse_color_hex_and_names():
    assert parse_color("#FF0000", None) == 0xFF0000
    assert parse_color("red", None) == 0xFF0000
    assert parse_color("dark", "slate") == 0x2F4F4F
    assert parse_color("None", None) == -1
    assert parse_color("nosuchcolour", None) == 0


def test_parse_xpm_basic():
    image = parse_xpm(["2 2 2 1", ". c #000000", "# c #FFFFFF", ".#", "#."])
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0x000000
    assert image.pixel(1, 0) == 0xFFFFFF
    assert image.pixel(0, 1) == 0xFFFFFF
    assert image.pixels == (0x000000, 0xFFFFFF, 0xFFFFFF, 0x000000)


def test_parse_xpm_none_is_transparent():
    image = parse_xpm(["1 1 1 1", "x c None", "x"])
    assert image.pixel(0, 0) == TRANSPARENT == 0xFF000000


def test_parse_xpm_two_chars_per_pixel():
    image = parse_xpm(["2 1 2 2", "aa c #112233", "bb c blue", "bbaa"])
    assert image.pixels == (0xFF, 0x112233)


def test_parse_xpm_unknown_pixel_key_is_black():
    image = parse_xpm(["1 1 1 1", "a c #123456", "z"])
    assert image.pixel(0, 0) == 0


@pytest.mark.parametrize(
    "lines",
    [
        ["0 1 1 1", "a c #000000", "a"],
        ["1 1 1 1", "a #000000", "a"],
        ["1 1 1 1", "a c", "a"],
        ["2 1 1 1", "a c #000000", "a"],
        ["1 2 1 1", "a c #000000", "a"],
        ["1 1"],
        [],
    ],
)
def test_parse_xpm_errors(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_parse_xpm_text_with_comments():
    image = parse_xpm_text(SAMPLE)
    assert image == XpmImage(2, 2, (0x000000, 0xFFFFFF, 0xFFFFFF, 0x000000))


def test_load_xpm_roundtrip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE)
    assert load_xpm(path) == parse_xpm_text(SAMPLE)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")


def test_pixel_out_of_range():
    image = parse_xpm(["1 1 1 1", "a c #000000", "a"])
    with pytest.raises(IndexError):
        image.pixel(1, 0)