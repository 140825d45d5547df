from plagcheck.text import normalize, normalize_text


def test_lowercases_ascii_and_drops_punctuation():
    assert normalize(b"Hello, World!") == b"hello world"


def test_drops_tabs_newlines_and_control_bytes():
    assert normalize(b"A\tB\nC\r\x00D\x7f") == b"abcd"


def test_keeps_digits_and_spaces():
    assert normalize(b"Route 66  North") == b"route 66  north"


def test_high_bytes_pass_through_untouched():
    assert normalize(b"\x80\xc3\x84\xff") == b"\x80\xc3\x84\xff"


def test_str_input_is_utf8_encoded():
    assert normalize("你好, World") == "你好".encode("utf-8") + b" world"


def test_accepts_bytearray_and_memoryview():
    assert normalize(bytearray(b"A-B")) == b"ab"
    assert normalize(memoryview(b"A-B")) == b"ab"


def test_empty_and_none():
    assert normalize(b"") == b""
    assert normalize(None) == b""
    assert normalize(b"!?.,;") == b""


def test_normalize_text_folds_only_ascii():
    assert normalize_text("ÄBC, déf!") == "Äbc déf"


def test_normalize_text_keeps_non_ascii_code_points():
    # full-width punctuation is outside ASCII and therefore kept
    assert normalize_text("你好，世界。") == "你好，世界。"
    assert normalize_text("Ab\tc\n") == "abc"
