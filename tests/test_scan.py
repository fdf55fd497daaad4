import io

import pytest

from kpl.errors import CompileError
from kpl.scan import main, scan_file


def _scan(tmp_path, text):
    path = tmp_path / "source.kpl"
    path.write_text(text, encoding="latin-1")
    out = io.StringIO()
    scan_file(path, out)
    return out.getvalue().splitlines()


def _kinds(lines):
    return [line.split(":", 1)[1] for line in lines]


def test_positions_of_simple_assignment(tmp_path):
    assert _scan(tmp_path, "a := 1") == ["1-1:TK_IDENT(a)", "1-3:SB_ASSIGN", "1-6:TK_NUMBER(1)"]


def test_program_header(tmp_path):
    lines = _scan(tmp_path, "PROGRAM Example;")
    assert _kinds(lines) == ["KW_PROGRAM", "TK_IDENT(Example)", "SB_SEMICOLON"]


def test_keywords_are_case_insensitive_and_idents_keep_case(tmp_path):
    lines = _scan(tmp_path, "begin End MyVar")
    assert _kinds(lines) == ["KW_BEGIN", "KW_END", "TK_IDENT(MyVar)"]


def test_end_of_file_is_not_listed(tmp_path):
    lines = _scan(tmp_path, "x\n")
    assert len(lines) == 1
    assert all("TK_EOF" not in line for line in lines)


def test_empty_file_lists_nothing(tmp_path):
    assert _scan(tmp_path, "   \n\t") == []


def test_line_numbers_advance(tmp_path):
    lines = _scan(tmp_path, "a\nb\nc")
    assert [line.split("-", 1)[0] for line in lines] == ["1", "2", "3"]


def test_operators(tmp_path):
    lines = _scan(tmp_path, "+ - * / = <= < >= > != , . : ; ( )")
    assert _kinds(lines) == [
        "SB_PLUS", "SB_MINUS", "SB_TIMES", "SB_SLASH", "SB_EQ", "SB_LE", "SB_LT",
        "SB_GE", "SB_GT", "SB_NEQ", "SB_COMMA", "SB_PERIOD", "SB_COLON",
        "SB_SEMICOLON", "SB_LPAR", "SB_RPAR",
    ]


def test_selectors(tmp_path):
    assert _kinds(_scan(tmp_path, "a(.1.)")) == [
        "TK_IDENT(a)", "SB_LSEL", "TK_NUMBER(1)", "SB_RSEL",
    ]


def test_comment_is_skipped(tmp_path):
    assert _kinds(_scan(tmp_path, "a (* note *) b")) == ["TK_IDENT(a)", "TK_IDENT(b)"]


def test_unterminated_comment(tmp_path):
    with pytest.raises(CompileError, match="End of comment expected!"):
        _scan(tmp_path, "a (* never closed")


def test_char_constant(tmp_path):
    assert _kinds(_scan(tmp_path, "'z'")) == ["TK_CHAR('z')"]


def test_invalid_char_constant(tmp_path):
    with pytest.raises(CompileError, match="Invalid const char!"):
        _scan(tmp_path, "'ab'")


def test_identifier_length_limit(tmp_path):
    assert _kinds(_scan(tmp_path, "a" * 15)) == [f"TK_IDENT({'a' * 15})"]
    with pytest.raises(CompileError, match="Identification too long!"):
        _scan(tmp_path, "a" * 16)


def test_number_length_limit(tmp_path):
    assert _kinds(_scan(tmp_path, "1234567890")) == ["TK_NUMBER(1234567890)"]
    with pytest.raises(CompileError, match="Value of integer number exceeds the range!"):
        _scan(tmp_path, "12345678901")


def test_lone_exclamation_is_invalid(tmp_path):
    with pytest.raises(CompileError, match="Invalid symbol!"):
        _scan(tmp_path, "a ! b")


def test_unknown_character_is_invalid(tmp_path):
    with pytest.raises(CompileError, match="Invalid symbol!"):
        _scan(tmp_path, "#")


def test_scan_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        scan_file(tmp_path / "missing.kpl", io.StringIO())


def test_main_without_arguments(capsys):
    assert main([]) == -1
    assert capsys.readouterr().out == "scanner: no input file.\n"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.kpl")]) == -1
    assert capsys.readouterr().out == "Can't read input file!\n"


def test_main_lists_tokens(tmp_path, capsys):
    path = tmp_path / "ok.kpl"
    path.write_text("VAR x;")
    assert main([str(path)]) == 0
    assert _kinds(capsys.readouterr().out.splitlines()) == [
        "KW_VAR", "TK_IDENT(x)", "SB_SEMICOLON",
    ]


def test_main_stops_at_error(tmp_path, capsys):
    path = tmp_path / "bad.kpl"
    path.write_text("x #")
    assert main([str(path)]) == -1
    lines = capsys.readouterr().out.splitlines()
    assert _kinds(lines[:1]) == ["TK_IDENT(x)"]
    assert lines[-1].endswith(":Invalid symbol!")