import pytest

from Calltips import get_calltip, word_at
from Keywords import BUILTIN, HELP, KEYWORD, names_in_category


@pytest.mark.parametrize("name", ["abs", "Measure", "WAIT"])
def test_get_calltip_known_builtin_returns_text(name: str) -> None:
    """Для известных встроенных функций должна возвращаться непустая подсказка."""
    tip = get_calltip(name)
    assert tip is not None
    # Подсказка начинается с имени функции и содержит скобки
    assert tip.startswith(name.lower())
    assert "(" in tip and ")" in tip


@pytest.mark.parametrize("name", ["definitely_no_such_function", "", None, "program"])
def test_get_calltip_unknown_name_returns_none(name) -> None:
    assert get_calltip(name) is None


def test_word_at_finds_identifier_around_column() -> None:
    line = "    x = sqrt(n)"
    assert word_at(line, 9) == "sqrt"
    assert word_at(line, 12) == "sqrt"
    assert word_at(line, 2) is None


def test_block_keywords_are_in_keyword_category() -> None:
    keywords = names_in_category(KEYWORD)
    for word in ("readout", "device", "arm", "then", "next", "end"):
        assert word in keywords
    assert "sqrt" not in keywords


def test_every_help_entry_is_a_builtin() -> None:
    assert sorted(HELP) == names_in_category(BUILTIN)
