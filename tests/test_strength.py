import pytest

from registration.strength import password_score, score_password


def test_empty_password_has_no_strength():
    result = score_password("")
    assert result.level == 0
    assert result.label == ""


@pytest.mark.parametrize(
    "password, score",
    [
        ("abc", 1),
        ("ABC", 1),
        ("abcdefgh", 2),
        ("Abcdefgh", 3),
        ("Abcdefg1", 4),
        ("Abcdefg1!", 5),
        ("   ", 1),
    ],
)
def test_password_score_counts_rules(password, score):
    assert password_score(password) == score


@pytest.mark.parametrize(
    "password, level, label",
    [
        ("abc", 1, "Weak"),
        ("abcdefgh", 1, "Weak"),
        ("Abcdefgh", 2, "Medium"),
        ("Abcdefg1", 2, "Medium"),
        ("Ab1!", 2, "Medium"),
        ("Abcdefg1!", 3, "Strong"),
    ],
)
def test_classification(password, level, label):
    result = score_password(password)
    assert (result.level, result.label) == (level, label)


def test_non_ascii_letters_count_as_symbols():
    # only [a-zA-Z0-9] are alphanumeric for the rules
    assert password_score("é") == 1
    assert score_password("é").label == "Weak"
