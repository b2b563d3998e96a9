from utils.formatting import fmt_decimal, fmt_distance, fmt_grade, fmt_hms, fmt_pace, set_locale


def test_fmt_hms():
    assert fmt_hms(5895) == "1:38:15"
    assert fmt_hms(450) == "7:30"
    assert fmt_hms(59.6) == "1:00"
    assert fmt_hms(0) == "0:00"
    assert fmt_hms(-1) == "—"
    assert fmt_hms(float("nan")) == "—"
    assert fmt_hms(None) == "—"


def test_fmt_pace_and_grade():
    assert fmt_pace(450, "mi") == "7:30/mi"
    assert fmt_pace(None, "km") == "—"
    assert fmt_grade(-2.5) == "-2.5%"
    assert fmt_grade(None) == "—"


def test_en_distance_labels():
    set_locale("en_US")
    assert fmt_distance(13.1, "mi") == "13.10 mi"
    assert fmt_distance(3.1068559611866697, "mi") == "3.11 mi"
    assert fmt_distance(5, "km") == "5.00 km"
    assert fmt_decimal(1234.5, 1) == "1234.5"
    assert fmt_decimal(None) == ""


def test_locale_override_and_fallback():
    assert fmt_distance(13.1, "mi", locale="fr_FR") == "13,10 mi"
    set_locale("not_a_locale")
    assert fmt_distance(13.1, "mi") == "13.10 mi"
