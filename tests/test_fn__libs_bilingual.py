from heatlibs.fn__libs_bilingual import LABELS, label


def test_label_explicit_language():
    assert label("years", "EN") == "Years"
    assert label("years", "IT") == "Anni"


def test_label_unknown_key_returns_key():
    assert label("no_such_label", "EN") == "no_such_label"


def test_label_unknown_language_falls_back_to_english():
    assert label("months", "DE") == "Months"


def test_languages_share_keys():
    assert set(LABELS["EN"]) == set(LABELS["IT"])
