from bazaar_search.config import MatcherConfig
from bazaar_search.typos import TypoCorrector, edit_distance


def test_edit_distance_basic():
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("same", "same") == 0


def test_direct_corrections_come_first():
    c = TypoCorrector()
    assert c.correct_word("moble") == "mobile"
    assert c.correct_word("fone") == "phone"


def test_listed_variant_maps_to_canonical():
    c = TypoCorrector()
    assert c.correct_word("phon") == "mobile"
    assert c.correct_word("desk") == "table"


def test_canonical_terms_go_through_edit_distance():
    c = TypoCorrector()
    assert c.correct_word("laptop") == "laptop"
    assert c.correct_word("chair") == "chair"
    # "tablet" comes first in the dictionary and is one edit from "table"
    assert c.correct_word("table") == "tablet"


def test_edit_distance_to_canonical():
    c = TypoCorrector()
    assert c.correct_word("compter") == "computer"
    assert c.correct_word("chiar") == "chair"


def test_edit_distance_to_variant_for_short_words():
    c = TypoCorrector()
    # too short for the canonical check, one edit from the variant "tab"
    assert c.correct_word("tap") == "tablet"


def test_short_and_unknown_words_pass_through():
    c = TypoCorrector()
    assert c.correct_word("tb") == "tb"
    assert c.correct_word("sofa") == "sofa"


def test_distances_come_from_config():
    c = TypoCorrector(MatcherConfig(canonical_max_distance=0, variant_max_distance=0))
    assert c.correct_word("compter") == "compter"
    assert c.correct_word("tap") == "tap"


def test_correct_text_joins_words():
    c = TypoCorrector()
    assert c.correct_text("moble  laptp cover") == "mobile laptop cover"
