from careerdna.services.fuzzy import best_fuzzy_match, fold_title


def test_best_match_within_threshold():
    assert best_fuzzy_match("mathematic", ["music", "mathematics"]) == "mathematics"
    assert best_fuzzy_match("biolgy", ["biology", "geology"]) == "biology"


def test_threshold_rounds_up():
    # max len 4 -> ceil(1.4) = 2 edits allowed
    assert best_fuzzy_match("abcd", ["abxy"]) == "abxy"
    assert best_fuzzy_match("abcd", ["axyz"]) is None


def test_kitten_sitting_is_three_edits():
    # max len 7 -> ceil(2.45) = 3 edits allowed
    assert best_fuzzy_match("kitten", ["sitting"]) == "sitting"
    assert best_fuzzy_match("kitten", ["sittingly"]) is None


def test_no_candidates_or_far_query():
    assert best_fuzzy_match("anything", []) is None
    assert best_fuzzy_match("xyz", ["mathematics"]) is None


def test_query_is_folded_before_matching():
    assert fold_title("  PHYSICS ") == "physics"
    assert fold_title(None) == ""
    assert best_fuzzy_match("  PHYSICS ", ["physics"]) == "physics"
    assert best_fuzzy_match("Biolgy ", ["biology"]) == "biology"


def test_first_candidate_wins_ties():
    assert best_fuzzy_match("cat", ["bat", "hat"]) == "bat"
