"""
Tests for social report classification and ranking

Covers the priority rules, the relevance score, the seeded-feed match
and the report/update orderings, with hypothesis for the order laws.
"""

from hypothesis import given, strategies as st
from reliefhub.core.classify import (
    classify_priority, classify_report, matches_report, process_reports, relevance_score,
)
from reliefhub.core.ranking import PRIORITY_ORDER, SEVERITY_ORDER, rank_reports, sort_updates
from tests.factories import FIXED_NOW, make_raw_report, make_social_report, make_update

PRIORITIES = ["urgent", "high", "medium", "low"]


class TestClassifyPriority:
    """Priority rule tests"""

    def test_urgent_wins_over_lower_rules(self):
        assert classify_priority("URGENT volunteer needed") == "urgent"

    def test_rules_in_order(self):
        assert classify_priority("Please evacuate now") == "urgent"
        assert classify_priority("Family trapped on roof") == "high"
        assert classify_priority("Offering rides tomorrow") == "medium"
        assert classify_priority("Calm night downtown") == "low"

    def test_high_beats_medium(self):
        assert classify_priority("need a volunteer driver") == "high"

    @given(text=st.text(alphabet="xyz ,.!", max_size=40))
    def test_text_without_rule_words_is_low(self, text):
        assert classify_priority(text) == "low"


class TestRelevanceScore:
    """Relevance score tests"""

    def test_post_match_scores_three(self):
        report = make_raw_report(post="need food water", hashtags=["#floodrelief"], location="Lower Manhattan")
        assert relevance_score(report, "food,shelter") == 3

    def test_hashtag_and_location_weights(self):
        report = make_raw_report(post="nothing here", hashtags=["#FloodRelief"], location="Flood Plain")
        assert relevance_score(report, "flood") == 2 + 1

    def test_terms_sum(self):
        report = make_raw_report(post="food and shelter", hashtags=["#shelter"])
        assert relevance_score(report, "food, shelter") == 3 + 3 + 2

    @given(post=st.text(max_size=60))
    def test_no_keywords_scores_one(self, post):
        report = make_raw_report(post=post)
        assert relevance_score(report, None) == 1
        assert relevance_score(report, " , ") == 1


class TestMatchesReport:
    """Seeded feed matching tests"""

    def test_keywords_match_post_or_hashtag(self):
        report = make_raw_report(post="Shelter open in Queens", hashtags=["#floodrelief"])
        assert matches_report(report, "queens", None)
        assert matches_report(report, "flood", None)
        assert not matches_report(report, "earthquake", None)

    def test_disaster_type_is_required_in_addition(self):
        report = make_raw_report(post="Need water", hashtags=["#fire"])
        assert matches_report(report, "water", "fire")
        assert not matches_report(report, "water", "flood")
        assert matches_report(report, None, "FIRE")

    def test_no_filters_match_everything(self):
        assert matches_report(make_raw_report(post="anything"), None, None)


class TestClassifyReport:
    """Report classification tests"""

    def test_derived_fields_are_computed(self):
        raw = make_raw_report(post="SOS stranded near the bridge", hashtags=["#help"])
        report = classify_report(raw, "bridge", FIXED_NOW)
        assert report.priority == "urgent"
        assert report.relevance_score == 3
        assert report.processed_at == FIXED_NOW
        assert report.post == raw.post

    def test_reclassifying_a_classified_report(self):
        report = make_social_report(priority="low", post="need help")
        again = classify_report(report, None, FIXED_NOW)
        assert again.priority == "high"

    def test_process_reports_ranks(self):
        raws = [
            make_raw_report(id="calm", post="all quiet"),
            make_raw_report(id="urgent", post="urgent: evacuate"),
            make_raw_report(id="help", post="need help"),
        ]
        assert [r.id for r in process_reports(raws, None, FIXED_NOW)] == ["urgent", "help", "calm"]


class TestRankReports:
    """Report ordering tests"""

    def test_relevance_breaks_priority_ties(self):
        reports = [
            make_social_report(id="u3", priority="urgent", relevance_score=3),
            make_social_report(id="h100", priority="high", relevance_score=100),
            make_social_report(id="u5", priority="urgent", relevance_score=5),
        ]
        assert [r.id for r in rank_reports(reports)] == ["u5", "u3", "h100"]

    @given(st.lists(st.tuples(st.sampled_from(PRIORITIES), st.integers(min_value=0, max_value=20)), max_size=15))
    def test_order_is_priority_then_relevance(self, specs):
        reports = [make_social_report(id=str(i), priority=p, relevance_score=s) for i, (p, s) in enumerate(specs)]
        ranked = rank_reports(reports)
        keys = [(PRIORITY_ORDER[r.priority], r.relevance_score) for r in ranked]
        assert keys == sorted(keys, reverse=True)

    @given(st.lists(st.sampled_from(PRIORITIES), max_size=15))
    def test_ties_keep_input_order(self, priorities):
        reports = [make_social_report(id=str(i), priority=p) for i, p in enumerate(priorities)]
        ranked = rank_reports(reports)
        for p in PRIORITIES:
            ids = [r.id for r in ranked if r.priority == p]
            assert ids == sorted(ids, key=int)


class TestSortUpdates:
    """Update ordering tests"""

    def test_severity_then_recency(self):
        items = [
            make_update(id="low-new", severity="low", minutes_ago=1),
            make_update(id="high-old", severity="high", minutes_ago=300),
            make_update(id="high-new", severity="high", minutes_ago=5),
            make_update(id="medium", severity="medium", minutes_ago=2),
        ]
        assert [u.id for u in sort_updates(items)] == ["high-new", "high-old", "medium", "low-new"]

    @given(st.lists(st.tuples(st.sampled_from(["high", "medium", "low"]), st.integers(min_value=0, max_value=50)),
                    max_size=15))
    def test_sorted_by_severity_then_published_at(self, specs):
        items = [make_update(id=str(i), severity=s, minutes_ago=m) for i, (s, m) in enumerate(specs)]
        ranked = sort_updates(items)
        keys = [(SEVERITY_ORDER[u.severity], u.published_at) for u in ranked]
        assert keys == sorted(keys, reverse=True)
        assert sorted(u.id for u in ranked) == sorted(u.id for u in items)

    def test_equal_keys_keep_input_order(self):
        items = [make_update(id=i, severity="medium", minutes_ago=0) for i in ("a", "b", "c")]
        assert [u.id for u in sort_updates(items)] == ["a", "b", "c"]

    def test_does_not_mutate_input(self):
        items = [make_update(id="a", severity="low"), make_update(id="b", severity="high")]
        sort_updates(items)
        assert [u.id for u in items] == ["a", "b"]
