from near_resume.schemas.resume import Resume
from near_resume.services.metric_echo import dedupe_metric_echo, is_metric_echo, numeric_tokens, significant_words


def _bullet(text, metrics):
    return Resume.model_validate({"experience": [{"bullets": [{"text": text, "metrics": metrics}]}]})


def test_echoed_metric_is_dropped():
    """
    Test a metric restating the bullet's number is removed while qualitative tags stay.
    """
    resume = _bullet("Closed deals worth $500K.", ["$500K in deals", "Top performer"])
    result = dedupe_metric_echo(resume)

    assert result.experience[0].bullets[0].metrics == ["Top performer"]
    assert resume.experience[0].bullets[0].metrics == ["$500K in deals", "Top performer"]


def test_same_number_without_shared_word_is_kept():
    """
    Test a matching number alone is not enough.
    """
    assert not is_metric_echo("40% pipeline growth", "Managed 40 accounts across the northeast region.")


def test_shared_word_too_far_from_number_is_kept():
    """
    Test the shared word must sit near the number.
    """
    text = "Reduced churn 15% and later, after many quarterly process reviews, improved retention."
    assert not is_metric_echo("15% retention", text)


def test_shared_word_must_be_a_whole_word():
    """
    Test a metric word found only inside a longer word does not count.
    """
    assert not is_metric_echo("25% deal growth", "Grew the ideal pipeline 25%")
    assert is_metric_echo("25% deal growth", "Grew deal volume 25%")


def test_thousands_separators_are_ignored():
    """
    Test '1,200' in the text matches '1200' in the metric.
    """
    assert is_metric_echo("1200 customers", "Onboarded 1,200 customers in Q3.")


def test_percentages_and_decimals():
    """
    Test percent signs are stripped and decimals stay whole.
    """
    assert numeric_tokens("Up 12.5% to 3 regions") == [("12.5", 3), ("3", 12)]
    assert is_metric_echo("12.5% revenue lift", "Drove a 12.5% revenue lift.")


def test_metric_without_numbers_is_never_an_echo():
    """
    Test non-numeric metrics are always kept.
    """
    assert not is_metric_echo("President's Club", "Won President's Club.")


def test_significant_words_skip_stop_words_and_short_words():
    """
    Test stop words, short words and numbers are not significant.
    """
    assert significant_words("$2M in new ARR for the team") == ["arr", "team"]


def test_missing_metrics_become_empty_list():
    """
    Test a bullet without metrics ends with an empty list.
    """
    resume = Resume.model_validate({"experience": [{"bullets": [{"text": "Led sales."}]}]})
    assert dedupe_metric_echo(resume).experience[0].bullets[0].metrics == []
