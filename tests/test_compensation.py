from __future__ import annotations

from ats_engine.compensation import apply_compensation, parse_compensation
from ats_engine.models import Equity, new_job_record


def test_parse_dollar_k_range():
    comp = parse_compensation("$155K - $190K")

    assert comp.parsed is True
    assert comp.currency == "$"
    assert comp.min_salary == 155000
    assert comp.max_salary == 190000
    assert comp.offers_equity is False


def test_parse_euro_range_with_equity():
    comp = parse_compensation("€185K - €317K, plus equity")

    assert comp.parsed is True
    assert comp.currency == "€"
    assert comp.min_salary == 185000
    assert comp.max_salary == 317000
    assert comp.offers_equity is True


def test_parse_non_numeric_text():
    comp = parse_compensation("competitive")

    assert comp.parsed is False
    assert comp.min_salary == 0
    assert comp.max_salary == 0


def test_single_amount_fills_both_bounds():
    comp = parse_compensation("USD$120,000")

    assert comp.parsed is True
    assert comp.currency == "USD$"
    assert comp.min_salary == 120000
    assert comp.max_salary == 120000


def test_equity_flag_without_amount():
    comp = parse_compensation("Includes equity")

    assert comp.parsed is False
    assert comp.offers_equity is True


def test_apply_compensation_sets_record_fields():
    job = new_job_record("ashby")
    apply_compensation(job, "£60K – £80K • Offers Equity")

    assert job.min_compensation == 60000
    assert job.max_compensation == 80000
    assert job.compensation_unit == "£"
    assert job.equity == Equity.OFFERED


def test_apply_compensation_leaves_record_alone_when_unparsed():
    job = new_job_record("bamboo")
    apply_compensation(job, "DOE")

    assert job.min_compensation == 0
    assert job.max_compensation == 0
    assert job.compensation_unit is None
    assert job.equity == Equity.UNKNOWN


def test_currency_falls_back_to_second_side():
    comp = parse_compensation("100K - $150K")

    assert comp.parsed is True
    assert comp.currency == "$"
    assert comp.min_salary == 100000
    assert comp.max_salary == 150000


def test_first_currency_wins_when_sides_disagree():
    comp = parse_compensation("$100K - €150K")

    assert comp.currency == "$"
    assert comp.max_salary == 150000
