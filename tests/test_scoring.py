import math

import pytest

from app.growth.reference import median_height
from app.growth.scoring import (
    STUNTING_LABELS,
    StuntingLabel,
    calculate_haz,
    classify_haz,
    estimate_weight_kg,
    haz_score,
    simplified_sd,
    validate_labels,
)


@pytest.mark.parametrize("sex", ["male", "female"])
def test_height_at_median_scores_zero(sex):
    for month in range(60):
        assert haz_score(median_height(sex, month), month, sex) == pytest.approx(0.0, abs=1e-12)


def test_sd_is_five_percent_of_median_with_one_cm_floor():
    assert simplified_sd(87.0) == pytest.approx(4.35)
    assert simplified_sd(10.0) == 1.0


def test_boy_24_months_90cm_is_normal():
    res = calculate_haz(90.0, 24, "male")
    assert res.median_cm == 87.9
    assert res.sd_cm == pytest.approx(4.395)
    assert res.haz == pytest.approx((90.0 - 87.9) / 4.395)
    assert res.category == "Normal"
    assert res.color == "#26a269"


def test_girl_12_months_70cm_is_stunted():
    res = calculate_haz(70.0, 12, "female")
    assert res.median_cm == 74.0
    assert res.sd_cm == pytest.approx(3.70)
    assert res.haz == pytest.approx(-1.081, abs=1e-3)
    assert res.category == "Stunted"
    assert res.color == "#ff9e00"


def test_haz_score_matches_calculate_haz():
    assert haz_score(65.0, 9.5, "female") == calculate_haz(65.0, 9.5, "female").haz


@pytest.mark.parametrize(
    "z, label",
    [
        (-5.0, "Severely Stunted"),
        (-2.0001, "Severely Stunted"),
        (-2.0, "Stunted"),
        (-1.5, "Stunted"),
        (-1.0, "Normal"),
        (0.0, "Normal"),
        (0.999, "Normal"),
        (1.0, "Tall"),
        (250.0, "Tall"),
        (math.inf, "Tall"),
    ],
)
def test_classification_boundaries(z, label):
    assert classify_haz(z).label == label


def test_nan_falls_back_to_last_label():
    assert classify_haz(float("nan")) == STUNTING_LABELS[-1]


def test_colors():
    assert [(l.label, l.color) for l in STUNTING_LABELS] == [
        ("Severely Stunted", "#e02401"),
        ("Stunted", "#ff9e00"),
        ("Normal", "#26a269"),
        ("Tall", "#3182ce"),
    ]


def test_label_table_must_increase():
    with pytest.raises(ValueError):
        validate_labels([StuntingLabel(1.0, "a", "#000"), StuntingLabel(1.0, "b", "#111")])
    with pytest.raises(ValueError):
        validate_labels([])


def test_weight_of_one_meter_is_the_bmi():
    assert estimate_weight_kg(100) == 15.0
    assert estimate_weight_kg(100, bmi=17.5) == 17.5
    assert estimate_weight_kg(90) == pytest.approx(12.15)


def test_weight_is_total_over_degenerate_heights():
    assert estimate_weight_kg(0) == 0.0
    assert estimate_weight_kg(-50) == pytest.approx(3.75)
