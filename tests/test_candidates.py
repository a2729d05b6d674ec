import re

from mumu_probe.core.candidates import CANDIDATE_COUNT, generate_candidates


def test_generates_every_second_of_the_day_once() -> None:
    candidates = list(generate_candidates())
    assert len(candidates) == CANDIDATE_COUNT == 86400
    assert len(set(candidates)) == 86400


def test_candidates_are_six_zero_padded_digits() -> None:
    pattern = re.compile(r"^\d{6}$")
    for candidate in generate_candidates():
        assert pattern.match(candidate)
        hour, minute, second = int(candidate[:2]), int(candidate[2:4]), int(candidate[4:])
        assert 0 <= hour <= 23
        assert 0 <= minute <= 59
        assert 0 <= second <= 59


def test_enumeration_is_hour_major() -> None:
    candidates = list(generate_candidates())
    assert candidates[:3] == ["000000", "000001", "000002"]
    assert candidates[60] == "000100"
    assert candidates[3600] == "010000"
    assert candidates[-1] == "235959"
    assert candidates == sorted(candidates)


def test_generator_is_restartable() -> None:
    first = generate_candidates()
    next(first)
    assert next(generate_candidates()) == "000000"
    assert list(generate_candidates()) == list(generate_candidates())
