import pytest

from hephaestus import DFA, DFAOptimizer, minimize_dfa
from hephaestus.optimizer import find_reachable_states, is_empty
from conftest import all_strings


def mod_counter(n, accept):
    """Counts input length modulo ``n`` over the alphabet {a}."""
    return DFA.new(n, ["a"], [(i, "a", (i + 1) % n) for i in range(n)], 0, accept)


# --- Reachability ---
def test_reachable_states(even_ones_redundant):
    assert find_reachable_states(even_ones_redundant) == frozenset({0, 1, 2})
    assert even_ones_redundant.reachable_states() == frozenset({0, 1, 2})


def test_reachable_from_self_loop():
    dfa = DFA.new(3, ["x"], [(0, "x", 0), (1, "x", 2), (2, "x", 1)], 0, [1])
    assert dfa.reachable_states() == frozenset({0})
    assert dfa.is_empty() is True


def test_is_empty(zeroes, ones):
    assert is_empty(zeroes) is False
    assert zeroes.intersect(zeroes.complement()).is_empty() is True
    assert zeroes.intersect(ones).is_empty() is False


# --- Minimization ---
def test_minimize_redundant_and_unreachable(even_ones_redundant):
    minimized = even_ones_redundant.minimize()

    assert minimized.num_states == 2
    assert minimized.start == 0
    assert minimized.accept == frozenset({0})
    assert [tuple(t) for t in minimized.transitions()] == [
        (0, "0", 0), (0, "1", 1),
        (1, "0", 1), (1, "1", 0),
    ]
    assert str(minimized) == (
        "Alphabet: [0, 1]\n"
        "Start State: 0\n"
        "Accept States: {0}\n"
        "Transitions:\n"
        "  (0, '0') -> 0\n"
        "  (0, '1') -> 1\n"
        "  (1, '0') -> 1\n"
        "  (1, '1') -> 0\n"
    )


def test_minimize_collapses_reachable_accepting_states():
    dfa = DFA.new(
        4,
        ["a", "b"],
        [(0, "a", 1), (0, "b", 1),
         (1, "a", 0), (1, "b", 0),
         (2, "a", 2), (2, "b", 0),
         (3, "a", 2), (3, "b", 1)],
        0,
        [0, 1, 3],
    ).minimize()

    expected = "Alphabet: [a, b]\nStart State: 0\nAccept States: {0}\nTransitions:\n  (0, 'a') -> 0\n  (0, 'b') -> 0\n"
    assert str(dfa) == expected


def test_minimum_complement_intersection():
    d1 = DFA.new(2, ["a", "b"], [(0, "a", 1), (0, "b", 1), (1, "a", 0), (1, "b", 0)], 0, [0, 1])
    d2 = d1.complement().intersect(d1).minimize()

    expected = "Alphabet: [a, b]\nStart State: 0\nAccept States: {}\nTransitions:\n  (0, 'a') -> 0\n  (0, 'b') -> 0\n"
    assert str(d2) == expected


def test_minimize_splits_blocks():
    # length divisible by 3, counted modulo 6
    minimized = mod_counter(6, [0, 3]).minimize()

    assert minimized.num_states == 3
    assert minimized.accept == frozenset({0})
    assert [tuple(t) for t in minimized.transitions()] == [(0, "a", 2), (1, "a", 0), (2, "a", 1)]


@pytest.mark.parametrize("fixture_name", ["even_length", "zeroes", "ones", "short_strings", "even_ones_redundant"])
def test_minimize_preserves_language(request, fixture_name):
    dfa = request.getfixturevalue(fixture_name)
    minimized = dfa.minimize()
    assert minimized.num_states <= dfa.num_states
    for s in all_strings("01"):
        assert minimized.run(s) == dfa.run(s)


def test_minimize_is_idempotent(short_strings):
    once = short_strings.minimize()
    twice = once.minimize()
    assert once.num_states == twice.num_states == 4
    assert once.transitions() == twice.transitions()


def test_minimize_product(zeroes, ones):
    # union has 4 product states; the language needs 4 (start, all-0s, all-1s, dead)
    union = zeroes.union(ones)
    minimized = union.minimize()
    assert minimized.num_states == 4
    for s in all_strings("01"):
        assert minimized.run(s) == union.run(s)


def test_verbose_optimizer_logs(caplog, even_ones_redundant):
    with caplog.at_level("INFO", logger="hephaestus.optimizer"):
        minimize_dfa(even_ones_redundant, verbose=True)
    assert "[Optimizer] Minimized 4 states to 2" in caplog.text


def test_optimizer_returns_new_object(zeroes):
    minimized = DFAOptimizer().minimize(zeroes)
    assert minimized is not zeroes
    assert minimized.transitions() == zeroes.transitions()


# --- Equivalence ---
def test_equivalence_is_reflexive(short_strings, even_length):
    assert short_strings == short_strings
    assert even_length.equals(even_length)


def test_minimized_is_equivalent(even_ones_redundant, short_strings):
    assert even_ones_redundant == even_ones_redundant.minimize()
    assert short_strings.minimize() == short_strings
    assert mod_counter(6, [0, 3]) == mod_counter(3, [0])


def test_different_languages_are_not_equal(zeroes, ones, even_length):
    assert zeroes != ones
    assert not zeroes.equals(even_length)
    assert zeroes != zeroes.complement()


def test_equal_with_different_state_counts(zeroes):
    # all-0s with an extra unreachable accepting state
    bigger = DFA.new(3, ["0", "1"], [(0, "0", 0), (0, "1", 1), (1, "0", 1), (1, "1", 1), (2, "0", 2), (2, "1", 2)], 0, [0, 2])
    assert bigger == zeroes


def test_mismatched_alphabets_are_not_equivalent(zeroes):
    other = DFA.new(2, ["a", "b"], [(0, "a", 0), (0, "b", 1), (1, "a", 1), (1, "b", 1)], 0, [0])
    assert zeroes.equals(other) is False
    assert (zeroes == other) is False


def test_comparison_with_other_types(zeroes):
    assert (zeroes == "zeroes") is False
    assert zeroes != 3
