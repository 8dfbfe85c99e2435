from typing import Iterable, List


EPSILON = "ε"
EPSILON_SYMBOLS = frozenset({EPSILON, "e", "E", ""})


def is_epsilon(symbol: str) -> bool:
    return symbol in EPSILON_SYMBOLS


def alphabet_of(transitions: Iterable) -> List[str]:
    """Distinct non-epsilon symbols, in the order they first appear."""
    seen = {}
    for t in transitions:
        if not is_epsilon(t.symbol):
            seen.setdefault(t.symbol, None)
    return list(seen)


def state_name(index: int) -> str:
    # 0 -> A, 25 -> Z, 26 -> AA, 27 -> AB, ...
    if index < 0:
        raise ValueError(f"state index must be non-negative, got {index}")
    name = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        name = chr(ord("A") + rem) + name
    return name


def set_key(states: Iterable[str]) -> str:
    return ",".join(sorted(set(states)))
