import random
from typing import Optional


def can_scramble(word: Optional[str]) -> bool:
    # a distinct arrangement exists only with two or more different letters
    return bool(word) and len(set(word)) > 1


def scramble(word: Optional[str], rng: Optional[random.Random] = None) -> Optional[str]:
    """Return `word` with its letters shuffled into a different order.

    Words with no distinct arrangement ("", "a", "aaa") come back unchanged.
    Otherwise the letters are reshuffled until the sequence differs from the
    input; the output is not uniform over the distinct permutations.
    """
    if not can_scramble(word):
        return word
    rng = rng or random
    letters = list(word)
    while True:
        rng.shuffle(letters)
        scrambled = ''.join(letters)
        if scrambled != word:
            return scrambled
