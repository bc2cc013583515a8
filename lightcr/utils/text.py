import re

import inflect

__all__ = ['pluralize', 'is_plural', 'is_pascal_case']

_p = inflect.engine()
_PASCAL_CASE = re.compile(r'^[A-Z][A-Za-z0-9]*$')

# english plurals never end like this: ingress, status, axis
SINGULAR_ENDINGS = ('ss', 'us', 'is')


def pluralize(word: str) -> str:
    """Return the English plural of the singular noun `word`, always in lower case.
    Example: `Policy` -> `policies`.

    The result is undefined when `word` is already plural.
    """
    word = word.lower()
    if not word:
        return word
    return _p.plural_noun(word)


def is_plural(word: str) -> bool:
    """Best-effort check that `word` is already in plural form.

    Only regular plurals ending in `s` are detected (`Foos`, `Policies`, `Boxes`). Acronyms,
    nouns whose singular ends in `s` (`Gas`, `Lens`) and nouns with identical singular and
    plural forms (`Sheep`) are never reported as plural.
    """
    if not word or word.isupper():
        return False
    word = word.lower()
    if not word.endswith('s') or word.endswith(SINGULAR_ENDINGS):
        return False
    if _p.plural_noun(word) == f"{word}es":
        # inflect knows it as a singular: gas -> gases
        return False
    singular = _p.singular_noun(word)
    if not singular or singular == word:
        return False
    return _p.plural_noun(singular) == word


def is_pascal_case(word: str) -> bool:
    return bool(_PASCAL_CASE.match(word))
