"""Extract the names of tokens an ability creates.

"Whenever ~ attacks, create a 1/1 white Rabbit creature token." yields
``["1/1 white Rabbit creature token"]``; "create a token that's a copy of it"
yields ``["Copy token"]``.
"""

import re
from typing import List

_KEYWORD_OR_ABILITY = r'(?:(?:\w+(?: strike)?)|(?:".+?"))'

_CREATE_TOKEN = re.compile(
    "".join(
        [
            r"[cC]reates?",
            r"( [A-Z]\w*,)?",
            r" (?:a(?: number of)?|that many|X|one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|thirteen)",
            r"(?: tapped and attacking)?",
            r"(?: tapped)?",
            r"((?: [a-zA-Z0-9/ ]+)? token)",
            r"(?:s)?",
            r"( with " + _KEYWORD_OR_ABILITY + r"?(?: and " + _KEYWORD_OR_ABILITY + r"?)*)?",
            r"( that['’]s a copy)?",
        ]
    )
)

COPY_TOKEN = "Copy token"
MAX_DEPTH = 2


def extract_tokens_from_ability(ability: str, depth: int = 0) -> List[str]:
    """
    Find token names created by an ability.

    Tokens created by a created token's own text (quoted abilities) are found
    by re-scanning each result, up to MAX_DEPTH levels.

    Args:
        ability: Rules text of a single ability.
        depth: Current recursion depth.

    Returns:
        Token names in order of appearance, including nested ones.
    """
    results: List[str] = []
    for match in _CREATE_TOKEN.finditer(ability):
        name = "".join(g for g in match.groups() if g).strip()
        if name in ("token that's a copy", "token that’s a copy"):
            name = COPY_TOKEN
        results.append(name)
        if depth < MAX_DEPTH:
            results.extend(extract_tokens_from_ability(name, depth + 1))
    return results
