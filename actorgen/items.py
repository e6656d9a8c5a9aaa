import json

# The starting equipment of every n00b adventurer, as `item` / `description` pairs.
STARTING_ITEMS = r"""{
    "health_potion": "An health potion",
    "c++_sword": "Trusty, not rusty, kinda verbose too. A legacy of the past",
    "c++_shield": "That's what I call a proper header!"
}"""


def items(*pairs):
    """
    Builds an item list from `(name, description)` pairs.

        items(("mana_potion", "A mana potion"), ("rusty_sword", "Rusty, thus blazingly fast!"))

    At least one pair is required. Names and descriptions are stringified;
    a repeated name keeps its last description.
    """
    if not pairs:
        raise TypeError("items() requires at least one (name, description) pair")
    result = {}
    for pair in pairs:
        # "ab" would otherwise unpack to ("a", "b").
        if isinstance(pair, (str, bytes)):
            raise TypeError(f"expected a (name, description) pair, got {pair!r}")
        try:
            name, description = pair
        except (TypeError, ValueError):
            raise TypeError(f"expected a (name, description) pair, got {pair!r}") from None
        result[str(name)] = str(description)
    return result


def starting_items():
    return json.loads(STARTING_ITEMS)
