"""Plain-language explanations of floral formulae.

explain() prints the formula followed by one line per symbol, each line
starting with the symbol exactly as render() writes it:

    X(↑),T5+1,A1-2,̅G3;capsule

    Explanation of floral formula above:

    A bisexual flower with both male (androecium) and female (gynoecium) parts.
    X(↑) = bilateral symmetry (zygomorphic), upwards
    T5+1 = tepals in two whorls, free
        whorl 1: five tepals
        whorl 2: one tepal
    ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from floral.formula import (
    INFINITE_THRESHOLD,
    Connation,
    FlowerType,
    Many,
    Ovary,
    Part,
    Range,
    Single,
    SymmetryKind,
    Unknown,
)
from floral.render import SYMMETRY_SEPARATOR, render, render_part, render_symmetry
from floral.ui import WRAP_WIDTH, wrap_text

if TYPE_CHECKING:
    from floral.formula import FloralPart, FloralRecord, PartCount, Symmetry, Whorl

NUMBER_WORDS = [
    "zero", "one", "two", "three", "four", "five", "six",
    "seven", "eight", "nine", "ten", "eleven", "twelve",
]

# singular, plural
PART_NOUNS = {
    Part.TEPALS: ("tepal", "tepals"),
    Part.CALYX: ("sepal", "sepals"),
    Part.PETALS: ("petal", "petals"),
    Part.STAMENS: ("stamen", "stamens"),
    Part.CARPELS: ("carpel", "carpels"),
}

FLOWER_TYPES = {
    FlowerType.BISEXUAL: "A bisexual flower with both male (androecium) and female (gynoecium) parts.",
    FlowerType.STAMINATE: "A staminate (male only) flower.",
    FlowerType.CARPELLATE: "A carpellate (female only) flower.",
}

SYMMETRIES = {
    SymmetryKind.RADIAL: "radial symmetry (actinomorphic)",
    SymmetryKind.BILATERAL: "bilateral symmetry (zygomorphic)",
    SymmetryKind.ASYMMETRIC: "no plane of symmetry (asymmetric)",
    SymmetryKind.SPIRAL: "parts arranged in a spiral",
    SymmetryKind.DISYMMETRIC: "two planes of symmetry (disymmetric)",
    SymmetryKind.UNKNOWN: "symmetry not recorded",
}

DIRECTIONS = {
    "up": "upwards",
    "down": "downwards",
    "left": "to the left",
    "right": "to the right",
    "upleft": "up and to the left",
    "upright": "up and to the right",
    "downleft": "down and to the left",
    "downright": "down and to the right",
}

CONNATIONS = {
    Connation.FREE: "free",
    Connation.FUSED: "fused (connate)",
    Connation.VARIABLE: "fused in some members of the group (variable connation)",
}

OVARIES = {
    Ovary.SUPERIOR: "a superior ovary",
    Ovary.INFERIOR: "an inferior ovary",
    Ovary.BOTH: "a superior or an inferior ovary",
}

FRUITS = {
    "achene": "small, dry, indehiscent, single seeded, thin walled",
    "berry": "fleshy, indehiscent, one to many seeded, sometimes heterogeneous (i.e. inner fleshy, outer leathery)",
    "berrylets": "as a berry, but an aggregate (i.e. developed from multiple carpels)",
    "capsule": "dry (rarely fleshy), dehiscent, two to many seeded",
    "caryopsis": "small, dry, indehiscent, with wall surrounding and fused to seed (grass specific)",
    "dehiscent drupe": "fleshy, indehiscent, outer part soft to fibrous, breaking apart to reveal nut-like pits",
    "drupe": "fleshy, indehiscent, with one or more hard pits",
    "drupelets": "as a drupe, but an aggregate (i.e. developed from multiple carpels)",
    "follicle": "dry to fleshy, from single carpel, releasing along a single longitudinal slit",
    "indehiscent pod": "dry, indehiscent, few to many seeds",
    "legume": "dry, from single carpel that opens along two longitudinal slits (mainly legumes)",
    "loment": "dry, from single carpel that transversely breaks into single seeded units",
    "nut": "dry, indehiscent, large, with thick and bony wall around a single seed",
    "aggregate of nuts": "as a nut, but an aggregate (i.e. developed from multiple carpels)",
    "pome": "fleshy, indehiscent, with soft outer part, and papery structure around seeds",
    "samara": "dry, indehiscent, winged, one to two seeds",
    "schizocarp": "dry to fleshy, from two to many carpels that dehisces into mericarps (one to two seeded)",
    "silique": "dehiscent, derived from two carpels, with two halves splitting from a partition",
    "utricle": "dry, indehiscent, small, with thin wall that is loose and free from a single seed",
}

FRUIT_ALIASES = {
    "berries": "berry",
    "fleshy capsule": "capsule",
    "drupes": "drupe",
    "follicles": "follicle",
    "samaras": "samara",
}

WHORL_INDENT = "    "


def number_word(number: int) -> str:
    if 0 <= number < len(NUMBER_WORDS):
        return NUMBER_WORDS[number]
    return str(number)


def describe_count(count: PartCount, part: Part, sterile: bool = False) -> str:
    """Describe a count of parts, e.g. "five stamens" or "one to two stamens"."""
    singular, plural = PART_NOUNS[part]
    adjective = "sterile " if sterile else ""

    if isinstance(count, Single):
        noun = singular if count.value == 1 else plural
        return f"{number_word(count.value)} {adjective}{noun}"
    if isinstance(count, Range):
        if count.high is None:
            return f"{number_word(count.low)} to many {adjective}{plural}"
        return f"{number_word(count.low)} to {number_word(count.high)} {adjective}{plural}"
    if isinstance(count, Many):
        return f"many (more than {INFINITE_THRESHOLD}) {adjective}{plural}"
    if isinstance(count, Unknown):
        return f"an unrecorded number of {adjective}{plural}"
    raise TypeError(f"not a part count: {count!r}")


def describe_whorl(whorl: Whorl, part: Part) -> str:
    return describe_count(whorl.count, part, whorl.sterile)


def explain_flower_type(record: FloralRecord) -> str:
    return FLOWER_TYPES[record.sexuality]


def describe_symmetry(symmetry: Symmetry) -> str:
    text = SYMMETRIES[symmetry.kind]
    if symmetry.kind is SymmetryKind.BILATERAL:
        text += f", {DIRECTIONS[symmetry.direction]}"
    return text


def explain_symmetry(record: FloralRecord) -> str:
    described = SYMMETRY_SEPARATOR.join(describe_symmetry(s) for s in record.symmetry)
    return f"{render_symmetry(record)} = {described}"


def explain_part(part: FloralPart) -> list[str]:
    """Explain one floral part: a summary line, then a line per whorl if several."""
    _, plural = PART_NOUNS[part.part]
    connation = CONNATIONS[part.connation]

    if len(part.whorls) == 1:
        summary = f"{describe_whorl(part.whorls[0], part.part)}, {connation}"
    else:
        summary = f"{plural} in {number_word(len(part.whorls))} whorls, {connation}"

    if part.ovary is not None:
        summary += f", with {OVARIES[part.ovary]}"

    lines = [f"{render_part(part)} = {summary}"]
    if len(part.whorls) > 1:
        for i, whorl in enumerate(part.whorls, start=1):
            lines.append(f"{WHORL_INDENT}whorl {i}: {describe_whorl(whorl, part.part)}")
    return lines


def explain_fruit(fruit: str) -> str:
    name = FRUIT_ALIASES.get(fruit.lower(), fruit.lower())
    description = FRUITS.get(name)
    if description is None:
        return f"{fruit} = fruit: {fruit}"
    return f"{fruit} = fruit: {name} - {description}"


def explain_adnation(record: FloralRecord) -> str:
    adnation = record.adnation
    if not adnation.is_present:
        return "No adnation between floral parts."

    names = [PART_NOUNS[part][1] for part in adnation.parts]
    joined = ", ".join(names[:-1]) + f" and {names[-1]}"
    variation = "varies" if adnation.variable else "does not vary"
    return f"Adnation: {joined} are fused to each other; this {variation} within the group."


def explain(record: FloralRecord, width: int = WRAP_WIDTH) -> str:
    """Explain every symbol of a record's floral formula.

    Args:
        record: The record to explain.
        width: Column at which explanation lines are wrapped.

    Returns:
        The formula (with its adnation line, if any), a blank line, then the
        explanation. Every comma-separated symbol of the formula and each
        fruit gets a line beginning with that symbol and " = ".
    """
    lines = [explain_flower_type(record), explain_symmetry(record)]
    for part in record.parts:
        lines.extend(explain_part(part))
    lines.extend(explain_fruit(fruit) for fruit in record.fruit)
    lines.append(explain_adnation(record))
    if record.notes:
        lines.append(f"Note: {record.notes}")

    wrapped = []
    for line in lines:
        if line.startswith(WHORL_INDENT):
            wrapped.append(
                wrap_text(line.strip(), width, indent=WHORL_INDENT, hanging=WHORL_INDENT * 2)
            )
        else:
            wrapped.append(wrap_text(line, width, indent="", hanging=WHORL_INDENT))

    return "\n".join(
        [render(record), "", "Explanation of floral formula above:", ""] + wrapped
    )
