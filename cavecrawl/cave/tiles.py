# Cell code constants centralized for modular imports
VOID = -1  # impassable filler outside the carved blob (never rendered)
FLOOR = 0
WALL = 1  # breakable after enough hits
BEDROCK = 2  # unbreakable skin between floor and void
START = 3
GOAL = 4
ITEM_BASE = 10  # item marker = ITEM_BASE + item id
TREASURE = 100  # generic treasure marker

# Glyphs used by GridBuffer.to_ascii / GenerationResult.to_ascii
GLYPHS = {
    VOID: " ",
    FLOOR: ".",
    WALL: "#",
    BEDROCK: "X",
    START: "S",
    GOAL: "G",
    TREASURE: "$",
}
ITEM_GLYPH = "k"

TILE_TYPES = ("void", "floor", "wall", "bedrock", "start", "goal", "treasure", "item")


def is_item_code(code: int) -> bool:
    """True for item markers (``>= ITEM_BASE``) excluding the treasure marker."""
    return code >= ITEM_BASE and code != TREASURE


def encode_item(item_id: int) -> int:
    return ITEM_BASE + item_id


def decode_item(code: int) -> int:
    return code - ITEM_BASE


def code_to_type(code: int) -> str:
    if code == VOID:
        return "void"
    if code == FLOOR:
        return "floor"
    if code == WALL:
        return "wall"
    if code == BEDROCK:
        return "bedrock"
    if code == START:
        return "start"
    if code == GOAL:
        return "goal"
    if code == TREASURE:
        return "treasure"
    if code >= ITEM_BASE:
        return "item"
    return "unknown"


def code_to_glyph(code: int) -> str:
    if code in GLYPHS:
        return GLYPHS[code]
    if is_item_code(code):
        return ITEM_GLYPH
    return "?"


__all__ = [
    "VOID",
    "FLOOR",
    "WALL",
    "BEDROCK",
    "START",
    "GOAL",
    "ITEM_BASE",
    "TREASURE",
    "is_item_code",
    "encode_item",
    "decode_item",
    "code_to_type",
    "code_to_glyph",
    "TILE_TYPES",
]
