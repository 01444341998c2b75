"""
Standard Board - Hex map layout and neighbour computation.

Maps are written as rows of one-letter codes separated by spaces:

    P plains   S swamp   L lakes   F forest
    M mountains   W wasteland   D desert   ~ river

Rows use "odd-r" offset coordinates: odd rows are shifted half a hex to
the right. Terrain ids run row by row from 0.
"""

from __future__ import annotations
import random

from ...engine_core.state import Board, StructureType, Terrain, TerrainType

TERRAIN_CODES = {
    "P": TerrainType.PLAINS,
    "S": TerrainType.SWAMP,
    "L": TerrainType.LAKES,
    "F": TerrainType.FOREST,
    "M": TerrainType.MOUNTAINS,
    "W": TerrainType.WASTELAND,
    "D": TerrainType.DESERT,
    "~": TerrainType.RIVER,
}

TERRAIN_LETTERS = {t: code for code, t in TERRAIN_CODES.items()}

STRUCTURE_LETTERS = {
    StructureType.DWELLING: "D",
    StructureType.TRADING_HOUSE: "H",
    StructureType.TEMPLE: "T",
    StructureType.STRONGHOLD: "S",
    StructureType.SANCTUARY: "A",
}

STANDARD_LAYOUT = [
    "F D P L M W S F D",
    "P ~ ~ F D ~ L P M",
    "S L ~ W P ~ ~ F W",
    "D F M ~ ~ S L ~ P",
    "L W S D F M P D L",
]

# (row offset, column offset) per row parity
_EVEN_ROW_NEIGHBORS = [(0, -1), (0, 1), (-1, -1), (-1, 0), (1, -1), (1, 0)]
_ODD_ROW_NEIGHBORS = [(0, -1), (0, 1), (-1, 0), (-1, 1), (1, 0), (1, 1)]


def parse_layout(rows: list[str]) -> list[list[TerrainType]]:
    """Parse layout rows into terrain types."""
    grid = []
    for r, row in enumerate(rows):
        cells = []
        for code in row.split():
            if code not in TERRAIN_CODES:
                raise ValueError(f"Unknown terrain code {code!r} in row {r}")
            cells.append(TERRAIN_CODES[code])
        grid.append(cells)
    return grid


def board_from_layout(rows: list[str]) -> Board:
    """Build a board, wiring each hex to its (up to six) neighbours."""
    grid = parse_layout(rows)

    ids: dict[tuple[int, int], int] = {}
    next_id = 0
    for r, cells in enumerate(grid):
        for c in range(len(cells)):
            ids[(r, c)] = next_id
            next_id += 1

    board = Board()
    for (r, c), terrain_id in ids.items():
        offsets = _ODD_ROW_NEIGHBORS if r % 2 else _EVEN_ROW_NEIGHBORS
        neighbors = [
            ids[(r + dr, c + dc)]
            for dr, dc in offsets
            if (r + dr, c + dc) in ids
        ]
        board.terrains[terrain_id] = Terrain(
            terrain_id=terrain_id,
            terrain_type=grid[r][c],
            neighbors=neighbors,
        )
    return board


def shuffle_layout(rows: list[str], seed: int) -> list[str]:
    """Shuffle land hexes between positions; rivers stay where they are."""
    rng = random.Random(seed)
    grid = [row.split() for row in rows]
    land = [code for row in grid for code in row if code != "~"]
    rng.shuffle(land)

    it = iter(land)
    return [
        " ".join(code if code == "~" else next(it) for code in row)
        for row in grid
    ]


def create_standard_board(seed: int | None = None) -> Board:
    """Standard map; a seed shuffles the land hexes."""
    rows = STANDARD_LAYOUT if seed is None else shuffle_layout(STANDARD_LAYOUT, seed)
    return board_from_layout(rows)


def render_board(board: Board, columns: int = 9) -> str:
    """
    Render the board as text, one line per row.

    Each hex shows its id, terrain letter and, if built on, the
    structure letter and owner.
    """
    lines = []
    terrains = sorted(board.get_terrain_list(), key=lambda t: t.terrain_id)
    for start in range(0, len(terrains), columns):
        row_index = start // columns
        cells = []
        for terrain in terrains[start:start + columns]:
            cell = f"{terrain.terrain_id:>2}{TERRAIN_LETTERS[terrain.terrain_type]}"
            if terrain.structure:
                initial = STRUCTURE_LETTERS[terrain.structure.structure_type]
                cell += f"[{initial}:{terrain.structure.owner_id}]"
            cells.append(cell.ljust(10))
        indent = "     " if row_index % 2 else ""
        lines.append(indent + "".join(cells).rstrip())
    return "\n".join(lines)
