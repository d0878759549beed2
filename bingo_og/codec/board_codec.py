"""
Board codec contract and the bundled reference codec.

A board id is an opaque 12-character token. ``decode`` turns it into a
``BoardState``; the same id always yields the same state.
"""
import json
import random
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from ..exceptions import BoardDecodeError
from ..utils.debug import print_step

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
CENTER_INDEX = 12
PROMPT_COUNT = CELL_COUNT - 1
BOARD_ID_LENGTH = 12

# URL-safe base64 alphabet, 6 bits per character.
ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"
_ALPHABET_INDEX = {char: value for value, char in enumerate(ALPHABET)}

_MASK_BITS = CELL_COUNT
_SEED_BITS = BOARD_ID_LENGTH * 6 - _MASK_BITS
MAX_SEED = (1 << _SEED_BITS) - 1


@dataclass(frozen=True)
class BoardState:
    """Decoded board: 24 prompts, 25 checked flags, the checked count and a title."""

    prompts: Tuple[str, ...]
    checked_mask: Tuple[bool, ...]
    checked_count: int
    title: str

    def __post_init__(self):
        if len(self.prompts) != PROMPT_COUNT:
            raise BoardDecodeError(f"Expected {PROMPT_COUNT} prompts, got {len(self.prompts)}")
        if len(self.checked_mask) != CELL_COUNT:
            raise BoardDecodeError(f"Expected {CELL_COUNT} checked flags, got {len(self.checked_mask)}")
        expected = count_checked(self.checked_mask)
        if self.checked_count != expected:
            raise BoardDecodeError(
                f"checked_count {self.checked_count} does not match mask ({expected} checked)"
            )

    def is_checked(self, index: int) -> bool:
        return index != CENTER_INDEX and self.checked_mask[index]


def count_checked(mask: Sequence[bool]) -> int:
    """Count checked cells, ignoring the center."""
    return sum(1 for index, checked in enumerate(mask) if checked and index != CENTER_INDEX)


class BoardCodec(Protocol):
    """Anything that can turn a board id into a board state."""

    def decode(self, board_id: str) -> BoardState:
        ...


def load_decks(path: Optional[Path] = None) -> Dict[str, List[str]]:
    """
    Load prompt decks from a JSON file, or the bundled decks.

    Args:
        path: JSON file mapping deck title to a list of prompts

    Returns:
        Mapping of deck title to prompts

    Raises:
        ValueError: If any deck has fewer than 24 distinct prompts
    """
    if path is None:
        from .decks import DEFAULT_DECKS
        decks = DEFAULT_DECKS
    else:
        decks = json.loads(Path(path).read_text(encoding="utf-8"))
        print_step("Prompt Decks Loaded", {"path": str(path), "decks": len(decks)}, "input")

    if not decks:
        raise ValueError("At least one prompt deck is required")

    validated = {}
    for title, prompts in decks.items():
        prompts = [str(prompt) for prompt in prompts]
        if len(set(prompts)) < PROMPT_COUNT:
            raise ValueError(
                f"Deck '{title}' needs at least {PROMPT_COUNT} distinct prompts, has {len(set(prompts))}"
            )
        validated[str(title)] = prompts
    return validated


def _id_to_int(board_id: str) -> int:
    value = 0
    for position, char in enumerate(board_id):
        digit = _ALPHABET_INDEX.get(char)
        if digit is None:
            raise BoardDecodeError(f"Invalid character {char!r} at position {position} in board ID")
        value = (value << 6) | digit
    return value


def _int_to_id(value: int) -> str:
    chars = []
    for _ in range(BOARD_ID_LENGTH):
        chars.append(ALPHABET[value & 0x3F])
        value >>= 6
    return "".join(reversed(chars))


def encode_board_id(seed: int, checked: Iterable[int] = ()) -> str:
    """
    Build the board id for a seed and a set of checked grid positions.

    The center position is never stored as checked.
    """
    if not 0 <= seed <= MAX_SEED:
        raise ValueError(f"seed must be between 0 and {MAX_SEED}")

    mask = 0
    for index in checked:
        if not 0 <= index < CELL_COUNT:
            raise ValueError(f"Grid position out of range: {index}")
        if index != CENTER_INDEX:
            mask |= 1 << index
    return _int_to_id((seed << _MASK_BITS) | mask)


class SeededBoardCodec:
    """
    Reference codec: the low 25 bits of the id are the checked mask, the
    rest seed a deterministic deck choice and prompt shuffle.
    """

    def __init__(self, decks: Optional[Mapping[str, Sequence[str]]] = None):
        source = decks if decks is not None else load_decks()
        self._titles = sorted(source)
        self._decks = {title: list(source[title]) for title in self._titles}

    def decode(self, board_id: str) -> BoardState:
        if len(board_id) != BOARD_ID_LENGTH:
            raise BoardDecodeError(f"Board ID must be {BOARD_ID_LENGTH} characters, got {len(board_id)}")

        value = _id_to_int(board_id)
        mask_bits = value & ((1 << _MASK_BITS) - 1)
        seed = value >> _MASK_BITS

        checked_mask = tuple(
            bool((mask_bits >> index) & 1) and index != CENTER_INDEX
            for index in range(CELL_COUNT)
        )

        title = self._titles[seed % len(self._titles)]
        deck = list(dict.fromkeys(self._decks[title]))
        prompts = tuple(random.Random(seed).sample(deck, PROMPT_COUNT))

        return BoardState(
            prompts=prompts,
            checked_mask=checked_mask,
            checked_count=count_checked(checked_mask),
            title=title,
        )
